"""
Movement recorder service.

The only legitimate way to change a stock quantity. Each operation
validates its input before touching storage, then hands a single
movement to the inventory store, which applies the ledger update and the
movement insert in one transaction.
"""

import math

from src.config import get_logger
from src.core.entities.inventory import (
    MaterialMovement,
    MovementReference,
    MovementType,
    ReferenceType,
)
from src.core.entities.picture import PictureMaterial
from src.core.exceptions import (
    ConfigurationError,
    MaterialNotFoundError,
    PictureNotFoundError,
    ValidationError,
)
from src.core.interfaces.inventory_store import IInventoryStore, StockChange
from src.core.interfaces.material_store import IMaterialStore
from src.core.interfaces.picture_store import IPictureStore

logger = get_logger(__name__)


def _validate_positive(field: str, value: float) -> None:
    if value is None or not math.isfinite(value) or value <= 0:
        raise ValidationError(field, "must be greater than 0", value)


def _validate_limit(limit: int) -> None:
    if limit <= 0:
        raise ValidationError("limit", "must be greater than 0", limit)


class MovementRecorder:
    """Records IN, OUT and ADJUSTMENT movements against the stock ledger."""

    def __init__(
        self,
        inventory_store: IInventoryStore,
        material_store: IMaterialStore,
        picture_store: IPictureStore | None = None,
        default_limit: int = 50,
        default_all_limit: int = 100,
    ) -> None:
        self._inventory_store = inventory_store
        self._material_store = material_store
        self._picture_store = picture_store
        self._default_limit = default_limit
        self._default_all_limit = default_all_limit

    async def _require_material(self, material_id: str) -> None:
        material = await self._material_store.get_material(material_id)
        if material is None:
            raise MaterialNotFoundError(material_id)

    async def add_material(
        self,
        material_id: str,
        quantity: float,
        reason: str,
        reference: MovementReference | None = None,
        notes: str | None = None,
    ) -> StockChange:
        """Receive material into stock (IN movement)."""
        _validate_positive("quantity", quantity)
        await self._require_material(material_id)

        movement = MaterialMovement(
            material_id=material_id,
            movement_type=MovementType.IN,
            quantity=quantity,
            reason=reason,
            reference_id=reference.id if reference else None,
            reference_type=reference.type if reference else None,
            notes=notes,
        )
        change = await self._inventory_store.apply_movement(movement, create_stock=True)

        logger.info(
            "stock_added",
            material_id=material_id,
            quantity=quantity,
            new_quantity=change.new_quantity,
            movement_id=change.movement.id,
        )
        return change

    async def remove_material(
        self,
        material_id: str,
        quantity: float,
        reason: str,
        reference: MovementReference | None = None,
        notes: str | None = None,
    ) -> StockChange:
        """
        Take material out of stock (OUT movement).

        The ledger may go below zero; the returned change is flagged
        is_negative and the event is logged as a warning.
        """
        _validate_positive("quantity", quantity)
        await self._require_material(material_id)

        movement = MaterialMovement(
            material_id=material_id,
            movement_type=MovementType.OUT,
            quantity=quantity,
            reason=reason,
            reference_id=reference.id if reference else None,
            reference_type=reference.type if reference else None,
            notes=notes,
        )
        change = await self._inventory_store.apply_movement(movement, create_stock=False)

        logger.info(
            "stock_removed",
            material_id=material_id,
            quantity=quantity,
            new_quantity=change.new_quantity,
            movement_id=change.movement.id,
        )
        if change.is_negative:
            logger.warning(
                "negative_stock_warning",
                material_id=material_id,
                quantity=change.new_quantity,
                reason=reason,
            )
        return change

    async def adjust_stock(
        self,
        material_id: str,
        new_quantity: float,
        reason: str,
        notes: str | None = None,
    ) -> StockChange:
        """
        Set the ledger to an absolute quantity (ADJUSTMENT movement).

        The movement stores the signed delta, never the absolute value.
        """
        if new_quantity is None or not math.isfinite(new_quantity) or new_quantity < 0:
            raise ValidationError("new_quantity", "must be a number >= 0", new_quantity)
        await self._require_material(material_id)

        movement = MaterialMovement(
            material_id=material_id,
            movement_type=MovementType.ADJUSTMENT,
            quantity=0.0,  # replaced by the delta inside the transaction
            reason=reason,
            reference_type=ReferenceType.MANUAL,
            notes=notes,
        )
        change = await self._inventory_store.apply_movement(
            movement, target_quantity=new_quantity, create_stock=True
        )

        logger.info(
            "stock_adjusted",
            material_id=material_id,
            old_quantity=change.previous_quantity,
            new_quantity=change.new_quantity,
            difference=change.movement.quantity,
            movement_id=change.movement.id,
        )
        return change

    async def list_movements(
        self, material_id: str, limit: int | None = None
    ) -> list[MaterialMovement]:
        """Movements of one material, newest first."""
        limit = self._default_limit if limit is None else limit
        _validate_limit(limit)
        await self._require_material(material_id)
        return await self._inventory_store.list_movements(material_id, limit=limit)

    async def list_all_movements(self, limit: int | None = None) -> list[MaterialMovement]:
        """Movements across all materials, newest first."""
        limit = self._default_all_limit if limit is None else limit
        _validate_limit(limit)
        return await self._inventory_store.list_all_movements(limit=limit)

    async def consume_for_picture(
        self, picture_id: str, reason: str = "Picture production"
    ) -> list[StockChange]:
        """
        Write off every BOM line of a picture.

        Each line is its own transaction; a failure leaves earlier lines
        applied and propagates to the caller.
        """
        lines = await self._picture_bom(picture_id)
        reference = MovementReference(id=picture_id, type=ReferenceType.PICTURE)
        changes = [
            await self.remove_material(line.material_id, line.quantity, reason, reference)
            for line in lines
        ]
        logger.info(
            "picture_materials_consumed",
            picture_id=picture_id,
            lines=len(changes),
            negative=sum(1 for c in changes if c.is_negative),
        )
        return changes

    async def return_for_picture(
        self, picture_id: str, reason: str = "Picture cancelled"
    ) -> list[StockChange]:
        """Put every BOM line of a picture back into stock."""
        lines = await self._picture_bom(picture_id)
        reference = MovementReference(id=picture_id, type=ReferenceType.PICTURE)
        changes = [
            await self.add_material(line.material_id, line.quantity, reason, reference)
            for line in lines
        ]
        logger.info("picture_materials_returned", picture_id=picture_id, lines=len(changes))
        return changes

    async def _picture_bom(self, picture_id: str) -> list[PictureMaterial]:
        if self._picture_store is None:
            raise ConfigurationError("MovementRecorder was built without a picture store")
        picture = await self._picture_store.get_picture(picture_id)
        if picture is None:
            raise PictureNotFoundError(picture_id)
        return await self._picture_store.get_bom(picture_id)
