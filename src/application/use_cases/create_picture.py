"""Create Picture Use Case: new picture plus its size-derived BOM."""

from dataclasses import dataclass

from src.application.dto.requests import CreatePictureRequest
from src.application.dto.responses import CreatePictureResponse
from src.application.mappers import bom_result_to_response, to_picture_response
from src.config import get_logger
from src.core.entities.picture import Picture
from src.core.exceptions import PictureSizeNotFoundError
from src.core.interfaces.picture_store import IPictureStore
from src.core.services import BomGenerator, BomResult

logger = get_logger(__name__)


@dataclass
class CreatePictureResult:
    """Result of creating a picture."""

    picture: Picture
    bom: BomResult | None = None


class CreatePictureUseCase:
    """Create a picture and fill its bill of materials."""

    def __init__(self, picture_store: IPictureStore, bom_generator: BomGenerator):
        self._picture_store = picture_store
        self._bom_generator = bom_generator

    async def execute(self, request: CreatePictureRequest) -> CreatePictureResult:
        """Execute create picture use case."""
        size = await self._picture_store.get_size(request.picture_size_id)
        if size is None:
            raise PictureSizeNotFoundError(request.picture_size_id)

        picture = await self._picture_store.create_picture(
            Picture(
                name=request.name,
                picture_type=request.picture_type,
                picture_size_id=request.picture_size_id,
                price=request.price,
                work_hours=request.work_hours,
            )
        )

        bom = None
        if request.generate_bom:
            bom = await self._bom_generator.generate_bom(picture.id)  # type: ignore[arg-type]

        logger.info(
            "create_picture_complete",
            picture_id=picture.id,
            size=size.name,
            bom_lines=len(bom.lines) if bom else 0,
        )
        return CreatePictureResult(picture=picture, bom=bom)

    def to_response(self, result: CreatePictureResult) -> CreatePictureResponse:
        """Convert result to API response."""
        return CreatePictureResponse(
            picture=to_picture_response(result.picture),
            bom=bom_result_to_response(result.bom) if result.bom else None,
        )
