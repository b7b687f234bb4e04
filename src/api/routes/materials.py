"""Material catalog endpoints."""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_material_store, get_picture_store
from src.application.dto.requests import CreateMaterialRequest
from src.application.dto.responses import (
    ErrorResponse,
    MaterialListResponse,
    MaterialResponse,
)
from src.application.mappers import to_material_response
from src.core.entities.material import Material, MaterialCategory
from src.core.exceptions import MaterialNotFoundError, PictureSizeNotFoundError
from src.core.interfaces import IMaterialStore, IPictureStore

router = APIRouter(prefix="/api/materials", tags=["materials"])


@router.post(
    "",
    response_model=MaterialResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_material(
    request: CreateMaterialRequest,
    store: IMaterialStore = Depends(get_material_store),
    picture_store: IPictureStore = Depends(get_picture_store),
) -> MaterialResponse:
    """Add a material to the catalog."""
    if request.picture_size_id is not None:
        if await picture_store.get_size(request.picture_size_id) is None:
            raise PictureSizeNotFoundError(request.picture_size_id)

    material = await store.create_material(
        Material(
            name=request.name,
            unit=request.unit,
            category=request.category,
            picture_size_id=request.picture_size_id,
        )
    )
    return to_material_response(material)


@router.get("", response_model=MaterialListResponse)
async def list_materials(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    category: MaterialCategory | None = None,
    active_only: bool = True,
    store: IMaterialStore = Depends(get_material_store),
) -> MaterialListResponse:
    """List catalog materials, ordered by name."""
    materials = await store.list_materials(
        limit=limit,
        offset=offset,
        category=category,
        active_only=active_only,
    )
    return MaterialListResponse(
        materials=[to_material_response(m) for m in materials],
        total=len(materials),
    )


@router.get(
    "/{material_id}",
    response_model=MaterialResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_material(
    material_id: str,
    store: IMaterialStore = Depends(get_material_store),
) -> MaterialResponse:
    """Get a material by ID."""
    material = await store.get_material(material_id)
    if material is None:
        raise MaterialNotFoundError(material_id)
    return to_material_response(material)


@router.delete(
    "/{material_id}",
    response_model=MaterialResponse,
    responses={404: {"model": ErrorResponse}},
)
async def deactivate_material(
    material_id: str,
    store: IMaterialStore = Depends(get_material_store),
) -> MaterialResponse:
    """
    Deactivate a material.

    Stock and movement history are kept; the material just drops out of
    stock lists and BOM generation.
    """
    material = await store.deactivate_material(material_id)
    if material is None:
        raise MaterialNotFoundError(material_id)
    return to_material_response(material)
