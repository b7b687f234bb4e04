"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.
"""

from src.application.dto.requests import (
    AddStockRequest,
    AdjustStockRequest,
    CreateMaterialRequest,
    CreatePictureRequest,
    CreatePictureSizeRequest,
    GenerateBomRequest,
    RecalculateCostsRequest,
    RecordPurchaseRequest,
    ReferenceRequest,
    RemoveStockRequest,
    SetBomLineRequest,
    SetMinLevelRequest,
)
from src.application.dto.responses import (
    AvailabilityResponse,
    BomLineResponse,
    BomResponse,
    ComponentHealthResponse,
    CostLineResponse,
    CostResponse,
    CostStatsResponse,
    CreatePictureResponse,
    ErrorResponse,
    HealthResponse,
    LowStockListResponse,
    MaterialListResponse,
    MaterialResponse,
    MovementListResponse,
    MovementResponse,
    PictureResponse,
    PictureSizeResponse,
    PriceRecommendationResponse,
    ProfitResponse,
    PurchaseListResponse,
    PurchaseRecordedResponse,
    PurchaseResponse,
    RecalculationResponse,
    ShortageResponse,
    StockChangeResponse,
    StockLevelResponse,
    StockListResponse,
    StockResponse,
    TypeCostStatsResponse,
    WarehouseStatsResponse,
)

__all__ = [
    # Requests
    "AddStockRequest",
    "AdjustStockRequest",
    "CreateMaterialRequest",
    "CreatePictureRequest",
    "CreatePictureSizeRequest",
    "GenerateBomRequest",
    "RecalculateCostsRequest",
    "RecordPurchaseRequest",
    "ReferenceRequest",
    "RemoveStockRequest",
    "SetBomLineRequest",
    "SetMinLevelRequest",
    # Responses
    "AvailabilityResponse",
    "BomLineResponse",
    "BomResponse",
    "ComponentHealthResponse",
    "CostLineResponse",
    "CostResponse",
    "CostStatsResponse",
    "CreatePictureResponse",
    "ErrorResponse",
    "HealthResponse",
    "LowStockListResponse",
    "MaterialListResponse",
    "MaterialResponse",
    "MovementListResponse",
    "MovementResponse",
    "PictureResponse",
    "PictureSizeResponse",
    "PriceRecommendationResponse",
    "ProfitResponse",
    "PurchaseListResponse",
    "PurchaseRecordedResponse",
    "PurchaseResponse",
    "RecalculationResponse",
    "ShortageResponse",
    "StockChangeResponse",
    "StockLevelResponse",
    "StockListResponse",
    "StockResponse",
    "TypeCostStatsResponse",
    "WarehouseStatsResponse",
]
