"""Application use cases."""

from src.application.use_cases.adjust_stock import AdjustStockUseCase
from src.application.use_cases.create_picture import CreatePictureResult, CreatePictureUseCase
from src.application.use_cases.issue_stock import IssueStockUseCase
from src.application.use_cases.receive_stock import ReceiveStockUseCase
from src.application.use_cases.record_purchase import RecordPurchaseResult, RecordPurchaseUseCase

__all__ = [
    "AdjustStockUseCase",
    "CreatePictureResult",
    "CreatePictureUseCase",
    "IssueStockUseCase",
    "ReceiveStockUseCase",
    "RecordPurchaseResult",
    "RecordPurchaseUseCase",
]
