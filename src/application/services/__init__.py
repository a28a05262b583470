"""Application services (use cases)."""

from .account_service import AccountService
from .card_service import CardService
from .catalog_service import CatalogService
from .movement_service import MovementService
from .plan_service import PlanService
from .statement_service import StatementService
from .stock_service import StockService

__all__ = [
    "AccountService",
    "CardService",
    "CatalogService",
    "MovementService",
    "PlanService",
    "StatementService",
    "StockService",
]
