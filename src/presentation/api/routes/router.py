from fastapi import APIRouter

from .accounts import account_router
from .catalog import catalog_router
from .health import health_router
from .movements import movement_router
from .plans import plan_router
from .stock import stock_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(account_router, tags=["Accounts"])
router.include_router(movement_router, tags=["Movements"])
router.include_router(plan_router, tags=["Plans"])
router.include_router(catalog_router)
router.include_router(stock_router, tags=["Stock"])
