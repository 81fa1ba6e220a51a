# tradebook/routers/holding.py

from fastapi import APIRouter, Depends
from typing import List

from tradebook.dependencies import get_resource_guard
from tradebook.schemas.holding import HoldingRead
from tradebook.services.guard import ResourceGuard
from tradebook.services.holding import get_holdings

router = APIRouter(tags=["holdings"])


@router.get("/", response_model=List[HoldingRead])
def list_holdings(guard: ResourceGuard = Depends(get_resource_guard)):
    """
    Current positions derived from the caller's trades.
    """
    return get_holdings(guard)
