# app/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.context import current_user_id
from app.api.deps import get_lock_service
from app.data.database import get_db
from app.domain.schemas import OrderCreatedOut, OrderOut
from app.services.lock_service import LockService
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
) -> OrderService:
    return OrderService(db, lock_service)


@router.post("", response_model=OrderCreatedOut, status_code=201)
def place_order(
    user_id: int = Depends(current_user_id),
    svc: OrderService = Depends(get_service),
):
    """
    Tworzy zamówienie z koszyka i czysci koszyk.
    """
    return svc.place_order(user_id)


@router.get("", response_model=List[OrderOut])
def list_orders(
    user_id: int = Depends(current_user_id),
    svc: OrderService = Depends(get_service),
):
    return svc.list_orders(user_id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user_id: int = Depends(current_user_id),
    svc: OrderService = Depends(get_service),
):
    """
    Pobiera szczegóły zamówienia (tylko wlasne).
    """
    return svc.get_order(user_id, order_id)
