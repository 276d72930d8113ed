#app/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.context import current_user_id
from app.api.deps import get_lock_service
from app.data.database import get_db
from app.domain.schemas import CartOut, ItemIn, QuantityIn
from app.services.cart_service import CartService
from app.services.lock_service import LockService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
) -> CartService:
    return CartService(db=db, lock_service=lock_service)


@router.post("", response_model=CartOut, status_code=201)
def add_item(
    payload: ItemIn,
    user_id: int = Depends(current_user_id),
    svc: CartService = Depends(get_service),
):
    return svc.add_item(user_id, payload.product_id, payload.quantity)


@router.get("", response_model=CartOut)
def view_cart(
    user_id: int = Depends(current_user_id),
    svc: CartService = Depends(get_service),
):
    return svc.view_cart(user_id)


@router.put("/{product_id}", response_model=CartOut)
def update_item(
    product_id: int,
    payload: QuantityIn,
    user_id: int = Depends(current_user_id),
    svc: CartService = Depends(get_service),
):
    return svc.update_item(user_id, product_id, payload.quantity)


@router.delete("/{product_id}", response_model=CartOut)
def remove_item(
    product_id: int,
    user_id: int = Depends(current_user_id),
    svc: CartService = Depends(get_service),
):
    return svc.remove_item(user_id, product_id)
