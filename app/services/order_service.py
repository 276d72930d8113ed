# app/services/order_service.py
from decimal import Decimal
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel, OrderStatus
from app.data.models.order_line import OrderLineModel
from app.domain.errors import (
    Conflict,
    InvalidState,
    NotFound,
    ERROR_EMPTY_CART,
    ERROR_ORDER_NOT_FOUND,
)
from app.domain.schemas import OrderCreatedOut, OrderLineOut, OrderOut, ProductOut
from app.repos.cart_repo import CartRepo
from app.repos.order_repo import OrderRepo
from app.services.lock_service import LockService
from app.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.
    Separacja od CartService, ale ta sama sesja: zamowienie i czyszczenie
    koszyka commitowane razem.
    """

    def __init__(self, db: Session, lock_service: LockService):
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.lock_service = lock_service

    def place_order(self, user_id: int) -> OrderCreatedOut:
        """
        Use Case: Tworzenie zamówienia z koszyka.

        1. Pobiera koszyk usera (pod lockiem)
        2. Pusty koszyk -> InvalidState, nic nie zapisujemy
        3. Tworzy zamówienie ze snapshotem pozycji (ilosc + cena)
        4. Czysci koszyk (wiersz koszyka zostaje)
        5. Jeden commit dla 3 i 4
        """
        cart = self.cart_repo.get_cart_by_user(user_id)
        if not cart:
            raise InvalidState(ERROR_EMPTY_CART)

        with self.lock_service.cart_lock(user_id):
            try:
                self.cart_repo.refresh(cart)

                items = self.cart_repo.get_cart_items(cart.id)
                if not items:
                    raise InvalidState(ERROR_EMPTY_CART)

                lines = [
                    OrderLineModel(
                        product_id=i.product_id,
                        quantity=i.quantity,
                        unit_price=i.product.price,
                    )
                    for i in items
                ]
                total = sum((line.unit_price * line.quantity for line in lines), Decimal("0.00"))

                order = self.repo.add_order(
                    OrderModel(
                        user_id=user_id,
                        status=OrderStatus.PENDING.value,
                        total=total,
                        lines=lines,
                    )
                )

                self.cart_repo.clear_cart(cart.id)

                rowcount = self.cart_repo.update_cart_version(
                    cart_id=cart.id,
                    old_version=cart.version,
                    new_data={"version": cart.version + 1},
                )
                if rowcount == 0:
                    raise Conflict("Cart was modified by another request, retry the operation")

                self.cart_repo.commit()
            except Exception:
                self.cart_repo.rollback()
                raise

        logger.info(
            f"Order {order.id} created from cart {cart.id} "
            f"({len(lines)} lines, total {total})"
        )

        return OrderCreatedOut(order_id=order.id, status=order.status)

    def list_orders(self, user_id: int) -> list[OrderOut]:
        return [self._to_out(o) for o in self.repo.list_orders_for_user(user_id)]

    def get_order(self, user_id: int, order_id: int) -> OrderOut:
        """
        Use Case: Pobranie zamówienia (Query).
        Cudze zamowienie wyglada tak samo jak nieistniejace.
        """
        order = self.repo.get_order_for_user(order_id, user_id)

        if not order:
            raise NotFound(ERROR_ORDER_NOT_FOUND)

        return self._to_out(order)

    @staticmethod
    def _to_out(order: OrderModel) -> OrderOut:
        return OrderOut(
            id=order.id,
            user_id=order.user_id,
            status=order.status,
            total=order.total,
            created_at=order.created_at,
            lines=[
                OrderLineOut(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    product=ProductOut.model_validate(line.product),
                )
                for line in order.lines
            ],
        )
