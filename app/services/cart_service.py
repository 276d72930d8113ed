from decimal import Decimal
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.domain.errors import (
    AuthError,
    Conflict,
    InvalidState,
    NotFound,
    ValidationError,
    ERROR_PRODUCT_NOT_FOUND,
    ERROR_UNAUTHORIZED,
)
from app.domain.schemas import CartItemOut, CartOut, ProductOut
from app.repos.cart_repo import CartRepo
from app.repos.catalog_repo import CatalogRepo
from app.services.lock_service import LockService
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Prosta implementacja cqrs i proste use case dla domeny cart
    commands (add, update, remove) modyfikuja stan
    query (view) tylko odczyt

    Koszyk zawsze szukany po user_id z tokena, nigdy po id z requestu.
    """

    def __init__(self, db: Session, lock_service: LockService):
        self.repo = CartRepo(db)
        self.catalog = CatalogRepo(db)
        self.lock_service = lock_service

    #query - odczyt
    def view_cart(self, user_id: int) -> CartOut:
        cart = self.get_or_create_cart(user_id)
        return self._to_out(cart)

    #commands
    def get_or_create_cart(self, user_id: int) -> CartModel:
        existing = self.repo.get_cart_by_user(user_id)
        if existing:
            return existing

        try:
            created = self.repo.create_cart(CartModel(user_id=user_id, version=1))
        except IntegrityError:
            #inny request utworzyl koszyk w miedzyczasie (unique user_id)
            self.repo.rollback()
            existing = self.repo.get_cart_by_user(user_id)
            if existing is None:
                #nie bylo wyscigu, user z tokena nie istnieje (FK users.id)
                logger.warning(f"Token wskazuje na nieistniejacego użytkownika {user_id}")
                raise AuthError(ERROR_UNAUTHORIZED)
            return existing

        logger.info(f"Utworzono nowy koszyk {created.id} dla użytkownika {user_id}")
        return created

    def add_item(self, user_id: int, product_id: int, quantity: int) -> CartOut:
        """
        Upsert pozycji: ilosc jest zastepowana, nie dodawana.

        Walidacja:
        - quantity > 0
        - produkt istnieje w katalogu i jest dostepny

        Współbieżność:
        - lock per user (redis)
        - optimistic locking (version)
        """
        if quantity <= 0:
            raise ValidationError("Quantity must be at least 1")

        product = self.catalog.get_product(product_id)
        if not product:
            raise NotFound(ERROR_PRODUCT_NOT_FOUND)

        if not product.availability:
            raise InvalidState("Product is not available")

        cart = self.get_or_create_cart(user_id)

        with self.lock_service.cart_lock(user_id):
            try:
                #swieza wersja z bazy, juz pod lockiem
                self.repo.refresh(cart)

                existing_item = self.repo.get_cart_item(cart.id, product_id)
                if existing_item:
                    logger.info(
                        f"Produkt {product_id} już jest w koszyku {cart.id}, ilosc "
                        f"{existing_item.quantity} -> {quantity}"
                    )
                    existing_item.quantity = quantity
                    self.repo.add_cart_item(existing_item)
                else:
                    logger.info(f"Dodaje nowy produkt {product_id} do koszyka {cart.id}")
                    self.repo.add_cart_item(
                        CartItemModel(cart_id=cart.id, product_id=product_id, quantity=quantity)
                    )

                self._bump_version(cart)
                self.repo.commit()
            except Exception:
                self.repo.rollback()
                raise

        return self.view_cart(user_id)

    def update_item(self, user_id: int, product_id: int, quantity: int) -> CartOut:
        return self.add_item(user_id, product_id, quantity)

    def remove_item(self, user_id: int, product_id: int) -> CartOut:
        cart = self.get_or_create_cart(user_id)

        with self.lock_service.cart_lock(user_id):
            try:
                self.repo.refresh(cart)

                #brak pozycji to nie blad
                if self.repo.delete_cart_item(cart.id, product_id):
                    self._bump_version(cart)
                    logger.info(f"Produkt {product_id} usunięty z koszyka {cart.id}")

                self.repo.commit()
            except Exception:
                self.repo.rollback()
                raise

        return self.view_cart(user_id)

    def _bump_version(self, cart: CartModel) -> None:
        rowcount = self.repo.update_cart_version(
            cart_id=cart.id,
            old_version=cart.version,
            new_data={"version": cart.version + 1},
        )

        #np. lock wygasl i inny request zdazyl zapisac
        if rowcount == 0:
            raise Conflict(
                "Cart was modified by another request, retry the operation"
            )

    def _to_out(self, cart: CartModel) -> CartOut:
        items = self.repo.get_cart_items(cart.id)
        total = sum((i.product.price * i.quantity for i in items), Decimal("0.00"))

        return CartOut(
            cart_id=cart.id,
            user_id=cart.user_id,
            items=[
                CartItemOut(
                    product_id=i.product_id,
                    quantity=i.quantity,
                    product=ProductOut.model_validate(i.product),
                )
                for i in items
            ],
            total=total,
        )
