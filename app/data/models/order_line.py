from sqlalchemy import CheckConstraint, Column, Integer, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from app.data.database import Base


class OrderLineModel(Base):
    """Snapshot pozycji koszyka w momencie zlozenia zamowienia, niezalezny od pozniejszych zmian koszyka."""

    __tablename__ = "order_lines"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)

    order = relationship("OrderModel", back_populates="lines")
    product = relationship("ProductModel", lazy="joined")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_line_quantity"),
    )
