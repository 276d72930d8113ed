# app/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import Session

from app.data.models import CategoryModel, ProductModel
from app.utils.logging import get_logger

logger = get_logger(__name__)

CATALOG = {
    "Peripherals": [
        ("Keyboard", "199.99", "Mechanical keyboard, brown switches"),
        ("Mouse", "49.50", "Wireless optical mouse"),
        ("Headset", "149.00", "Closed-back headset with microphone"),
    ],
    "Displays": [
        ("Monitor 24\"", "899.00", "24 inch IPS panel, 1080p"),
        ("Monitor 27\"", "1299.00", "27 inch IPS panel, 1440p"),
        ("Monitor arm", "229.00", "Single gas spring arm"),
    ],
}


def seed(db: Session) -> int:
    """Seeduje katalog tylko jesli jest pusty. Zwraca liczbe dodanych produktow."""
    if db.query(CategoryModel).first():
        return 0

    added = 0
    for category_name, products in CATALOG.items():
        category = CategoryModel(name=category_name)
        db.add(category)
        db.flush()

        for title, price, description in products:
            db.add(
                ProductModel(
                    category_id=category.id,
                    title=title,
                    price=Decimal(price),
                    description=description,
                    availability=True,
                )
            )
            added += 1

    db.commit()
    logger.info(f"Seeded catalog with {added} products")
    return added
