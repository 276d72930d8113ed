# app/main.py
import uvicorn

from app.api import create_app
from app.data.seed import seed
from app.utils.settings import SEED_CATALOG
from app.utils.logging import get_logger

logger = get_logger(__name__)

app = create_app()

if SEED_CATALOG:
    with app.state.session_factory() as db:
        seed(db)

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
