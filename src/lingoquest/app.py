import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI

from .config import settings
from .database import init_db
from .errors import LoadError
from .globals import vocab_store
from .log_handler import SQLiteHandler
from .router import router

logger = logging.getLogger("lingoquest")


# --- Logging Setup ---
def setup_logging():
    logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    for handler in list(logger.handlers):
        if isinstance(handler, (RotatingFileHandler, SQLiteHandler)):
            logger.removeHandler(handler)
            handler.close()

    if not os.path.exists(settings.LOG_DIR):
        os.makedirs(settings.LOG_DIR, exist_ok=True)
    log_path = os.path.join(settings.LOG_DIR, settings.LOG_FILE)
    file_handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=3)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(file_handler)

    if settings.EVENT_LOG_ENABLED:
        init_db()
        event_handler = SQLiteHandler()
        event_handler.setLevel(logging.INFO)
        event_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(event_handler)

    # Also configure root logger to see logs from other libraries
    logging.basicConfig(level=logging.INFO)


# --- Lifecycle ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await vocab_store.load(settings.VOCAB_SOURCE)
    except LoadError as e:
        logger.error(f"Starting without vocabulary: {e}")
    yield


# --- App Factory ---
def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(
        title=settings.PROJECT_NAME,
        debug=settings.DEBUG,
        lifespan=lifespan,
        root_path=settings.ROOT_PATH,
    )

    app.include_router(router)

    return app
