# run.py

import logging
import os

import uvicorn
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from deebank_admin.db import engine

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Silence SQLAlchemy noisy logs
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.dialects").setLevel(logging.WARNING)


def check_db() -> bool:
    """The backend owns the schema; only verify it can be reached."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except OperationalError as e:
        logger.error(f"Database connection failed: {e}")
        return False


port = int(os.environ.get("PORT", 8000))

if __name__ == "__main__":
    if not check_db():
        logger.warning("Starting server without a reachable database...")

    logger.info(f"Starting FastAPI server on port {port}...")
    uvicorn.run(
        "deebank_admin.main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        log_level="info"
    )
