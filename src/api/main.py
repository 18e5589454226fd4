"""FastAPI application entry point.

Run locally with:
    PYTHONPATH=src uvicorn api.main:app --reload
"""

import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Must run before importing modules that read env vars (token service, MongoDB)
load_dotenv()

# main.py is at <root>/src/api/main.py
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.routes import auth, health, notifications, products, settings
from utils.logging import setup_structured_logging
from adapter.mongodb.connection import close_client, get_database
from adapter.mongodb.indexes import ensure_all_indexes

setup_structured_logging()

logger = logging.getLogger(__name__)

with open(_src_path.parent / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "ShopNet API"


def cors_settings(value: str) -> tuple[list[str], bool]:
    """Parse CORS_ORIGINS into (origins, allow_credentials).

    Browsers reject credentials with a wildcard origin, so credentials are
    only enabled for an explicit origin list.
    """
    if value.strip() == "*":
        return ["*"], False
    origins = [origin.strip() for origin in value.split(",") if origin.strip()]
    return origins, True


@asynccontextmanager
async def lifespan(app: FastAPI):
    db = get_database()
    if db is None:
        logger.warning("MongoDB unavailable, skipping index creation")
    elif ensure_all_indexes(db):
        logger.info("MongoDB indexes verified/created successfully")
    else:
        logger.warning("Failed to create some MongoDB indexes")

    yield

    close_client()


app = FastAPI(
    title=SERVICE_NAME,
    description="Marketplace API: accounts, onboarding, products, notifications and settings",
    version=VERSION,
    lifespan=lifespan,
)

cors_origins, allow_credentials = cors_settings(os.getenv("CORS_ORIGINS", "*"))
if allow_credentials:
    logger.info(f"CORS configured with specific origins: {cors_origins}")
else:
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://shop.example.com')"
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in (auth, products, notifications, settings, health):
    app.include_router(module.router)


@app.get("/")
async def root():
    return {"service": SERVICE_NAME, "version": VERSION, "status": "running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8000)), access_log=False)
