from contextlib import asynccontextmanager
from typing import AsyncIterator

import certifi
from fastapi import FastAPI
from mongoengine import connect, disconnect

from app.utils.config import Settings
from app.utils.logging import get_logger


logger = get_logger(__name__)


def init_mongo(settings: Settings) -> None:
    options = {"tz_aware": True}
    if settings.mongo_uri.startswith("mongodb+srv://"):
        options["tlsCAFile"] = certifi.where()
    connect(host=settings.mongo_uri, alias="default", **options)
    logger.info("Connected to MongoDB database %s", settings.mongo_db)


def close_mongo() -> None:
    disconnect(alias="default")
    logger.info("Disconnected from MongoDB")


@asynccontextmanager
async def mongo_lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_mongo(app.state.context.settings)
    try:
        yield
    finally:
        close_mongo()
