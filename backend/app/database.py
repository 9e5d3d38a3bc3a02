import logging

from fastapi import Request
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.server_api import ServerApi

from app.config import settings

logger = logging.getLogger("app")


def create_client(uri: str | None = None) -> MongoClient:
    return MongoClient(
        uri or settings.database_uri,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
    )


def connect(client: MongoClient) -> Collection:
    """Ping the deployment and return the job collection."""
    client.admin.command("ping")
    logger.info("Database connection established!")
    return client[settings.database_name][settings.job_collection]


def close(client: MongoClient):
    client.close()
    logger.info("Database connection closed.")


def get_job_collection(request: Request) -> Collection:
    return request.app.state.job_collection
