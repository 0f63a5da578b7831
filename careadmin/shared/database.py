"""
Database Module

This module manages the MongoDB connection and collections used by the
admin API.

Features:
- Connection management
- Collection access
- Database initialization
- ObjectId parsing
- Lifecycle management

Data Model:
- Users
- Insurance providers
- Locations
- Staff
- Treatments
- Location/treatment links
- Testimonials
- Site content

Security:
- Optional TLS
- Connection pooling
- Retry on startup

Dependencies:
- Motor for async MongoDB
- bson for ObjectId
- certifi for SSL

Author: Care Admin Development Team
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from bson import ObjectId
from bson.errors import InvalidId
import asyncio
import logging
from typing import Any, Dict, Optional
import certifi

from careadmin.shared import config
from careadmin.shared.exceptions import InvalidIdError

logger = logging.getLogger(__name__)

# Collection Names
USERS = "users"
INSURANCE_PROVIDERS = "insurance_providers"
LOCATIONS = "locations"
STAFF = "staff"
TREATMENTS = "treatments"
LOCATION_TREATMENTS = "location_treatments"
TESTIMONIALS = "testimonials"
SITE_CONTENT = "site_content"

# MongoDB Connection Settings
MONGO_SETTINGS: Dict[str, Any] = {
    "serverSelectionTimeoutMS": 10000,
    "connectTimeoutMS": 20000,
    "maxPoolSize": 100,
    "retryWrites": True,
}
if config.MONGODB_TLS:
    MONGO_SETTINGS.update({"tls": True, "tlsCAFile": certifi.where()})

# The client connects lazily, so creating it at import is cheap.
async_client = AsyncIOMotorClient(config.MONGODB_URL, **MONGO_SETTINGS)
db = async_client[config.MONGODB_DB]


def get_database() -> AsyncIOMotorDatabase:
    """FastAPI dependency returning the application database."""
    return db


def parse_object_id(value: str, message: str = "Invalid ID") -> ObjectId:
    """
    Convert a path parameter into an ObjectId.

    Args:
        value: Hex string from the request
        message: Client message when the value is malformed

    Returns:
        ObjectId: Parsed identifier

    Raises:
        InvalidIdError: For malformed identifiers
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise InvalidIdError(message)


def is_object_id(value: Optional[str]) -> bool:
    return value is not None and ObjectId.is_valid(value)


async def init_db(retry_count: int = 3, retry_delay: float = 5) -> bool:
    """
    Initialize database connection.

    Returns:
        bool: Connection status

    Notes:
        - Retries connection
        - Validates ping
        - Logs status
    """
    for attempt in range(retry_count):
        try:
            logger.info(f"Database initialization attempt {attempt + 1}/{retry_count}...")
            await async_client.admin.command("ping")
            logger.info("MongoDB ping successful")
            return True
        except Exception as e:
            logger.warning(f"Database connection attempt {attempt + 1} failed: {e}")
            if attempt < retry_count - 1:
                logger.info(f"Retrying in {retry_delay} seconds...")
                await asyncio.sleep(retry_delay)
    logger.error("All connection attempts failed")
    return False


def close_db() -> None:
    logger.info("Shutting down database connections...")
    async_client.close()


__all__ = [
    "async_client",
    "db",
    "get_database",
    "parse_object_id",
    "is_object_id",
    "init_db",
    "close_db",
    "USERS",
    "INSURANCE_PROVIDERS",
    "LOCATIONS",
    "STAFF",
    "TREATMENTS",
    "LOCATION_TREATMENTS",
    "TESTIMONIALS",
    "SITE_CONTENT",
]
