"""
Shared lookups for the center management routers.
"""

from datetime import datetime, timezone
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING, ReturnDocument
from typing import Any, Dict, Iterable, List, Optional

from careadmin.shared.database import is_object_id, parse_object_id
from careadmin.shared.exceptions import NotFoundError


async def find_or_404(
    collection: AsyncIOMotorCollection,
    record_id: str,
    invalid_message: str,
    not_found_message: str,
) -> Dict[str, Any]:
    """
    Load one document by id.

    Raises:
        InvalidIdError: For malformed ids
        NotFoundError: When no document matches
    """
    doc = await collection.find_one({"_id": parse_object_id(record_id, invalid_message)})
    if not doc:
        raise NotFoundError(not_found_message)
    return doc


async def find_optional(collection: AsyncIOMotorCollection, record_id: Optional[str]) -> Optional[Dict[str, Any]]:
    """Load a referenced document, tolerating empty or dangling references."""
    if not is_object_id(record_id):
        return None
    return await collection.find_one({"_id": parse_object_id(record_id)})


async def find_sorted(
    collection: AsyncIOMotorCollection,
    query: Optional[Dict[str, Any]] = None,
    sort_key: str = "sort_order",
    limit: int = 0,
) -> List[Dict[str, Any]]:
    cursor = collection.find(query or {}).sort(sort_key, ASCENDING)
    if limit:
        cursor = cursor.limit(limit)
    return await cursor.to_list(None)


async def find_by_ids(collection: AsyncIOMotorCollection, ids: Iterable[str], sort_key: str = "_id") -> List[Dict[str, Any]]:
    object_ids = [parse_object_id(i) for i in ids if is_object_id(i)]
    if not object_ids:
        return []
    return await find_sorted(collection, {"_id": {"$in": object_ids}}, sort_key=sort_key)


async def update_or_404(
    collection: AsyncIOMotorCollection,
    record_id: str,
    changes: Dict[str, Any],
    invalid_message: str,
    not_found_message: str,
) -> Dict[str, Any]:
    """
    Apply a $set update and return the updated document.

    An empty change set returns the stored document untouched.
    """
    if not changes:
        return await find_or_404(collection, record_id, invalid_message, not_found_message)
    doc = await collection.find_one_and_update(
        {"_id": parse_object_id(record_id, invalid_message)},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise NotFoundError(not_found_message)
    return doc


async def insert(collection: AsyncIOMotorCollection, document: Dict[str, Any]) -> Dict[str, Any]:
    result = await collection.insert_one(document)
    document["_id"] = result.inserted_id
    return document


def stamp(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Set updated_at on a content write."""
    changes["updated_at"] = datetime.now(timezone.utc)
    return changes
