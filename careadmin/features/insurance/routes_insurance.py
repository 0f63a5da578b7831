"""
Insurance Provider API - Carousel Provider Management

This module provides FastAPI routes for managing the insurance providers
displayed on the public site. Reads are public; every mutation requires an
authenticated session.

Features:
--------
1. Provider Listing:
   - Active providers only
   - Ordered by sort order
   - Single provider lookup

2. Provider Management:
   - Creation
   - Partial updates
   - Deletion

Data Model:
----------
Provider Structure:
- Basic: ID, name, description
- Media: logoUrl (from /api/center/insurance-logo), websiteUrl
- Display: sortOrder, isActive

Security:
--------
- Session gate on mutations
- Input validation
- ObjectId validation

Dependencies:
-----------
- FastAPI: Web framework
- MongoDB Motor: Data storage
- Pydantic: Validation

Author: Care Admin Development Team
"""

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument
from typing import List
import logging

from careadmin.shared.auth import GatedRoute, require_auth
from careadmin.shared.database import INSURANCE_PROVIDERS, get_database, parse_object_id
from careadmin.shared.exceptions import NotFoundError
from .models import InsuranceProvider, InsuranceProviderCreate, InsuranceProviderUpdate

router = APIRouter(prefix="/api/center/insurance-providers", tags=["insurance-providers"], route_class=GatedRoute)
logger = logging.getLogger(__name__)

INVALID_PROVIDER_ID = "Invalid provider ID"
PROVIDER_NOT_FOUND = "Provider not found"


@router.get("", response_model=List[InsuranceProvider])
async def list_insurance_providers(db: AsyncIOMotorDatabase = Depends(get_database)):
    """
    Retrieve all active providers.

    Returns:
        list: Active providers ordered by sortOrder
    """
    cursor = db[INSURANCE_PROVIDERS].find({"is_active": True}).sort("sort_order", ASCENDING)
    providers = await cursor.to_list(None)
    return [InsuranceProvider.from_document(p) for p in providers]


@router.get("/{provider_id}", response_model=InsuranceProvider)
async def get_insurance_provider(provider_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """
    Retrieve a single provider.

    Raises:
        InvalidIdError: For malformed ids
        NotFoundError: When the provider does not exist
    """
    oid = parse_object_id(provider_id, INVALID_PROVIDER_ID)
    provider = await db[INSURANCE_PROVIDERS].find_one({"_id": oid})
    if not provider:
        raise NotFoundError(PROVIDER_NOT_FOUND)
    return InsuranceProvider.from_document(provider)


@router.post(
    "",
    response_model=InsuranceProvider,
    status_code=201,
    dependencies=[Depends(require_auth)],
)
async def create_insurance_provider(
    provider: InsuranceProviderCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    document = provider.to_document()
    result = await db[INSURANCE_PROVIDERS].insert_one(document)
    document["_id"] = result.inserted_id
    logger.info(f"Created insurance provider {provider.name!r} ({result.inserted_id})")
    return InsuranceProvider.from_document(document)


@router.patch(
    "/{provider_id}",
    response_model=InsuranceProvider,
    dependencies=[Depends(require_auth)],
)
async def update_insurance_provider(
    provider_id: str,
    updates: InsuranceProviderUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Apply a partial update.

    Notes:
        - Only fields present in the body change
        - Empty body returns the provider unchanged
    """
    oid = parse_object_id(provider_id, INVALID_PROVIDER_ID)
    changes = updates.to_document(exclude_unset=True)
    if changes:
        provider = await db[INSURANCE_PROVIDERS].find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
    else:
        provider = await db[INSURANCE_PROVIDERS].find_one({"_id": oid})
    if not provider:
        raise NotFoundError(PROVIDER_NOT_FOUND)
    return InsuranceProvider.from_document(provider)


@router.delete("/{provider_id}", dependencies=[Depends(require_auth)])
async def delete_insurance_provider(provider_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    oid = parse_object_id(provider_id, INVALID_PROVIDER_ID)
    result = await db[INSURANCE_PROVIDERS].delete_one({"_id": oid})
    if result.deleted_count == 0:
        raise NotFoundError(PROVIDER_NOT_FOUND)
    logger.info(f"Deleted insurance provider {provider_id}")
    return {"success": True, "message": "Provider deleted successfully"}
