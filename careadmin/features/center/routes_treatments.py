"""
Treatments API - Treatment Program Management

This module provides FastAPI routes for the treatment programs offered by the
center.

Features:
--------
1. Program Listing:
   - All programs by name
   - Program detail with offering locations and testimonials

2. Program Management:
   - Creation with unique names
   - Updates
   - Deletion (drops location links, detaches testimonials)

Security:
--------
- Session gate on mutations
- ObjectId validation

Author: Care Admin Development Team
"""

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List, Optional
import logging

from careadmin.shared.auth import GatedRoute, require_auth
from careadmin.shared.database import LOCATION_TREATMENTS, LOCATIONS, TESTIMONIALS, TREATMENTS, get_database
from careadmin.shared.exceptions import ConflictError
from .models import Location, Testimonial, Treatment, TreatmentCreate, TreatmentDetail, TreatmentUpdate
from .queries import find_by_ids, find_or_404, find_sorted, insert, update_or_404

router = APIRouter(prefix="/api/center", tags=["treatments"], route_class=GatedRoute)
logger = logging.getLogger(__name__)

INVALID_TREATMENT_ID = "Invalid treatment ID"
TREATMENT_NOT_FOUND = "Treatment not found"
DUPLICATE_TREATMENT = "A treatment with this name already exists"


async def _ensure_unique_name(db: AsyncIOMotorDatabase, name: Optional[str], exclude_id=None) -> None:
    if name is None:
        return
    existing = await db[TREATMENTS].find_one({"name": name})
    if existing and existing["_id"] != exclude_id:
        raise ConflictError(DUPLICATE_TREATMENT)


@router.get("/treatments", response_model=List[Treatment])
async def list_treatments(db: AsyncIOMotorDatabase = Depends(get_database)):
    treatments = await find_sorted(db[TREATMENTS], sort_key="name")
    return [Treatment.from_document(t) for t in treatments]


@router.get("/treatments/{treatment_id}", response_model=TreatmentDetail)
async def get_treatment(treatment_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """
    Retrieve a treatment program with its related records.

    Returns:
        TreatmentDetail: Program plus offering locations and testimonials

    Raises:
        InvalidIdError: For malformed ids
        NotFoundError: When the program does not exist
    """
    treatment = await find_or_404(db[TREATMENTS], treatment_id, INVALID_TREATMENT_ID, TREATMENT_NOT_FOUND)

    links = await db[LOCATION_TREATMENTS].find({"treatment_id": treatment_id}).to_list(None)
    locations = await find_by_ids(db[LOCATIONS], [link["location_id"] for link in links], sort_key="sort_order")
    testimonials = await db[TESTIMONIALS].find({"treatment_id": treatment_id}).to_list(None)

    detail = Treatment.from_document(treatment).model_dump()
    detail.update(
        locations=[Location.from_document(loc) for loc in locations],
        testimonials=[Testimonial.from_document(t) for t in testimonials],
    )
    return TreatmentDetail.model_validate(detail)


@router.post("/treatments", response_model=Treatment, status_code=201, dependencies=[Depends(require_auth)])
async def create_treatment(treatment: TreatmentCreate, db: AsyncIOMotorDatabase = Depends(get_database)):
    await _ensure_unique_name(db, treatment.name)
    document = await insert(db[TREATMENTS], treatment.to_document())
    logger.info(f"Created treatment {treatment.name!r} ({document['_id']})")
    return Treatment.from_document(document)


@router.put("/treatments/{treatment_id}", response_model=Treatment, dependencies=[Depends(require_auth)])
async def update_treatment(
    treatment_id: str,
    updates: TreatmentUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    current = await find_or_404(db[TREATMENTS], treatment_id, INVALID_TREATMENT_ID, TREATMENT_NOT_FOUND)
    await _ensure_unique_name(db, updates.name, exclude_id=current["_id"])
    treatment = await update_or_404(
        db[TREATMENTS],
        treatment_id,
        updates.to_document(exclude_unset=True),
        INVALID_TREATMENT_ID,
        TREATMENT_NOT_FOUND,
    )
    return Treatment.from_document(treatment)


@router.delete("/treatments/{treatment_id}", dependencies=[Depends(require_auth)])
async def delete_treatment(treatment_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """
    Delete a treatment program.

    Notes:
        - Location links are removed
        - Testimonials are kept with treatmentId cleared
    """
    treatment = await find_or_404(db[TREATMENTS], treatment_id, INVALID_TREATMENT_ID, TREATMENT_NOT_FOUND)

    await db[LOCATION_TREATMENTS].delete_many({"treatment_id": treatment_id})
    await db[TESTIMONIALS].update_many({"treatment_id": treatment_id}, {"$set": {"treatment_id": None}})
    await db[TREATMENTS].delete_one({"_id": treatment["_id"]})

    logger.info(f"Deleted treatment {treatment_id}")
    return {"success": True}
