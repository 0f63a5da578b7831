"""
Testimonials API

Routes for patient and family testimonials, optionally tied to a location and
a treatment program.

Author: Care Admin Development Team
"""

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List
import logging

from careadmin.shared.auth import GatedRoute, require_auth
from careadmin.shared.database import LOCATIONS, TESTIMONIALS, TREATMENTS, get_database
from .models import Location, Testimonial, TestimonialCreate, TestimonialDetail, TestimonialUpdate, Treatment
from .queries import find_optional, find_or_404, insert, update_or_404

router = APIRouter(prefix="/api/center", tags=["testimonials"], route_class=GatedRoute)
logger = logging.getLogger(__name__)

INVALID_TESTIMONIAL_ID = "Invalid testimonial ID"
TESTIMONIAL_NOT_FOUND = "Testimonial not found"


@router.get("/testimonials", response_model=List[Testimonial])
async def list_testimonials(db: AsyncIOMotorDatabase = Depends(get_database)):
    testimonials = await db[TESTIMONIALS].find({}).to_list(None)
    return [Testimonial.from_document(t) for t in testimonials]


@router.get("/testimonials/{testimonial_id}", response_model=TestimonialDetail)
async def get_testimonial(testimonial_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Retrieve a testimonial with its location and treatment, when set."""
    testimonial = await find_or_404(db[TESTIMONIALS], testimonial_id, INVALID_TESTIMONIAL_ID, TESTIMONIAL_NOT_FOUND)
    location = await find_optional(db[LOCATIONS], testimonial.get("location_id"))
    treatment = await find_optional(db[TREATMENTS], testimonial.get("treatment_id"))

    detail = Testimonial.from_document(testimonial).model_dump()
    detail["location"] = Location.from_document(location) if location else None
    detail["treatment"] = Treatment.from_document(treatment) if treatment else None
    return TestimonialDetail.model_validate(detail)


@router.post("/testimonials", response_model=Testimonial, status_code=201, dependencies=[Depends(require_auth)])
async def create_testimonial(testimonial: TestimonialCreate, db: AsyncIOMotorDatabase = Depends(get_database)):
    document = await insert(db[TESTIMONIALS], testimonial.to_document())
    logger.info(f"Created testimonial {document['_id']} by {testimonial.author!r}")
    return Testimonial.from_document(document)


@router.put("/testimonials/{testimonial_id}", response_model=Testimonial, dependencies=[Depends(require_auth)])
async def update_testimonial(
    testimonial_id: str,
    updates: TestimonialUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    testimonial = await update_or_404(
        db[TESTIMONIALS],
        testimonial_id,
        updates.to_document(exclude_unset=True),
        INVALID_TESTIMONIAL_ID,
        TESTIMONIAL_NOT_FOUND,
    )
    return Testimonial.from_document(testimonial)


@router.delete("/testimonials/{testimonial_id}", dependencies=[Depends(require_auth)])
async def delete_testimonial(testimonial_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    testimonial = await find_or_404(db[TESTIMONIALS], testimonial_id, INVALID_TESTIMONIAL_ID, TESTIMONIAL_NOT_FOUND)
    await db[TESTIMONIALS].delete_one({"_id": testimonial["_id"]})
    return {"success": True}
