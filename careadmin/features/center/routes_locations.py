"""
Locations API - Treatment Center Locations

This module provides FastAPI routes for the center's physical locations and
the treatment programs each location offers.

API Endpoints:
------------
GET /api/center/locations
- All locations by sortOrder

GET /api/center/locations/featured
- Homepage locations, or the first three when none are featured

GET /api/center/locations/by-treatment/{treatment_id}
- Locations offering a treatment

GET /api/center/locations/{location_id}
- Location with staff, treatments and testimonials

POST, PUT, PATCH, DELETE /api/center/locations[/{location_id}]
- Session required
- Delete cascades to treatment links, testimonials and staff

POST, DELETE /api/center/locations/{location_id}/treatments/{treatment_id}
- Link management (session required)

Dependencies:
-----------
- FastAPI: Web framework
- MongoDB Motor: Data storage
- Logging: Operation tracking

Author: Care Admin Development Team
"""

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List
import logging

from careadmin.shared.auth import GatedRoute, require_auth
from careadmin.shared.database import (
    LOCATION_TREATMENTS,
    LOCATIONS,
    STAFF,
    TESTIMONIALS,
    TREATMENTS,
    get_database,
)
from careadmin.shared.exceptions import ConflictError, NotFoundError
from .models import (
    Location,
    LocationCreate,
    LocationDetail,
    LocationTreatment,
    LocationUpdate,
    StaffMember,
    Testimonial,
    Treatment,
)
from .queries import find_by_ids, find_or_404, find_sorted, insert, update_or_404

router = APIRouter(prefix="/api/center", tags=["locations"], route_class=GatedRoute)
logger = logging.getLogger(__name__)

INVALID_LOCATION_ID = "Invalid location ID"
LOCATION_NOT_FOUND = "Location not found"
INVALID_TREATMENT_ID = "Invalid treatment ID"
TREATMENT_NOT_FOUND = "Treatment not found"
FEATURED_FALLBACK_COUNT = 3


@router.get("/locations", response_model=List[Location])
async def list_locations(db: AsyncIOMotorDatabase = Depends(get_database)):
    locations = await find_sorted(db[LOCATIONS])
    return [Location.from_document(loc) for loc in locations]


@router.get("/locations/featured", response_model=List[Location])
async def list_featured_locations(db: AsyncIOMotorDatabase = Depends(get_database)):
    """
    Retrieve homepage locations.

    Notes:
        - Falls back to the first three locations by sortOrder
          when none is flagged featuredOnHomepage
    """
    locations = await find_sorted(db[LOCATIONS], {"featured_on_homepage": True})
    if not locations:
        locations = await find_sorted(db[LOCATIONS], limit=FEATURED_FALLBACK_COUNT)
    return [Location.from_document(loc) for loc in locations]


@router.get("/locations/by-treatment/{treatment_id}", response_model=List[Location])
async def list_locations_by_treatment(treatment_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    await find_or_404(db[TREATMENTS], treatment_id, INVALID_TREATMENT_ID, TREATMENT_NOT_FOUND)
    links = await db[LOCATION_TREATMENTS].find({"treatment_id": treatment_id}).to_list(None)
    locations = await find_by_ids(db[LOCATIONS], [link["location_id"] for link in links], sort_key="sort_order")
    return [Location.from_document(loc) for loc in locations]


@router.get("/locations/{location_id}", response_model=LocationDetail)
async def get_location(location_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """
    Retrieve a location with its related records.

    Returns:
        LocationDetail: Location plus staff (by sortOrder), offered
        treatments and testimonials

    Raises:
        InvalidIdError: For malformed ids
        NotFoundError: When the location does not exist
    """
    location = await find_or_404(db[LOCATIONS], location_id, INVALID_LOCATION_ID, LOCATION_NOT_FOUND)

    staff = await find_sorted(db[STAFF], {"location_id": location_id})
    links = await db[LOCATION_TREATMENTS].find({"location_id": location_id}).to_list(None)
    treatments = await find_by_ids(db[TREATMENTS], [link["treatment_id"] for link in links])
    testimonials = await db[TESTIMONIALS].find({"location_id": location_id}).to_list(None)

    detail = Location.from_document(location).model_dump()
    detail.update(
        staff=[StaffMember.from_document(s) for s in staff],
        treatments=[Treatment.from_document(t) for t in treatments],
        testimonials=[Testimonial.from_document(t) for t in testimonials],
    )
    return LocationDetail.model_validate(detail)


@router.post("/locations", response_model=Location, status_code=201, dependencies=[Depends(require_auth)])
async def create_location(location: LocationCreate, db: AsyncIOMotorDatabase = Depends(get_database)):
    document = await insert(db[LOCATIONS], location.to_document())
    logger.info(f"Created location {location.name!r} ({document['_id']})")
    return Location.from_document(document)


@router.api_route(
    "/locations/{location_id}",
    methods=["PUT", "PATCH"],
    response_model=Location,
    dependencies=[Depends(require_auth)],
)
async def update_location(
    location_id: str,
    updates: LocationUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Apply the fields present in the body to a location."""
    location = await update_or_404(
        db[LOCATIONS],
        location_id,
        updates.to_document(exclude_unset=True),
        INVALID_LOCATION_ID,
        LOCATION_NOT_FOUND,
    )
    return Location.from_document(location)


@router.delete("/locations/{location_id}", dependencies=[Depends(require_auth)])
async def delete_location(location_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """
    Delete a location and everything attached to it.

    Notes:
        - Removes treatment links
        - Removes testimonials for the location
        - Removes staff assigned to the location
    """
    location = await find_or_404(db[LOCATIONS], location_id, INVALID_LOCATION_ID, LOCATION_NOT_FOUND)

    links = await db[LOCATION_TREATMENTS].delete_many({"location_id": location_id})
    testimonials = await db[TESTIMONIALS].delete_many({"location_id": location_id})
    staff = await db[STAFF].delete_many({"location_id": location_id})
    await db[LOCATIONS].delete_one({"_id": location["_id"]})

    logger.info(
        f"Deleted location {location_id} with {links.deleted_count} treatment links, "
        f"{testimonials.deleted_count} testimonials and {staff.deleted_count} staff"
    )
    return {"success": True}


@router.post(
    "/locations/{location_id}/treatments/{treatment_id}",
    response_model=LocationTreatment,
    status_code=201,
    dependencies=[Depends(require_auth)],
)
async def add_location_treatment(
    location_id: str,
    treatment_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Link a treatment to a location.

    Raises:
        NotFoundError: When either side does not exist
        ConflictError: When the link already exists
    """
    await find_or_404(db[LOCATIONS], location_id, INVALID_LOCATION_ID, LOCATION_NOT_FOUND)
    await find_or_404(db[TREATMENTS], treatment_id, INVALID_TREATMENT_ID, TREATMENT_NOT_FOUND)

    link = {"location_id": location_id, "treatment_id": treatment_id}
    if await db[LOCATION_TREATMENTS].find_one(link):
        raise ConflictError("Association already exists")

    document = await insert(db[LOCATION_TREATMENTS], dict(link))
    return LocationTreatment.from_document(document)


@router.delete(
    "/locations/{location_id}/treatments/{treatment_id}",
    dependencies=[Depends(require_auth)],
)
async def remove_location_treatment(
    location_id: str,
    treatment_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    result = await db[LOCATION_TREATMENTS].delete_one({"location_id": location_id, "treatment_id": treatment_id})
    if result.deleted_count == 0:
        raise NotFoundError("Association not found")
    return {"success": True}
