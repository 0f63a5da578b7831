"""
Staff API - Clinical and Leadership Team

Routes for staff members. Leadership staff are organization-wide and never
belong to a location, so flagging a member as leadership clears its
locationId.

Author: Care Admin Development Team
"""

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Any, Dict, List
import logging

from careadmin.shared.auth import GatedRoute, require_auth
from careadmin.shared.database import LOCATIONS, STAFF, get_database
from .models import Location, StaffCreate, StaffDetail, StaffMember, StaffUpdate
from .queries import find_optional, find_or_404, find_sorted, insert, update_or_404

router = APIRouter(prefix="/api/center", tags=["staff"], route_class=GatedRoute)
logger = logging.getLogger(__name__)

INVALID_STAFF_ID = "Invalid staff ID"
STAFF_NOT_FOUND = "Staff member not found"


def _detach_leadership(document: Dict[str, Any]) -> Dict[str, Any]:
    if document.get("is_leadership") is True:
        document["location_id"] = None
    return document


@router.get("/staff", response_model=List[StaffMember])
async def list_staff(db: AsyncIOMotorDatabase = Depends(get_database)):
    staff = await find_sorted(db[STAFF])
    return [StaffMember.from_document(s) for s in staff]


@router.get("/staff/leadership", response_model=List[StaffMember])
async def list_leadership(db: AsyncIOMotorDatabase = Depends(get_database)):
    staff = await find_sorted(db[STAFF], {"is_leadership": True})
    logger.info(f"Returning {len(staff)} leadership staff members")
    return [StaffMember.from_document(s) for s in staff]


@router.get("/staff/{staff_id}", response_model=StaffDetail)
async def get_staff_member(staff_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    member = await find_or_404(db[STAFF], staff_id, INVALID_STAFF_ID, STAFF_NOT_FOUND)
    location = await find_optional(db[LOCATIONS], member.get("location_id"))

    detail = StaffMember.from_document(member).model_dump()
    detail["location"] = Location.from_document(location) if location else None
    return StaffDetail.model_validate(detail)


@router.post("/staff", response_model=StaffMember, status_code=201, dependencies=[Depends(require_auth)])
async def create_staff_member(member: StaffCreate, db: AsyncIOMotorDatabase = Depends(get_database)):
    document = await insert(db[STAFF], _detach_leadership(member.to_document()))
    logger.info(f"Created staff member {member.name!r} ({document['_id']})")
    return StaffMember.from_document(document)


@router.api_route(
    "/staff/{staff_id}",
    methods=["PUT", "PATCH"],
    response_model=StaffMember,
    dependencies=[Depends(require_auth)],
)
async def update_staff_member(
    staff_id: str,
    updates: StaffUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    changes = _detach_leadership(updates.to_document(exclude_unset=True))
    member = await update_or_404(db[STAFF], staff_id, changes, INVALID_STAFF_ID, STAFF_NOT_FOUND)
    return StaffMember.from_document(member)


@router.delete("/staff/{staff_id}", dependencies=[Depends(require_auth)])
async def delete_staff_member(staff_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    member = await find_or_404(db[STAFF], staff_id, INVALID_STAFF_ID, STAFF_NOT_FOUND)
    await db[STAFF].delete_one({"_id": member["_id"]})
    logger.info(f"Deleted staff member {staff_id}")
    return {"success": True}
