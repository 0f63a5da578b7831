"""
Site Content API - Editable Page Blocks

This module provides FastAPI routes for the keyed content blocks rendered by
the public site, including the embedded video blocks.

API Endpoints:
------------
GET /api/center/content[?section=]
GET /api/center/content/section/{section}
GET /api/center/content/{key}
POST /api/center/content
PUT /api/center/content/{content_id}
PATCH /api/center/content/{ref}
DELETE /api/center/content/{content_id}
GET /api/center/site-content/embedded-video/{key}
POST /api/center/site-content/embedded-video/{key}

Data Model:
----------
Content Block:
- key: unique lookup key
- title, content: display text
- section: page grouping
- videoUrl, embeddedVideoId, videoPlatform: optional video
- updatedAt: refreshed on every write

Notes:
-----
- PATCH accepts either an id or a key; an unknown key creates the block
- Every mutation requires an authenticated session

Author: Care Admin Development Team
"""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from typing import List, Optional
import logging

from careadmin.shared.auth import GatedRoute, require_auth
from careadmin.shared.database import SITE_CONTENT, get_database, is_object_id
from careadmin.shared.exceptions import ConflictError, NotFoundError
from .models import EmbeddedVideoUpdate, SiteContent, SiteContentCreate, SiteContentUpdate
from .queries import find_or_404, insert, stamp, update_or_404

router = APIRouter(prefix="/api/center", tags=["site-content"], route_class=GatedRoute)
logger = logging.getLogger(__name__)

INVALID_CONTENT_ID = "Invalid content ID"
CONTENT_NOT_FOUND = "Content not found"
DUPLICATE_KEY = "Content with this key already exists"
DEFAULT_SECTION = "general"
DEFAULT_VIDEO_SECTION = "homepage"


async def _ensure_unique_key(db: AsyncIOMotorDatabase, key: Optional[str], exclude_id=None) -> None:
    if key is None:
        return
    existing = await db[SITE_CONTENT].find_one({"key": key})
    if existing and existing["_id"] != exclude_id:
        raise ConflictError(DUPLICATE_KEY)


@router.get("/content", response_model=List[SiteContent])
async def list_content(section: Optional[str] = None, db: AsyncIOMotorDatabase = Depends(get_database)):
    query = {"section": section} if section else {}
    blocks = await db[SITE_CONTENT].find(query).to_list(None)
    return [SiteContent.from_document(b) for b in blocks]


@router.get("/content/section/{section}", response_model=List[SiteContent])
async def list_section_content(section: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    blocks = await db[SITE_CONTENT].find({"section": section}).to_list(None)
    return [SiteContent.from_document(b) for b in blocks]


@router.get("/content/{key}", response_model=SiteContent)
async def get_content(key: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    block = await db[SITE_CONTENT].find_one({"key": key})
    if not block:
        raise NotFoundError(CONTENT_NOT_FOUND)
    return SiteContent.from_document(block)


@router.post("/content", response_model=SiteContent, status_code=201, dependencies=[Depends(require_auth)])
async def create_content(block: SiteContentCreate, db: AsyncIOMotorDatabase = Depends(get_database)):
    await _ensure_unique_key(db, block.key)
    document = await insert(db[SITE_CONTENT], stamp(block.to_document()))
    logger.info(f"Created content block {block.key!r} in section {block.section!r}")
    return SiteContent.from_document(document)


@router.put("/content/{content_id}", response_model=SiteContent, dependencies=[Depends(require_auth)])
async def update_content(
    content_id: str,
    updates: SiteContentUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    current = await find_or_404(db[SITE_CONTENT], content_id, INVALID_CONTENT_ID, CONTENT_NOT_FOUND)
    await _ensure_unique_key(db, updates.key, exclude_id=current["_id"])
    block = await update_or_404(
        db[SITE_CONTENT],
        content_id,
        stamp(updates.to_document(exclude_unset=True)),
        INVALID_CONTENT_ID,
        CONTENT_NOT_FOUND,
    )
    return SiteContent.from_document(block)


@router.patch("/content/{ref}", response_model=SiteContent, dependencies=[Depends(require_auth)])
async def patch_content(
    ref: str,
    updates: SiteContentUpdate,
    response: Response,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Update a block by id or by key.

    Args:
        ref: ObjectId hex string, or a content key

    Returns:
        SiteContent: The updated block, or the new block with status 201
        when ref is a key that does not exist yet

    Raises:
        NotFoundError: When ref is an id with no matching block
    """
    if is_object_id(ref):
        return await update_content(ref, updates, db)

    changes = stamp(updates.to_document(exclude_unset=True))
    changes.pop("key", None)
    block = await db[SITE_CONTENT].find_one_and_update(
        {"key": ref},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
    if block:
        return SiteContent.from_document(block)

    document = {
        "key": ref,
        "title": updates.title or ref,
        "content": updates.content or "",
        "section": updates.section or DEFAULT_SECTION,
        "video_url": updates.video_url,
        "embedded_video_id": updates.embedded_video_id,
        "video_platform": updates.video_platform or "youtube",
    }
    document = await insert(db[SITE_CONTENT], stamp(document))
    logger.info(f"Created content block {ref!r} on first update")
    response.status_code = 201
    return SiteContent.from_document(document)


@router.delete("/content/{content_id}", dependencies=[Depends(require_auth)])
async def delete_content(content_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    block = await find_or_404(db[SITE_CONTENT], content_id, INVALID_CONTENT_ID, CONTENT_NOT_FOUND)
    await db[SITE_CONTENT].delete_one({"_id": block["_id"]})
    logger.info(f"Deleted content block {block.get('key')!r}")
    return {"success": True}


@router.get("/site-content/embedded-video/{key}", response_model=SiteContent)
async def get_embedded_video(key: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """
    Retrieve the embedded video block for a key.

    Notes:
        - A missing block answers 404 with defaultValues the admin
          form can start from
    """
    block = await db[SITE_CONTENT].find_one({"key": key})
    if not block:
        return JSONResponse(
            status_code=404,
            content={
                "error": CONTENT_NOT_FOUND,
                "key": key,
                "defaultValues": {
                    "embeddedVideoId": "",
                    "videoPlatform": "youtube",
                    "section": DEFAULT_VIDEO_SECTION,
                    "key": key,
                    "title": "",
                    "content": "",
                },
            },
        )
    return SiteContent.from_document(block)


@router.post("/site-content/embedded-video/{key}", response_model=SiteContent, dependencies=[Depends(require_auth)])
async def save_embedded_video(
    key: str,
    video: EmbeddedVideoUpdate,
    response: Response,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Attach an embedded video to a content block, creating it if needed.

    Returns:
        SiteContent: Updated block (200) or new block (201)
    """
    changes = stamp({"embedded_video_id": video.embedded_video_id, "video_platform": video.video_platform})
    block = await db[SITE_CONTENT].find_one_and_update(
        {"key": key},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
    if block:
        logger.info(f"Updated embedded video for {key!r} ({video.video_platform})")
        return SiteContent.from_document(block)

    document = await insert(
        db[SITE_CONTENT],
        dict(changes, key=key, section=video.section, title="", content=""),
    )
    logger.info(f"Created embedded video block {key!r} ({video.video_platform})")
    response.status_code = 201
    return SiteContent.from_document(document)
