"""
Site Video Upload API - Large Videos Attached to Content Blocks

This module provides the upload routes used for big site videos. The video
is stored like any other upload and its URL is written to the content block
named by the form's key, creating the block when it does not exist.

API Endpoints:
------------
POST /api/center/large-video-upload   (up to 250MB)
POST /api/xl-video-upload             (no size limit)

Form Fields:
----------
- video: the file (MP4, WebM or OGG)
- section, key: required, identify the content block
- title, content: optional, replace the block's text when given

Notes:
-----
- Both routes require an authenticated session
- Nothing is stored when section or key is missing
- Updating an existing block answers 200, creating one answers 201

Author: Care Admin Development Team
"""

from fastapi import APIRouter, Depends, Form, Response, UploadFile
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from typing import Optional
import logging

from careadmin.features.uploads.acceptor import UploadAcceptor, get_upload_acceptor, upload_boundary
from careadmin.features.uploads.models import UploadPolicy
from careadmin.features.uploads.policies import LARGE_VIDEO_POLICY, XL_VIDEO_POLICY
from careadmin.shared.auth import GatedRoute, require_auth
from careadmin.shared.database import SITE_CONTENT, get_database
from careadmin.shared.exceptions import BadRequestError, NoFileProvidedError
from .models import SiteContent
from .queries import insert, stamp

router = APIRouter(prefix="/api", tags=["site-video"], route_class=GatedRoute)
logger = logging.getLogger(__name__)

SECTION_AND_KEY_REQUIRED = "Section and key are required."


async def attach_video(
    db: AsyncIOMotorDatabase,
    video_url: str,
    section: str,
    key: str,
    title: Optional[str] = None,
    content: Optional[str] = None,
):
    """
    Point a content block at an uploaded video.

    Args:
        db: Database handle
        video_url: Public URL of the stored video
        section: Section used when the block is created
        key: Content block key
        title: Replacement title, ignored when empty
        content: Replacement content, ignored when empty

    Returns:
        tuple: (block document, created flag)
    """
    existing = await db[SITE_CONTENT].find_one({"key": key})
    if existing:
        changes = {
            "title": title or existing.get("title", ""),
            "content": content or existing.get("content", ""),
            "video_url": video_url,
        }
        block = await db[SITE_CONTENT].find_one_and_update(
            {"_id": existing["_id"]},
            {"$set": stamp(changes)},
            return_document=ReturnDocument.AFTER,
        )
        logger.info(f"Attached video {video_url} to content block {key!r}")
        return block, False

    document = {
        "key": key,
        "section": section,
        "title": title or "",
        "content": content or "",
        "video_url": video_url,
        "embedded_video_id": None,
        "video_platform": "youtube",
    }
    block = await insert(db[SITE_CONTENT], stamp(document))
    logger.info(f"Created content block {key!r} for video {video_url}")
    return block, True


def _video_upload_endpoint(policy: UploadPolicy):
    """Create the handler storing a video under a policy and attaching it to a block."""

    async def endpoint(
        response: Response,
        section: Optional[str] = Form(None),
        key: Optional[str] = Form(None),
        title: Optional[str] = Form(None),
        content: Optional[str] = Form(None),
        upload: Optional[UploadFile] = Depends(upload_boundary(policy)),
        acceptor: UploadAcceptor = Depends(get_upload_acceptor),
        db: AsyncIOMotorDatabase = Depends(get_database),
    ):
        if upload is None:
            raise NoFileProvidedError(policy.missing_file_message)
        if not section or not key:
            raise BadRequestError(SECTION_AND_KEY_REQUIRED)

        record = await acceptor.accept(policy, upload)
        block, created = await attach_video(db, record.url, section, key, title, content)
        if created:
            response.status_code = 201
        return SiteContent.from_document(block)

    return endpoint


router.add_api_route(
    "/center/large-video-upload",
    _video_upload_endpoint(LARGE_VIDEO_POLICY),
    methods=["POST"],
    response_model=SiteContent,
    name="upload_large_video",
    dependencies=[Depends(require_auth)],
)
router.add_api_route(
    "/xl-video-upload",
    _video_upload_endpoint(XL_VIDEO_POLICY),
    methods=["POST"],
    response_model=SiteContent,
    name="upload_xl_video",
    dependencies=[Depends(require_auth)],
)
