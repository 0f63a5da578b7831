"""
Upload Routes Module

This module defines the FastAPI routes for media uploads: insurance logos,
staff, location and treatment photos, general site images and the site
video.

Features:
- Image upload endpoints
- Video upload endpoint
- Video settings lookup
- Video deletion
- Compressed video listing
- Health check

API Endpoints:
------------
POST /api/center/insurance-logo
POST /api/staff-image/upload
POST /api/location-image/upload
POST /api/treatment-image/upload
POST /api/file/upload-image
POST /api/file/upload-video
GET /api/video-settings
DELETE /api/delete-video
GET /api/file/test
GET /api/video-compression/list
GET /api/video-compression/status

Security:
- Session required (except test)
- Type checking
- Size limits

Dependencies:
- FastAPI for routing
- Upload acceptor
- Authorization gate

Author: Care Admin Development Team
"""

from fastapi import APIRouter, Depends, UploadFile
from typing import Any, Dict, List, Optional
import logging
import os
import shutil

from careadmin.shared.auth import GatedRoute, require_auth
from careadmin.shared.exceptions import NotFoundError
from .acceptor import UploadAcceptor, get_upload_acceptor, public_url_for, upload_boundary
from .constants import (
    CATEGORY_COMPRESSED_VIDEOS,
    COMPRESSED_MARKER,
    COMPRESSIBLE_VIDEO_EXTENSIONS,
    ERROR_VIDEO_NOT_FOUND,
    FFMPEG_AVAILABLE_MESSAGE,
    FFMPEG_MISSING_MESSAGE,
)
from .models import StoredFile, UploadPolicy
from .policies import (
    INSURANCE_LOGO_POLICY,
    LOCATION_IMAGE_POLICY,
    SITE_IMAGE_POLICY,
    STAFF_IMAGE_POLICY,
    TREATMENT_IMAGE_POLICY,
    VIDEO_POLICY,
)

router = APIRouter(prefix="/api", tags=["uploads"], route_class=GatedRoute)
logger = logging.getLogger(__name__)


def _upload_endpoint(policy: UploadPolicy):
    """Create the handler accepting one file under a policy."""

    async def endpoint(
        upload: Optional[UploadFile] = Depends(upload_boundary(policy)),
        acceptor: UploadAcceptor = Depends(get_upload_acceptor),
    ):
        return await acceptor.receive(policy, upload)

    endpoint.__name__ = f"upload_{policy.category.replace('-', '_')}"
    return endpoint


UPLOAD_ROUTES = (
    ("/center/insurance-logo", INSURANCE_LOGO_POLICY),
    ("/staff-image/upload", STAFF_IMAGE_POLICY),
    ("/location-image/upload", LOCATION_IMAGE_POLICY),
    ("/treatment-image/upload", TREATMENT_IMAGE_POLICY),
    ("/file/upload-image", SITE_IMAGE_POLICY),
    ("/file/upload-video", VIDEO_POLICY),
)

for path, policy in UPLOAD_ROUTES:
    router.add_api_route(
        path,
        _upload_endpoint(policy),
        methods=["POST"],
        status_code=201,
        dependencies=[Depends(require_auth)],
    )


@router.get("/file/test")
async def upload_system_test():
    return {"status": "File upload system is working"}


@router.get("/video-settings", dependencies=[Depends(require_auth)])
async def get_video_settings(acceptor: UploadAcceptor = Depends(get_upload_acceptor)):
    """
    Describe the current site video.

    Returns:
        dict: exists flag plus name, size, lastModified and path of the
        most recently stored video

    Notes:
        - Newest file wins
        - Empty directory reports exists=False
    """
    videos = acceptor.storage.list_files(VIDEO_POLICY.category)
    if not videos:
        return {"exists": False}

    current = videos[-1]
    return {
        "exists": True,
        "name": current.name,
        "size": current.size,
        "lastModified": current.modified.isoformat(),
        "path": public_url_for(VIDEO_POLICY.category, current.name),
    }


@router.delete("/delete-video", dependencies=[Depends(require_auth)])
async def delete_video(acceptor: UploadAcceptor = Depends(get_upload_acceptor)):
    """Delete the current (most recent) site video."""
    videos = acceptor.storage.list_files(VIDEO_POLICY.category)
    if not videos:
        raise NotFoundError(ERROR_VIDEO_NOT_FOUND)

    current = videos[-1]
    acceptor.storage.delete(VIDEO_POLICY.category, current.name)
    logger.info(f"Site video {current.name} deleted")
    return {"success": True}


def format_bytes(size: int, decimals: int = 2) -> str:
    """Human-readable size, e.g. 1536 -> "1.5 KB"."""
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB", "TB"]
    exponent = 0
    while exponent < len(units) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    value = round(size / 1024 ** exponent, decimals)
    return f"{value:g} {units[exponent]}"


def _is_compressible(stored: StoredFile) -> bool:
    return os.path.splitext(stored.name)[1].lower() in COMPRESSIBLE_VIDEO_EXTENSIONS


def _describe(stored: StoredFile) -> Dict[str, Any]:
    return {
        "filename": stored.name,
        "size": stored.size,
        "sizeFormatted": format_bytes(stored.size),
        "created": stored.modified.isoformat(),
        "hasCompressedVersion": False,
        "compressedVersions": [],
    }


def group_compressed_videos(originals: List[StoredFile], compressed: List[StoredFile]) -> List[Dict[str, Any]]:
    """
    Pair every original video with its compressed copies.

    Args:
        originals: Files of the videos category
        compressed: Files of the compressed-videos category

    Returns:
        list: One entry per original, oldest first, each listing its copies
        with quality label and compression ratio

    Notes:
        - "clip-compressed-low.mp4" belongs to "clip.mp4" with quality "low"
        - A copy without a quality label reports "default"
        - Copies whose original is gone are left out
    """
    videos = {stored.name: _describe(stored) for stored in originals if _is_compressible(stored)}

    for stored in compressed:
        if COMPRESSED_MARKER not in stored.name or not _is_compressible(stored):
            continue
        stem, _, tail = stored.name.partition(COMPRESSED_MARKER)
        original = videos.get(stem + os.path.splitext(stored.name)[1])
        if original is None:
            continue
        quality = tail.split(".")[0].lstrip("-") or "default"
        original["hasCompressedVersion"] = True
        original["compressedVersions"].append(
            {
                "filename": stored.name,
                "size": stored.size,
                "sizeFormatted": format_bytes(stored.size),
                "quality": quality,
                "compressionRatio": f"{original['size'] / stored.size:.1f}" if stored.size else None,
            }
        )

    return list(videos.values())


@router.get("/video-compression/list", dependencies=[Depends(require_auth)])
async def list_compressed_videos(acceptor: UploadAcceptor = Depends(get_upload_acceptor)):
    return group_compressed_videos(
        acceptor.storage.list_files(VIDEO_POLICY.category),
        acceptor.storage.list_files(CATEGORY_COMPRESSED_VIDEOS),
    )


@router.get("/video-compression/status", dependencies=[Depends(require_auth)])
async def video_compression_status():
    """Report whether an ffmpeg binary is on PATH."""
    available = shutil.which("ffmpeg") is not None
    return {
        "ffmpegAvailable": available,
        "message": FFMPEG_AVAILABLE_MESSAGE if available else FFMPEG_MISSING_MESSAGE,
    }
