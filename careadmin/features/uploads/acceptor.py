"""
Upload Acceptor Module

This module provides the business logic for accepting user-submitted media:
validating the file at the request boundary, naming it, persisting it through
a storage sink and reporting its public location.

Features:
- Boundary validation
- Collision-resistant naming
- Storage delegation
- Public URL building
- Error mapping

Data Model:
- Upload policy
- Upload record
- Storage filename: {epoch-ms}-{random}{ext}

Security:
- MIME allow-list
- Size limits
- Extension sanitizing
- No writes on rejection

Dependencies:
- FastAPI for dependencies
- Storage sink for persistence
- logging for tracking

Author: Care Admin Development Team
"""

from fastapi import Depends, Request, UploadFile
from functools import lru_cache
from starlette.datastructures import UploadFile as FormFile
from typing import AsyncIterator, Callable, Optional
import logging
import os
import random
import re
import time

from careadmin.shared import config
from careadmin.shared.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    NoFileProvidedError,
    StorageFailureError,
)
from .constants import UPLOAD_SUCCESS_MESSAGE
from .models import UploadPolicy, UploadRecord
from .storage import LocalDiskStorage, StorageSink

logger = logging.getLogger(__name__)

RANDOM_SUFFIX_SPACE = 1_000_000_000
_EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9]{1,10}$")

NameStrategy = Callable[[Optional[str], str], str]


def storage_extension(original_filename: Optional[str], default: str = "") -> str:
    """Extension of the client's filename, or the default when missing or unsafe."""
    extension = os.path.splitext(original_filename or "")[1]
    return extension if _EXTENSION_RE.match(extension) else default


def generate_storage_filename(
    original_filename: Optional[str],
    default_extension: str = "",
    clock: Callable[[], float] = time.time,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Build a storage filename for an upload.

    Args:
        original_filename: Name sent by the client
        default_extension: Extension used when the original has none
        clock: Seconds since the epoch
        rng: Source of the random suffix

    Returns:
        str: "{millisecond timestamp}-{random int in [0, 1e9)}{extension}"

    Notes:
        - No shared state between requests
        - Uniqueness is probabilistic
    """
    timestamp = int(clock() * 1000)
    suffix = (rng or random).randrange(RANDOM_SUFFIX_SPACE)
    return f"{timestamp}-{suffix}{storage_extension(original_filename, default_extension)}"


def to_public_url(relative_path: str) -> str:
    """Turn a path relative to the public root into a URL path with forward slashes."""
    return "/" + relative_path.replace("\\", "/").lstrip("/")


def public_url_for(category: str, filename: str) -> str:
    return to_public_url(os.path.join(config.UPLOADS_DIR_NAME, category, filename))


def measure_upload(upload: UploadFile) -> int:
    """Size of an uploaded file in bytes, leaving its position at the start."""
    if upload.size is not None:
        return upload.size
    stream = upload.file
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


class UploadAcceptor:
    """
    Upload acceptance handler.

    Validates files against an UploadPolicy and persists accepted ones
    through a StorageSink. It performs no authorization check; routes using
    it are expected to sit behind the authorization gate.

    Attributes:
        storage: Storage sink receiving accepted files
        name_file: Strategy assigning storage filenames
    """

    def __init__(self, storage: StorageSink, name_file: NameStrategy = generate_storage_filename):
        self.storage = storage
        self.name_file = name_file

    def check(self, policy: UploadPolicy, upload: Optional[UploadFile]) -> Optional[UploadFile]:
        """
        Validate an upload before anything reaches storage.

        Args:
            policy: Category rules
            upload: Received file, or None when the field is absent

        Returns:
            UploadFile: The same upload when acceptable (None passes through)

        Raises:
            InvalidFileTypeError: MIME type outside the allow-list
            FileTooLargeError: Size above the policy limit
        """
        if upload is None:
            return None

        content_type = upload.content_type or ""
        if content_type not in policy.allowed_types:
            logger.info(f"Rejected {upload.filename!r} for {policy.category}: type {content_type!r}")
            raise InvalidFileTypeError(policy.invalid_type_message, content_type=content_type)

        size = measure_upload(upload)
        if policy.max_bytes is not None and size > policy.max_bytes:
            logger.info(f"Rejected {upload.filename!r} for {policy.category}: {size} bytes")
            raise FileTooLargeError(policy.max_bytes, size)

        return upload

    async def accept(self, policy: UploadPolicy, upload: Optional[UploadFile]) -> UploadRecord:
        """
        Persist a validated upload and describe it.

        Raises:
            NoFileProvidedError: When no file was sent
            StorageFailureError: When the storage sink fails
        """
        if upload is None:
            raise NoFileProvidedError(policy.missing_file_message)

        filename = self.name_file(upload.filename, policy.default_extension)
        upload.file.seek(0)
        try:
            size = await self.storage.save(policy.category, filename, upload.file)
        except Exception as e:
            logger.exception(f"Storing {filename} in {policy.category} failed")
            raise StorageFailureError(str(e) or None, cause=e) from e

        record = UploadRecord(
            original_filename=upload.filename or "",
            filename=filename,
            content_type=upload.content_type or "",
            size=size,
            directory=self.storage.directory_for(policy.category),
            url=public_url_for(policy.category, filename),
        )
        logger.info(f"Accepted {record.original_filename!r} as {record.url}")
        return record

    async def receive(self, policy: UploadPolicy, upload: Optional[UploadFile]) -> dict:
        record = await self.accept(policy, upload)
        return record.to_response(policy, UPLOAD_SUCCESS_MESSAGE)


@lru_cache
def get_upload_acceptor() -> UploadAcceptor:
    """FastAPI dependency returning the process-wide acceptor."""
    return UploadAcceptor(LocalDiskStorage(config.UPLOADS_ROOT))


def upload_boundary(policy: UploadPolicy):
    """
    Build the validation dependency for a policy.

    The returned dependency reads the policy's form field and runs the
    type and size checks, so a rejected file fails before the route handler
    body executes. A field holding plain text instead of a file counts as
    no file. Files parsed here are closed once the request is handled.
    """

    async def boundary(
        request: Request,
        acceptor: UploadAcceptor = Depends(get_upload_acceptor),
    ) -> AsyncIterator[Optional[UploadFile]]:
        form = await request.form()
        try:
            upload = form.get(policy.field_name)
            if not isinstance(upload, FormFile):
                upload = None
            yield acceptor.check(policy, upload)
        finally:
            await form.close()

    return boundary
