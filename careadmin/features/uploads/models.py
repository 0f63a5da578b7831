"""
Upload Models Module

This module defines the data models used by the upload feature: the
per-category acceptance policy and the record of an accepted file.

Features:
- Upload policies
- Upload records
- Stored file listings

Data Model:
- Policy: category, field, allow-list, size limit
- Record: names, type, size, directory, public URL

Dependencies:
- pydantic for data validation
- typing for type hints
- datetime for timestamps

Author: Care Admin Development Team
"""

from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, Optional, Tuple
from datetime import datetime

from careadmin.shared.models import CamelModel
from .constants import ERROR_INVALID_IMAGE_TYPE, ERROR_NO_FILE, IMAGE_TYPES, MAX_LOGO_SIZE


class UploadPolicy(BaseModel):
    """
    Acceptance rules for one upload category.

    Attributes:
        category (str): Storage directory name under uploads/
        field_name (str): Multipart field carrying the file
        allowed_types (Tuple[str, ...]): MIME allow-list
        max_bytes (Optional[int]): Inclusive size limit, None for unlimited
        url_key (str): Response key holding the public URL
        invalid_type_message (str): Error returned for disallowed types
        default_extension (str): Used when the original name has none
        missing_file_message (str): Error returned when no file is sent
    """

    model_config = ConfigDict(frozen=True)

    category: str
    field_name: str = "image"
    allowed_types: Tuple[str, ...] = IMAGE_TYPES
    max_bytes: Optional[int] = MAX_LOGO_SIZE
    url_key: str = "imageUrl"
    invalid_type_message: str = ERROR_INVALID_IMAGE_TYPE
    default_extension: str = ""
    missing_file_message: str = ERROR_NO_FILE


class UploadRecord(CamelModel):
    """
    One accepted file. Created at acceptance time and never modified.

    Attributes:
        original_filename (str): Name sent by the client
        filename (str): Assigned storage name
        content_type (str): MIME type
        size (int): Size in bytes
        directory (str): Storage directory
        url (str): Public URL path
    """

    model_config = ConfigDict(frozen=True)

    original_filename: str
    filename: str
    content_type: str
    size: int
    directory: str
    url: str

    def to_response(self, policy: UploadPolicy, message: str) -> Dict[str, Any]:
        return {
            "success": True,
            "message": message,
            policy.url_key: self.url,
            "file": self.model_dump(by_alias=True),
        }


class StoredFile(BaseModel):
    name: str
    size: int
    modified: datetime
