"""Upload policies, one per storage category."""

from .constants import (
    CATEGORY_IMAGES,
    CATEGORY_INSURANCE_LOGOS,
    CATEGORY_LOCATION_IMAGES,
    CATEGORY_STAFF_IMAGES,
    CATEGORY_TREATMENT_IMAGES,
    CATEGORY_VIDEOS,
    ERROR_INVALID_LARGE_VIDEO_TYPE,
    ERROR_INVALID_VIDEO_TYPE,
    ERROR_NO_VIDEO_FILE,
    LARGE_VIDEO_TYPES,
    MAX_IMAGE_SIZE,
    MAX_LARGE_VIDEO_SIZE,
    MAX_LOGO_SIZE,
    MAX_VIDEO_SIZE,
    VIDEO_TYPES,
)
from .models import UploadPolicy

INSURANCE_LOGO_POLICY = UploadPolicy(category=CATEGORY_INSURANCE_LOGOS, max_bytes=MAX_LOGO_SIZE)
STAFF_IMAGE_POLICY = UploadPolicy(category=CATEGORY_STAFF_IMAGES, max_bytes=MAX_LOGO_SIZE)
LOCATION_IMAGE_POLICY = UploadPolicy(category=CATEGORY_LOCATION_IMAGES, max_bytes=MAX_LOGO_SIZE)
TREATMENT_IMAGE_POLICY = UploadPolicy(category=CATEGORY_TREATMENT_IMAGES, max_bytes=MAX_LOGO_SIZE)
SITE_IMAGE_POLICY = UploadPolicy(
    category=CATEGORY_IMAGES,
    max_bytes=MAX_IMAGE_SIZE,
    default_extension=".png",
)
VIDEO_POLICY = UploadPolicy(
    category=CATEGORY_VIDEOS,
    field_name="video",
    allowed_types=VIDEO_TYPES,
    max_bytes=MAX_VIDEO_SIZE,
    url_key="videoUrl",
    invalid_type_message=ERROR_INVALID_VIDEO_TYPE,
    default_extension=".mp4",
)
LARGE_VIDEO_POLICY = UploadPolicy(
    category=CATEGORY_VIDEOS,
    field_name="video",
    allowed_types=LARGE_VIDEO_TYPES,
    max_bytes=MAX_LARGE_VIDEO_SIZE,
    url_key="videoUrl",
    invalid_type_message=ERROR_INVALID_LARGE_VIDEO_TYPE,
    default_extension=".mp4",
    missing_file_message=ERROR_NO_VIDEO_FILE,
)
# No size limit
XL_VIDEO_POLICY = LARGE_VIDEO_POLICY.model_copy(update={"max_bytes": None})

ALL_POLICIES = (
    INSURANCE_LOGO_POLICY,
    STAFF_IMAGE_POLICY,
    LOCATION_IMAGE_POLICY,
    TREATMENT_IMAGE_POLICY,
    SITE_IMAGE_POLICY,
    VIDEO_POLICY,
    LARGE_VIDEO_POLICY,
    XL_VIDEO_POLICY,
)
