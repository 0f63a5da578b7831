"""
Upload Constants Module

This module defines constants used throughout the upload feature for
file type allow-lists, size limits and client messages.

Features:
- File type definitions
- Size limits
- Storage categories
- Error messages

Dependencies:
- None (pure Python)

Author: Care Admin Development Team
"""

# File type definitions
IMAGE_TYPES = (  # Allowed image MIME types
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
)
VIDEO_TYPES = (  # Allowed video MIME types
    "video/mp4",
    "video/webm",
    "video/ogg",
    "video/quicktime",
)
LARGE_VIDEO_TYPES = (  # Allowed for the large and XL video uploads
    "video/mp4",
    "video/webm",
    "video/ogg",
)
COMPRESSIBLE_VIDEO_EXTENSIONS = (".mp4", ".webm", ".mov")

# Size limits
MAX_LOGO_SIZE = 5 * 1024 * 1024  # Logos and entity photos (5MB)
MAX_IMAGE_SIZE = 10 * 1024 * 1024  # General site images (10MB)
MAX_VIDEO_SIZE = 100 * 1024 * 1024  # Site videos (100MB)
MAX_LARGE_VIDEO_SIZE = 250 * 1024 * 1024  # Large video upload (250MB)

# Storage categories (one flat directory each under uploads/)
CATEGORY_INSURANCE_LOGOS = "insurance-logos"
CATEGORY_STAFF_IMAGES = "staff-images"
CATEGORY_LOCATION_IMAGES = "location-images"
CATEGORY_TREATMENT_IMAGES = "treatment-images"
CATEGORY_IMAGES = "images"
CATEGORY_VIDEOS = "videos"
CATEGORY_COMPRESSED_VIDEOS = "compressed-videos"

# Compressed copies are named {stem}-compressed[-{quality}]{ext}
COMPRESSED_MARKER = "-compressed"

# Streaming
CHUNK_SIZE = 1024 * 1024  # Bytes copied per write

# Messages
UPLOAD_SUCCESS_MESSAGE = "File uploaded successfully"
ERROR_INVALID_IMAGE_TYPE = "Invalid file type. Only JPEG, PNG, GIF, and WEBP images are allowed."
ERROR_INVALID_VIDEO_TYPE = "Invalid file type. Only MP4, WEBM, OGG, and MOV videos are allowed."
ERROR_INVALID_LARGE_VIDEO_TYPE = "Invalid file type. Only MP4, WebM, and OGG video formats are allowed."
ERROR_NO_FILE = "No file uploaded"
ERROR_NO_VIDEO_FILE = "No video file was uploaded"
ERROR_VIDEO_NOT_FOUND = "Video not found"
FFMPEG_AVAILABLE_MESSAGE = "FFmpeg is available for video compression"
FFMPEG_MISSING_MESSAGE = "FFmpeg is not installed. Video compression will not work."
