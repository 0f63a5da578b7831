"""
Configuration Module

This module manages application configuration settings and environment
variables for the admin API.

Features:
- Environment loading
- Storage paths
- Session settings
- Database settings
- CORS origins

Data Model:
- Public root
- Upload root
- Session secret
- MongoDB URL
- Allowed origins

Security:
- Secret isolation
- Env overrides
- TLS toggle

Dependencies:
- os for env
- dotenv for loading

Author: Care Admin Development Team
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Storage Configuration
# Base storage path is derived from the working directory at startup.
PUBLIC_ROOT = Path(os.getenv("PUBLIC_ROOT") or os.path.join(os.getcwd(), "public"))
UPLOADS_DIR_NAME = "uploads"
UPLOADS_ROOT = PUBLIC_ROOT / UPLOADS_DIR_NAME

# Session Configuration
SESSION_SECRET = os.getenv("SESSION_SECRET", "care-admin-dev-secret")
SESSION_COOKIE = os.getenv("SESSION_COOKIE", "careadmin.sid")
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(7 * 24 * 60 * 60)))  # 7 days

# MongoDB Configuration
MONGODB_URL = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
MONGODB_DB = os.getenv("MONGODB_DB", "careadmin")
MONGODB_TLS = os.getenv("MONGODB_TLS", "false").lower() == "true"

# CORS Configuration
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
