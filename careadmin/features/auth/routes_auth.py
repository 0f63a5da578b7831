"""
Auth Routes - Session Login API

This module provides the login, logout and current-user endpoints that
create and destroy the cookie session checked by the authorization gate.

API Endpoints:
------------
POST /api/login
- Verify credentials
- Start session

POST /api/logout
- Clear session

GET /api/user
- Current user (session required)

Security:
--------
- scrypt password hashes
- Constant-time comparison
- Signed session cookie
- Generic failure message

Dependencies:
-----------
- FastAPI: Web framework
- MongoDB Motor: User lookup
- Starlette sessions
- Logging: Operation tracking

Author: Care Admin Development Team
"""

from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel, Field
import logging

from careadmin.shared.auth import (
    SESSION_USER_KEY,
    GatedRoute,
    get_session_user_id,
    require_auth,
    verify_password,
)
from careadmin.shared.database import USERS, get_database, is_object_id, parse_object_id
from careadmin.shared.exceptions import UnauthorizedError
from careadmin.shared.models import Document

router = APIRouter(prefix="/api", tags=["auth"], route_class=GatedRoute)
logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class User(Document):
    """
    Public view of an admin user.

    Attributes:
        id (str): User identifier
        username (str): Login name
        name (str): Display name
    """
    username: str
    name: str = ""


@router.post("/login", response_model=User)
async def login(credentials: LoginRequest, request: Request, db: AsyncIOMotorDatabase = Depends(get_database)):
    """
    Verify credentials and start a session.

    Returns:
        User: The logged-in user

    Raises:
        UnauthorizedError: For unknown users or wrong passwords
    """
    user = await db[USERS].find_one({"username": credentials.username})
    if not user or not verify_password(credentials.password, user.get("password", "")):
        logger.info(f"Failed login for {credentials.username!r}")
        raise UnauthorizedError(INVALID_CREDENTIALS)

    request.session.clear()
    request.session[SESSION_USER_KEY] = str(user["_id"])
    logger.info(f"User {credentials.username!r} logged in")
    return User.from_document(user)


@router.post("/logout")
async def logout(request: Request):
    user_id = get_session_user_id(request)
    request.session.clear()
    if user_id:
        logger.info(f"User {user_id} logged out")
    return {"success": True}


@router.get("/user", response_model=User, dependencies=[Depends(require_auth)])
async def current_user(request: Request, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Return the user attached to the session."""
    user_id = get_session_user_id(request)
    user = None
    if is_object_id(user_id):
        user = await db[USERS].find_one({"_id": parse_object_id(user_id)})
    if not user:
        # Session outlived its user.
        request.session.clear()
        raise UnauthorizedError()
    return User.from_document(user)
