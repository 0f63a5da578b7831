"""
Authentication Module

This module provides the authorization gate placed in front of protected
API endpoints.

Features:
- Session predicate
- Pluggable predicates
- Request rejection
- Gate-first route class
- Session helpers

Data Model:
- Session: signed cookie holding the user id

Security:
- Binary check
- Fail closed
- No partial authorization

Dependencies:
- FastAPI for dependencies
- Starlette sessions
- logging for tracking

Author: Care Admin Development Team
"""

from fastapi import Request, Response
from fastapi.routing import APIRoute
from typing import Any, Callable, Coroutine, List, Optional
import logging

from careadmin.shared.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"

AuthPredicate = Callable[[Request], bool]


def get_session_user_id(request: Request) -> Optional[str]:
    """
    Read the authenticated user id from the request session.

    Args:
        request: HTTP request

    Returns:
        str: User id, or None when no session is attached

    Notes:
        - Tolerates apps without SessionMiddleware
        - Never creates a session
    """
    if "session" not in request.scope:
        return None
    return request.session.get(SESSION_USER_KEY)


def session_is_authenticated(request: Request) -> bool:
    """Default predicate: a session carrying a user id is attached."""
    return get_session_user_id(request) is not None


class AuthorizationGate:
    """
    Guard for protected routes.

    Used as a FastAPI dependency. When the predicate holds, the gate returns
    without touching the request; otherwise it raises UnauthorizedError and
    the route handler never runs.

    Attributes:
        predicate: Callable answering "is this request authenticated"
    """

    def __init__(self, predicate: AuthPredicate = session_is_authenticated):
        self.predicate = predicate

    async def __call__(self, request: Request) -> None:
        if self.predicate(request):
            return
        logger.warning(f"Rejected unauthenticated {request.method} {request.url.path}")
        raise UnauthorizedError()


require_auth = AuthorizationGate()


class GatedRoute(APIRoute):
    """
    Route class that checks authorization gates before reading the request.

    FastAPI parses and validates the body before it resolves dependencies.
    This class runs the gates found among a route's dependencies first, so
    an anonymous caller gets 401 whatever the body holds. Routers serving
    gated routes pass route_class=GatedRoute.
    """

    def gates(self) -> List[AuthorizationGate]:
        return [d.dependency for d in self.dependencies if isinstance(d.dependency, AuthorizationGate)]

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()
        gates = self.gates()
        if not gates:
            return handler

        async def gated_handler(request: Request) -> Response:
            for gate in gates:
                await gate(request)
            return await handler(request)

        return gated_handler
