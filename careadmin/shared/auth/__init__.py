from .auth import (
    AuthPredicate,
    AuthorizationGate,
    GatedRoute,
    SESSION_USER_KEY,
    get_session_user_id,
    require_auth,
    session_is_authenticated,
)
from .passwords import hash_password, verify_password

__all__ = [
    'AuthPredicate',
    'AuthorizationGate',
    'GatedRoute',
    'SESSION_USER_KEY',
    'get_session_user_id',
    'require_auth',
    'session_is_authenticated',
    'hash_password',
    'verify_password',
]
