"""Authorization result schemas.

A permission handler returns either an ``AuthSuccess`` carrying the
principal and session for downstream handlers, or an ``AuthFailure``
describing why the request was rejected.
"""

from typing import Literal

from pydantic import BaseModel

from gatekeeper.core.auth.schemas import SessionInfo, SessionUser


class AuthSuccess(BaseModel):
    """Pass-through payload for an authorized request."""

    user: SessionUser
    session: SessionInfo


class AuthFailure(BaseModel):
    """Structured rejection of a request.

    Attributes:
        status: 401 without a session, 403 without the permission,
            500 when the check itself failed
        success: Always False
        type: Always "error"
        message: Human-readable reason
    """

    status: Literal[401, 403, 500]
    success: Literal[False] = False
    type: Literal["error"] = "error"
    message: str


AuthResult = AuthSuccess | AuthFailure
