"""Authentication schemas for resolved sessions."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class SessionUser(BaseModel):
    """The principal attached to an authenticated request."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str | None = None
    email: str | None = None


class SessionInfo(BaseModel):
    """Reference to the session the principal authenticated with."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    expires_at: datetime | None = None


class SessionData(BaseModel):
    """Result of resolving request credentials."""

    user: SessionUser
    session: SessionInfo
