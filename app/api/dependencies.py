"""
Dependencies for guard endpoints.

This module provides dependency functions for:
- Resolving the viewer from an optional access token
- Loading (or starting) the caller's guard session
"""

from typing import Annotated

from fastapi import Cookie, Depends, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings
from app.core.logging import bind_context
from app.core.security import verify_access_token
from app.core.sessions import GuardSession, SessionRegistry, get_session_registry
from app.schemas.viewer import Viewer


async def get_viewer(
    access_token: Annotated[str | None, Cookie()] = None,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(HTTPBearer(auto_error=False))
    ] = None,
) -> Viewer:
    """
    Resolve the current viewer.

    Reads the access token from the cookie, falling back to a bearer header.
    A missing, invalid or expired token yields an anonymous viewer rather
    than an error: guard endpoints serve everyone.
    """
    token = access_token or (credentials.credentials if credentials else None)
    if not token:
        return Viewer.anonymous()

    claims = verify_access_token(token)
    if claims is None:
        return Viewer.anonymous()

    return Viewer.from_claims(claims)


async def get_guard_session(
    response: Response,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
    guard_session: Annotated[str | None, Cookie(alias=settings.GUARD_SESSION_COOKIE)] = None,
) -> GuardSession:
    """
    Load the caller's guard session, starting one when the cookie is absent or unknown.
    """
    session = registry.get_or_create(guard_session)
    if session.session_id != guard_session:
        response.set_cookie(
            key=settings.GUARD_SESSION_COOKIE,
            value=session.session_id,
            httponly=True,
            samesite="lax",
        )
    bind_context(guard_session_id=session.session_id)
    return session


ViewerDep = Annotated[Viewer, Depends(get_viewer)]
GuardSessionDep = Annotated[GuardSession, Depends(get_guard_session)]
