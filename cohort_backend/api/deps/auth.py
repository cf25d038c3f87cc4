"""
Administrator identity check.

Admin sessions are signed, timestamped tokens carried in a cookie or an
``Authorization: Bearer`` header. Every accepted request gets a freshly
signed cookie so active administrators are not logged out mid-task.

Dependencies: fastapi, itsdangerous, cohort_backend.configs
System role: Authorization gate for scheduler endpoints
"""

import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, Response, status
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from cohort_backend.api.deps.dependencies import get_settings_dependency
from cohort_backend.configs import Settings
from cohort_backend.configs.auth import AuthSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminIdentity:
    """Authenticated administrator."""

    admin_id: str
    email: str | None = None


def build_serializer(auth: AuthSettings) -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(auth.secret_key, salt=auth.session_salt)


def issue_admin_token(auth: AuthSettings, admin_id: str, email: str | None = None) -> str:
    """Sign a session token for an administrator."""
    return build_serializer(auth).dumps({"admin_id": admin_id, "email": email})


def _read_token(request: Request, cookie_name: str) -> str | None:
    token = request.cookies.get(cookie_name)
    if token:
        return token

    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def require_admin(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_settings_dependency),
) -> AdminIdentity:
    """
    Verify the caller's administrator session.

    Raises:
        HTTPException(401): Token missing, tampered with, expired or malformed
    """
    auth = settings.auth
    token = _read_token(request, auth.cookie_name)
    if token is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    try:
        payload = build_serializer(auth).loads(token, max_age=auth.session_max_age_seconds)
    except SignatureExpired as exc:
        logger.info("Expired admin session", extra={"path": request.url.path})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized") from exc
    except BadSignature as exc:
        logger.warning("Invalid admin session token", extra={"path": request.url.path})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized") from exc

    if not isinstance(payload, dict) or not payload.get("admin_id"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    identity = AdminIdentity(admin_id=str(payload["admin_id"]), email=payload.get("email"))
    attach_session_refresh(response, identity, settings)
    return identity


def attach_session_refresh(response: Response, identity: AdminIdentity, settings: Settings) -> None:
    """Set a re-signed session cookie on the outgoing response."""
    auth = settings.auth
    response.set_cookie(
        key=auth.cookie_name,
        value=issue_admin_token(auth, identity.admin_id, identity.email),
        max_age=auth.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
