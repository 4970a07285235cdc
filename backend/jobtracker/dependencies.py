from __future__ import annotations

from fastapi import HTTPException, Request, status

from jobtracker.config import settings
from jobtracker.services.applications import ApplicationService


def get_current_user_id(request: Request) -> str:
    """User id asserted by the authentication gateway in front of this service."""
    user_id = (request.headers.get(settings.user_id_header) or "").strip()
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return user_id


def get_application_service(request: Request) -> ApplicationService:
    return request.app.state.application_service
