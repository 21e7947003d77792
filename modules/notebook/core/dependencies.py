"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

import uuid
from typing import Annotated

import structlog
from fastapi import Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from modules.notebook.core.config import get_app_config
from modules.notebook.core.config_schema import SearchSchema
from modules.notebook.core.database import get_db_session
from modules.notebook.core.logging import get_logger
from modules.notebook.core.security import owner_id_from_token
from modules.notebook.core.text_generation import TextGenerationClient

logger = get_logger(__name__)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]

_bearer = HTTPBearer(auto_error=False)


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """
    Extract or generate request ID from headers.

    Used for request tracing and correlation.
    """
    return x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


async def get_current_owner(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> str | None:
    """
    Resolve the authenticated owner id from the bearer token.

    Returns None instead of failing: services report the missing
    identity as an Unauthorized result.
    """
    owner_id = owner_id_from_token(credentials.credentials if credentials else None)
    if owner_id is not None:
        structlog.contextvars.bind_contextvars(owner_id=owner_id)
    return owner_id


OwnerId = Annotated[str | None, Depends(get_current_owner)]


def get_search_config() -> SearchSchema:
    """Search, suggestion and tag limits from search.yaml."""
    return get_app_config().search


SearchConfig = Annotated[SearchSchema, Depends(get_search_config)]


def get_text_client(request: Request) -> TextGenerationClient | None:
    """Text-generation client built by the lifespan, or None when AI is disabled."""
    return getattr(request.app.state, "text_client", None)


TextClient = Annotated[TextGenerationClient | None, Depends(get_text_client)]
