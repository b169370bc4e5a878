"""
FastAPI dependencies for dependency injection.

Settings and the session factory live on app.state (set by create_app), so
nothing below reads module-level globals. Tests swap any layer through
app.dependency_overrides.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from shortlink_app.config import Settings
from shortlink_app.database.connection import get_db
from shortlink_app.services.link_service import LinkService
from shortlink_app.services.short_code import ShortCodeGenerator
from shortlink_app.storage.link_store import LinkStore, SQLAlchemyLinkStore


def get_settings(request: Request) -> Settings:
    """Settings the application was created with"""
    return request.app.state.settings


def get_link_store(db: Session = Depends(get_db)) -> LinkStore:
    """Link store bound to this request's session"""
    return SQLAlchemyLinkStore(db)


def get_link_service(
    store: LinkStore = Depends(get_link_store),
    settings: Settings = Depends(get_settings),
) -> LinkService:
    """
    Get LinkService with all dependencies injected.

    Controllers depend on the service; the service depends on the store.
    Only the attempt ceiling crosses from settings; the code length is
    fixed by the links.short_code column.
    """
    return LinkService(
        store=store,
        generator=ShortCodeGenerator(),
        max_attempts=settings.max_attempts,
    )


def get_base_url(request: Request, settings: Settings = Depends(get_settings)) -> str:
    """
    Externally visible base URL for composing short links.

    Configured base_url wins; otherwise the request's own scheme and host
    (which already include any non-default port).
    """
    if settings.base_url:
        return settings.base_url.rstrip("/")
    return str(request.base_url).rstrip("/")


def build_short_url(base_url: str, short_code: str) -> str:
    return f"{base_url.rstrip('/')}/{short_code}"
