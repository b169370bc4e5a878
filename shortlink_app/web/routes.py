"""
HTML routes: the form page, form submissions and short link redirects.

Explicit two-branch dispatch:
- GET /{code}  -> LinkService.resolve()
- POST /       -> LinkService.allocate()
Each branch renders the tagged outcome it gets back.
"""

import logging
import os
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from shortlink_app.dependencies import build_short_url, get_base_url, get_link_service
from shortlink_app.exceptions import URLValidationError
from shortlink_app.schemas.link import validate_long_url
from shortlink_app.schemas.outcomes import ResolveOutcome
from shortlink_app.services.link_service import LinkService
from shortlink_app.web.messages import (
    INVALID_URL,
    PageMessage,
    allocation_message,
    resolution_message,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["web"])

templates = Jinja2Templates(directory=os.path.join(os.path.dirname(__file__), "templates"))


def render_page(
    request: Request,
    message: Optional[PageMessage] = None,
    short_url: Optional[str] = None,
    long_url: Optional[str] = None,
) -> HTMLResponse:
    """Render the single page, with an optional message and result link"""
    context = {
        "app_name": request.app.state.settings.app_name,
        "message": message,
        "short_url": short_url,
        "long_url": long_url,
    }
    status_code = message.status_code if message else status.HTTP_200_OK
    return templates.TemplateResponse(request, "index.html", context, status_code=status_code)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def homepage(request: Request):
    return render_page(request)


@router.post("/", response_class=HTMLResponse, include_in_schema=False)
def shorten_from_form(
    request: Request,
    long_url: Optional[str] = Form(None),
    link_service: LinkService = Depends(get_link_service),
    base_url: str = Depends(get_base_url),
):
    """Handle form submission to create (or reuse) a short link"""
    try:
        url = validate_long_url(long_url)
    except URLValidationError as e:
        logger.info(f"Rejected submission {long_url!r}: {e}")
        return render_page(request, INVALID_URL, long_url=long_url)

    allocation = link_service.allocate(url)

    short_url = None
    if allocation.succeeded:
        short_url = build_short_url(base_url, allocation.short_code)

    return render_page(
        request,
        allocation_message(allocation),
        short_url=short_url,
        long_url=url,
    )


@router.get("/{code:path}", include_in_schema=False)
def redirect_to_long_url(
    request: Request,
    code: str,
    link_service: LinkService = Depends(get_link_service),
):
    """
    Resolve a short code.

    Found: permanent redirect, nothing rendered. Otherwise the form page is
    rendered with a not-found or lookup-error message.
    """
    resolution = link_service.resolve(code)

    if resolution.outcome == ResolveOutcome.REDIRECT:
        return RedirectResponse(
            url=resolution.long_url,
            status_code=status.HTTP_301_MOVED_PERMANENTLY,
        )

    return render_page(request, resolution_message(resolution))
