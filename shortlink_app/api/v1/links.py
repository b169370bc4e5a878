from fastapi import APIRouter, Depends, HTTPException, Response, status

from shortlink_app.dependencies import build_short_url, get_base_url, get_link_service, get_link_store
from shortlink_app.exceptions import StoreUnavailableError
from shortlink_app.schemas.link import LinkCreate, LinkInfo, LinkResponse
from shortlink_app.schemas.outcomes import AllocateOutcome
from shortlink_app.services.link_service import LinkService
from shortlink_app.storage.link_store import LinkStore

router = APIRouter(prefix="/links", tags=["links"])


@router.post(
    "/",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"model": LinkResponse, "description": "URL was already shortened"},
        503: {"description": "Store unavailable or no free code found"},
    },
)
@router.post(
    "",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
def create_link(
    link_data: LinkCreate,
    response: Response,
    link_service: LinkService = Depends(get_link_service),
    base_url: str = Depends(get_base_url),
):
    """Shorten a URL, or return the existing code if it was shortened before"""
    allocation = link_service.allocate(link_data.long_url)

    if allocation.outcome == AllocateOutcome.EXHAUSTED:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Failed to generate a unique code after {allocation.attempts} attempts",
        )
    if allocation.outcome == AllocateOutcome.STORE_ERROR:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Link database unavailable",
        )

    reused = allocation.outcome == AllocateOutcome.REUSED
    if reused:
        response.status_code = status.HTTP_200_OK

    return LinkResponse(
        short_code=allocation.short_code,
        short_url=build_short_url(base_url, allocation.short_code),
        long_url=allocation.long_url,
        reused=reused,
    )


@router.get("/{short_code}", response_model=LinkInfo)
def get_link_info(
    short_code: str,
    store: LinkStore = Depends(get_link_store),
    base_url: str = Depends(get_base_url),
):
    """Get information about a short link"""
    try:
        link = store.find_by_code(short_code)
    except StoreUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Link database unavailable",
        )

    if not link:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short link not found"
        )

    return LinkInfo(
        short_code=link.short_code,
        long_url=link.long_url,
        short_url=build_short_url(base_url, link.short_code),
        created_at=link.created_at,
    )
