"""Short link API routes.

This module contains all endpoints for link operations:
- Create short URL (POST /shorten)
- Create short URLs in bulk (POST /shorten/batch)
- Update expiry/password (PUT /shorten/{short_code})
- Delete short URL (DELETE /shorten/{short_code})
- Get link info (GET /shorten/{short_code}/info)
- List own links (GET /links)
- Recent activity (GET /analytics)
- Redirect to original URL (GET /{short_code})
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from ...models.link import LinkBatchCreate, LinkCreate, LinkUpdate
from ...models.user import Principal
from ...schemas.link import (
    AnalyticsResponse,
    BatchShortenResponse,
    ErrorResponse,
    LinkDeleteResponse,
    LinkInfoResponse,
    ShortenResponse,
)
from ...services import (
    AnalyticsReader,
    LifecycleManager,
    ResolutionEngine,
    ShorteningEngine,
    TierPolicyGate,
)
from ...utils.shortener import create_short_url
from ..deps import (
    get_analytics_reader,
    get_current_principal,
    get_lifecycle_manager,
    get_policy_gate,
    get_resolution_engine,
    get_shortening_engine,
)

router = APIRouter(prefix="", tags=["Links"])


def get_base_url(request: Request) -> str:
    """Get base URL from request.

    Args:
        request: FastAPI request object.

    Returns:
        Base URL string.
    """
    return str(request.base_url).rstrip("/")


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=201,
    responses={
        201: {"description": "Short URL created or reused"},
        400: {"model": ErrorResponse, "description": "Invalid request"},
        403: {"model": ErrorResponse, "description": "Anonymous shortening disabled"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
    },
    summary="Create a short URL",
    description="Create a short URL. Optionally specify a custom code, expiry and password.",
)
async def shorten_url(
    request: Request,
    link_data: LinkCreate,
    principal: Optional[Principal] = Depends(get_current_principal),
    engine: ShorteningEngine = Depends(get_shortening_engine),
) -> ShortenResponse:
    """Create a short URL from a long URL.

    Args:
        request: FastAPI request object.
        link_data: Link creation data.
        principal: Calling principal, if any.
        engine: Shortening engine.

    Returns:
        Created short URL.
    """
    short_code = engine.shorten(
        link_data.url,
        owner=principal,
        custom_code=link_data.custom_code,
        expiry=link_data.expiry_date,
        password=link_data.password,
    )
    return ShortenResponse(
        original_url=link_data.url.strip(),
        short_code=short_code,
        short_url=create_short_url(get_base_url(request), short_code),
    )


@router.post(
    "/shorten/batch",
    response_model=BatchShortenResponse,
    status_code=201,
    responses={
        400: {"model": ErrorResponse, "description": "Empty URL in batch"},
        403: {"model": ErrorResponse, "description": "Enterprise tier required"},
    },
    summary="Create short URLs in bulk",
)
async def shorten_batch(
    request: Request,
    batch: LinkBatchCreate,
    principal: Optional[Principal] = Depends(get_current_principal),
    gate: TierPolicyGate = Depends(get_policy_gate),
) -> BatchShortenResponse:
    """Create short URLs in bulk. Enterprise accounts only."""
    owner = gate.authorize_bulk(principal)
    codes = gate.shorten_batch(batch.urls, owner)
    base_url = get_base_url(request)
    return BatchShortenResponse(
        short_codes=codes,
        short_urls=[create_short_url(base_url, code) for code in codes],
    )


@router.put(
    "/shorten/{short_code}",
    response_model=LinkInfoResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid expiry"},
        403: {"model": ErrorResponse, "description": "Not the owner"},
        404: {"model": ErrorResponse, "description": "Short URL not found"},
    },
    summary="Update a short URL",
    description="Set a new expiry date and, optionally, a new password.",
)
async def update_short_url(
    short_code: str,
    request: Request,
    link_data: LinkUpdate,
    principal: Optional[Principal] = Depends(get_current_principal),
    manager: LifecycleManager = Depends(get_lifecycle_manager),
) -> LinkInfoResponse:
    """Update expiry and password of a short URL.

    Args:
        short_code: The short URL code.
        request: FastAPI request object.
        link_data: New expiry and optional password.
        principal: Calling principal.
        manager: Lifecycle manager.

    Returns:
        Updated link information.
    """
    link = manager.update(short_code, principal, link_data.expiry_date, link_data.password)
    return LinkInfoResponse.from_link(link, get_base_url(request))


@router.delete(
    "/shorten/{short_code}",
    response_model=LinkDeleteResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Not the owner"},
        404: {"model": ErrorResponse, "description": "Short URL not found"},
    },
    summary="Delete a short URL",
    description="Soft delete a short URL. The code stays reserved.",
)
async def delete_short_url(
    short_code: str,
    principal: Optional[Principal] = Depends(get_current_principal),
    manager: LifecycleManager = Depends(get_lifecycle_manager),
) -> dict:
    manager.soft_delete(short_code, principal)
    return {
        "message": "Short code deleted successfully",
        "short_code": short_code,
    }


@router.get(
    "/shorten/{short_code}/info",
    response_model=LinkInfoResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Not the owner"},
        404: {"model": ErrorResponse, "description": "Short URL not found"},
    },
    summary="Get link information",
)
async def get_link_info(
    short_code: str,
    request: Request,
    principal: Optional[Principal] = Depends(get_current_principal),
    manager: LifecycleManager = Depends(get_lifecycle_manager),
) -> LinkInfoResponse:
    link = manager.info(short_code, principal)
    return LinkInfoResponse.from_link(link, get_base_url(request))


@router.get(
    "/links",
    response_model=list[LinkInfoResponse],
    responses={403: {"model": ErrorResponse, "description": "Authentication required"}},
    summary="List own links",
    description="List all live short URLs owned by the caller.",
)
async def list_links(
    request: Request,
    principal: Optional[Principal] = Depends(get_current_principal),
    manager: LifecycleManager = Depends(get_lifecycle_manager),
) -> list[LinkInfoResponse]:
    base_url = get_base_url(request)
    return [LinkInfoResponse.from_link(link, base_url) for link in manager.list(principal)]


@router.get(
    "/analytics",
    response_model=AnalyticsResponse,
    responses={400: {"model": ErrorResponse, "description": "Invalid limit"}},
    summary="Recent links",
    description="The most recently created live short URLs.",
)
async def recent_links(
    request: Request,
    limit: Optional[int] = Query(None),
    reader: AnalyticsReader = Depends(get_analytics_reader),
) -> AnalyticsResponse:
    base_url = get_base_url(request)
    return AnalyticsResponse(
        records=[
            LinkInfoResponse.from_link(link, base_url, reveal_protected=False)
            for link in reader.recent(limit)
        ]
    )


@router.get(
    "/{short_code}",
    response_class=RedirectResponse,
    status_code=302,
    responses={
        302: {"description": "Redirect to original URL"},
        401: {"model": ErrorResponse, "description": "Password required or incorrect"},
        404: {"model": ErrorResponse, "description": "Short URL not found"},
    },
    summary="Redirect to original URL",
    description="Redirect to the original URL associated with the short code.",
)
async def redirect_to_url(
    short_code: str,
    password: Optional[str] = Query(None),
    engine: ResolutionEngine = Depends(get_resolution_engine),
) -> RedirectResponse:
    """Redirect to the original URL.

    Args:
        short_code: The short URL code.
        password: Password for protected links.
        engine: Resolution engine.

    Returns:
        Redirect response to original URL.
    """
    original_url = engine.resolve(short_code, password)
    return RedirectResponse(url=original_url, status_code=302)
