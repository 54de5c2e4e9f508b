"""Health check API routes."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...core.database import Database, get_db
from ...core.exceptions import StoreError
from ...schemas.link import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Record store unreachable"}},
    summary="Health check",
)
async def health_check(db: Database = Depends(get_db)):
    """Health check endpoint.

    Reports unhealthy when the record store cannot answer a trivial query.
    """
    try:
        db.execute("SELECT 1", fetch=True)
    except StoreError as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(status_code=503, content={"status": "unhealthy"})
    return {"status": "healthy"}
