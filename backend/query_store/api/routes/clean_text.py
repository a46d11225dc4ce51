"""Clean Text — returns cleaned text now, forwards it to the sheet endpoint afterwards.

Invariants:
    - Response never waits on, or reflects the outcome of, the sheet forward
    - Nothing is forwarded when no sheet endpoint is configured or the
      cleaned text is empty
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from query_store.api.dependencies import get_sheet_forwarder
from query_store.core.clean_text import clean_text
from query_store.infrastructure.sheet_client import SheetForwarder
from query_store.schemas.query import CleanRequest, CleanResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/clean", tags=["clean"])


@router.post("", response_model=CleanResponse)
async def clean_and_forward(
    body: CleanRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    forwarder: SheetForwarder | None = Depends(get_sheet_forwarder),
):
    cleaned = clean_text(body.text)
    forwarded = forwarder is not None and bool(cleaned)
    if forwarded:
        background_tasks.add_task(
            forwarder.forward_in_background,
            cleaned,
            body.text,
            token=body.token,
            client=request.headers.get("user-agent"),
        )
    return CleanResponse(cleaned=cleaned, forwarded=forwarded)
