"""
API route aggregator: register endpoints; no logic — only delegate to handlers.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.api.handlers import handle_generate_reply
from app.core.resource_cache import assistant_cell, reset_all, vector_store_cell
from app.schemas.reply import EmailReplyRequest, EmailReplyResponse, ErrorResponse

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "Email reply service running"}


@router.get("/health", tags=["system"])
def health():
    return {
        "ok": True,
        "vector_store_cached": vector_store_cell.peek() is not None,
        "assistant_cached": assistant_cell.peek() is not None,
    }


# --- Reply ---

@router.post(
    "/",
    response_model=EmailReplyResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["reply"],
    summary="Generate a reply to an email",
    description="Send { email }; receive { reply } grounded in the company knowledge file. 400 when email is missing, 500 when generation fails.",
)
async def post_reply(body: EmailReplyRequest | None = None) -> JSONResponse:
    return await handle_generate_reply(body)


# --- Resources ---

@router.delete(
    "/resources",
    tags=["resources"],
    summary="Forget cached knowledge and assistant ids",
    description="The next reply re-provisions the vector store and re-resolves the assistant. Remote resources are not deleted.",
)
def delete_resources() -> dict:
    reset_all()
    logger.info("[api:delete_resources] cached resource ids cleared")
    return {"cleared": True}
