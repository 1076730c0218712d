"""
API handlers: validate request data, call services, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Marshalling and exception-to-HTTP mapping.
Lives in the API layer so services stay free of FastAPI/HTTP types.
"""

import logging

from fastapi.responses import JSONResponse

from app.core.errors import GenerationError
from app.schemas.reply import EmailReplyRequest, EmailReplyResponse, ErrorResponse
from app.services.reply_service import generate_reply

logger = logging.getLogger(__name__)

MISSING_EMAIL_MESSAGE = "Missing email content"


async def handle_generate_reply(body: EmailReplyRequest | None) -> JSONResponse:
    """
    Reject a missing body or missing/blank email with 400, otherwise generate a reply.
    GenerationError maps to 500 with its generic message only.
    """
    if body is None or not body.email or not body.email.strip():
        logger.info("[api:generate_reply] rejected: missing email")
        return JSONResponse(status_code=400, content=ErrorResponse(error=MISSING_EMAIL_MESSAGE).model_dump())

    try:
        reply = await generate_reply(body.email)
    except GenerationError as e:
        return JSONResponse(status_code=500, content=ErrorResponse(error=str(e)).model_dump())

    return JSONResponse(status_code=200, content=EmailReplyResponse(reply=reply).model_dump())
