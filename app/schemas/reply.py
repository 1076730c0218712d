"""Schemas for the email reply endpoint."""

from pydantic import BaseModel, Field


class EmailReplyRequest(BaseModel):
    """Request body for POST /. A missing or empty email is rejected by the handler with 400."""

    email: str | None = Field(None, description="Body of the email to reply to.")


class EmailReplyResponse(BaseModel):
    """Response for POST / on success."""

    reply: str = Field(..., description="Generated reply text.")

    model_config = {
        "json_schema_extra": {
            "examples": [{"reply": "Your order ships tomorrow."}]
        }
    }


class ErrorResponse(BaseModel):
    """Error body for 400 and 500 responses."""

    error: str
