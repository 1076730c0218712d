"""
Assistant registration: get-or-create the named assistant on the platform.
"""

import logging

from app.core.config import ASSISTANT_INSTRUCTIONS, ASSISTANT_MODEL, ASSISTANT_NAME
from app.core.resource_cache import assistant_cell
from app.services.platform import get_platform

logger = logging.getLogger(__name__)

ASSISTANT_TOOLS = [{"type": "file_search"}]


async def find_or_create_assistant() -> str:
    """
    Scan the platform's assistants for ASSISTANT_NAME and return its id.

    An existing assistant is reused verbatim even if its instructions or model
    differ from the current config. Creates one only when none matches.
    """
    logger.info("[assistant:find_or_create] IN  name=%r", ASSISTANT_NAME)
    platform = get_platform()
    for assistant in await platform.list_assistants():
        if assistant.name == ASSISTANT_NAME:
            logger.info("[assistant:find_or_create] OUT reusing assistant_id=%s", assistant.id)
            return assistant.id

    logger.info("[assistant:find_or_create] no match, creating assistant model=%s", ASSISTANT_MODEL)
    assistant_id = await platform.create_assistant(
        name=ASSISTANT_NAME,
        instructions=ASSISTANT_INSTRUCTIONS,
        model=ASSISTANT_MODEL,
        tools=ASSISTANT_TOOLS,
    )
    logger.info("[assistant:find_or_create] OUT created assistant_id=%s", assistant_id)
    return assistant_id


async def ensure_assistant() -> str:
    """Return the cached assistant id, resolving it on first use."""
    return await assistant_cell.get_or_create(find_or_create_assistant)
