"""
Reply generation: orchestrate thread, message, run and polling for one email.

Responsibility: Resolve the knowledge vector store and assistant, drive one run to
a terminal status, and pull the assistant's reply off the thread. Called by the
API layer; no HTTP here. Every failure leaves as GenerationError.
"""

import asyncio
import logging

from app.core.config import RUN_POLL_INTERVAL, RUN_TIMEOUT
from app.core.errors import GenerationError, NoResponseError, RunFailedError, RunTimeoutError
from app.services.assistant_service import ensure_assistant
from app.services.knowledge_service import ensure_vector_store
from app.services.platform import RunState, ThreadMessage, get_platform

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "Here is an email I received:\n\n"
    "{email}\n\n"
    "Please write a professional and accurate reply, ensuring to use company-specific details if relevant."
)


def build_prompt(email_body: str) -> str:
    return PROMPT_TEMPLATE.format(email=email_body)


async def _poll_until_terminal(thread_id: str, run_id: str, poll_interval: float) -> RunState:
    while True:
        await asyncio.sleep(poll_interval)
        state = await get_platform().retrieve_run(thread_id, run_id)
        logger.info("[reply:poll] run_id=%s status=%s", run_id, state.status.value)
        if state.status.is_success:
            return state
        if state.status.is_failure:
            raise RunFailedError(run_id, state.status.value, state.last_error)


async def wait_for_run(
    thread_id: str,
    run_id: str,
    poll_interval: float = RUN_POLL_INTERVAL,
    timeout: float | None = RUN_TIMEOUT,
) -> RunState:
    """
    Poll a run every poll_interval seconds until it completes.

    Raises:
        RunFailedError: The run ended in failed, cancelled, expired or incomplete.
        RunTimeoutError: The run was still going after timeout seconds.
    """
    try:
        return await asyncio.wait_for(
            _poll_until_terminal(thread_id, run_id, poll_interval),
            timeout=timeout,
        )
    except asyncio.TimeoutError as e:
        raise RunTimeoutError(run_id, timeout or 0.0) from e


def select_reply(thread_id: str, messages: list[ThreadMessage]) -> str:
    """Text of the first assistant-authored message. Raises NoResponseError if there is none."""
    for message in messages:
        if message.role == "assistant":
            return message.content.as_text()
    raise NoResponseError(thread_id)


async def generate_reply(email_body: str) -> str:
    """
    Generate a reply to email_body grounded in the company knowledge file.

    Raises:
        GenerationError: For any failure; the specific error is on .cause.
    """
    logger.info("[reply:generate] IN  email_len=%d", len(email_body))
    try:
        vector_store_id = await ensure_vector_store()
        assistant_id = await ensure_assistant()

        platform = get_platform()
        thread_id = await platform.create_thread(vector_store_id)
        await platform.create_message(thread_id, role="user", content=build_prompt(email_body))

        logger.info("Generating response on thread %s", thread_id)
        run = await platform.create_run(thread_id, assistant_id)
        await wait_for_run(thread_id, run.id, poll_interval=RUN_POLL_INTERVAL, timeout=RUN_TIMEOUT)

        messages = await platform.list_messages(thread_id)
        reply = select_reply(thread_id, messages)
    except Exception as e:
        logger.exception("[reply:generate] failed cause=%s: %s", type(e).__name__, e)
        raise GenerationError(cause=e) from e
    logger.info("[reply:generate] OUT reply_len=%d", len(reply))
    return reply
