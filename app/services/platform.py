"""
Assistants platform client: OpenAI file storage, vector stores, assistants, threads and runs.

Responsibility: Call each platform capability and hand back plain ids and typed
results (RunState, ThreadMessage). openai errors become PlatformError here, and
the two message content shapes are resolved here, so nothing downstream touches
SDK objects.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from app.core.config import OPENAI_API_KEY, PLATFORM_TIMEOUT
from app.core.errors import PlatformError

logger = logging.getLogger(__name__)


class RunStatus(str, Enum):
    """Status of a run as reported by the platform."""

    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    EXPIRED = "expired"

    @property
    def is_success(self) -> bool:
        return self is RunStatus.COMPLETED

    @property
    def is_failure(self) -> bool:
        return self in _FAILED_STATUSES

    @property
    def is_terminal(self) -> bool:
        return self.is_success or self.is_failure


_FAILED_STATUSES = frozenset({
    RunStatus.CANCELLED,
    RunStatus.FAILED,
    RunStatus.INCOMPLETE,
    RunStatus.EXPIRED,
})


@dataclass
class RunState:
    id: str
    status: RunStatus
    last_error: str | None = None


@dataclass
class Segments:
    """Structured message content: ordered text parts."""

    parts: list[str]

    def as_text(self) -> str:
        return "\n".join(self.parts)


@dataclass
class PlainText:
    """Message content delivered as a single string."""

    text: str

    def as_text(self) -> str:
        return self.text


MessageContent = Segments | PlainText


@dataclass
class ThreadMessage:
    id: str
    role: str
    content: MessageContent


@dataclass
class AssistantRef:
    id: str
    name: str | None


def _part_text(part: Any) -> str | None:
    """Text value of one content part, or None for non-text parts (images, files)."""
    text = part.get("text") if isinstance(part, dict) else getattr(part, "text", None)
    if text is None:
        return None
    if isinstance(text, str):
        return text
    value = text.get("value") if isinstance(text, dict) else getattr(text, "value", None)
    return value if isinstance(value, str) else None


def message_content_from(raw: Any) -> MessageContent:
    """
    Resolve raw message content into Segments or PlainText.

    A plain string is kept as-is; a sequence of parts keeps each text part's
    value in order and skips parts that carry no text.
    """
    if isinstance(raw, str):
        return PlainText(raw)
    if raw is None:
        return Segments([])
    parts = [t for t in (_part_text(p) for p in raw) if t is not None]
    return Segments(parts)


def _run_state(run: Any) -> RunState:
    last_error = getattr(run, "last_error", None)
    message = getattr(last_error, "message", None) if last_error is not None else None
    return RunState(id=run.id, status=RunStatus(run.status), last_error=message)


class AssistantPlatform:
    """Thin async wrapper over the OpenAI assistants surface."""

    def __init__(self, client: AsyncOpenAI) -> None:
        self.client = client

    async def upload_file(self, path: Path, purpose: str) -> str:
        """Upload a local file to platform file storage. Returns the file id."""
        content = await asyncio.to_thread(path.read_bytes)
        try:
            uploaded = await self.client.files.create(file=(path.name, content), purpose=purpose)
        except OpenAIError as e:
            raise PlatformError("file upload", str(e)) from e
        logger.info("[platform:upload_file] OUT file_id=%s bytes=%d", uploaded.id, len(content))
        return uploaded.id

    async def create_vector_store(self, name: str, file_ids: list[str]) -> str:
        """Create a vector store seeded with the given files. Returns the vector store id."""
        try:
            store = await self.client.vector_stores.create(name=name, file_ids=file_ids)
        except OpenAIError as e:
            raise PlatformError("vector store creation", str(e)) from e
        logger.info("[platform:create_vector_store] OUT vector_store_id=%s", store.id)
        return store.id

    async def list_assistants(self) -> list[AssistantRef]:
        """Return every assistant on the account, following pagination."""
        refs: list[AssistantRef] = []
        try:
            async for assistant in self.client.beta.assistants.list(limit=100):
                refs.append(AssistantRef(id=assistant.id, name=assistant.name))
        except OpenAIError as e:
            raise PlatformError("assistant list", str(e)) from e
        logger.info("[platform:list_assistants] OUT count=%d", len(refs))
        return refs

    async def create_assistant(
        self,
        name: str,
        instructions: str,
        model: str,
        tools: list[dict[str, Any]],
    ) -> str:
        try:
            assistant = await self.client.beta.assistants.create(
                name=name,
                instructions=instructions,
                model=model,
                tools=tools,
            )
        except OpenAIError as e:
            raise PlatformError("assistant creation", str(e)) from e
        logger.info("[platform:create_assistant] OUT assistant_id=%s", assistant.id)
        return assistant.id

    async def create_thread(self, vector_store_id: str | None = None) -> str:
        """Create a conversation thread, optionally scoping file search to one vector store."""
        kwargs: dict[str, Any] = {}
        if vector_store_id:
            kwargs["tool_resources"] = {"file_search": {"vector_store_ids": [vector_store_id]}}
        try:
            thread = await self.client.beta.threads.create(**kwargs)
        except OpenAIError as e:
            raise PlatformError("thread creation", str(e)) from e
        logger.info("[platform:create_thread] OUT thread_id=%s", thread.id)
        return thread.id

    async def create_message(self, thread_id: str, role: str, content: str) -> str:
        try:
            message = await self.client.beta.threads.messages.create(
                thread_id,
                role=role,
                content=content,
            )
        except OpenAIError as e:
            raise PlatformError("message creation", str(e)) from e
        return message.id

    async def create_run(self, thread_id: str, assistant_id: str) -> RunState:
        try:
            run = await self.client.beta.threads.runs.create(thread_id, assistant_id=assistant_id)
        except OpenAIError as e:
            raise PlatformError("run creation", str(e)) from e
        state = _run_state(run)
        logger.info("[platform:create_run] OUT run_id=%s status=%s", state.id, state.status.value)
        return state

    async def retrieve_run(self, thread_id: str, run_id: str) -> RunState:
        try:
            run = await self.client.beta.threads.runs.retrieve(run_id, thread_id=thread_id)
        except OpenAIError as e:
            raise PlatformError("run retrieval", str(e)) from e
        return _run_state(run)

    async def list_messages(self, thread_id: str) -> list[ThreadMessage]:
        """Messages on the thread in the platform's default order (newest first)."""
        try:
            page = await self.client.beta.threads.messages.list(thread_id)
        except OpenAIError as e:
            raise PlatformError("message list", str(e)) from e
        return [
            ThreadMessage(id=m.id, role=m.role, content=message_content_from(m.content))
            for m in page.data
        ]


_platform: AssistantPlatform | None = None


def get_platform() -> AssistantPlatform:
    """Return the process-wide platform client, creating it on first use."""
    global _platform
    if _platform is None:
        try:
            client = AsyncOpenAI(api_key=OPENAI_API_KEY or None, timeout=PLATFORM_TIMEOUT)
        except OpenAIError as e:
            raise PlatformError("client setup", str(e)) from e
        _platform = AssistantPlatform(client)
        logger.info("OpenAI assistants client initialized")
    return _platform
