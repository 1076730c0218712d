"""
Shared fixtures: an in-memory stand-in for the assistants platform and a
knowledge-file download stub, so tests need neither OpenAI nor the network.
"""

import itertools
from pathlib import Path
from unittest.mock import patch

import pytest

from app.core.resource_cache import reset_all
from app.services import platform as platform_module
from app.services.platform import AssistantRef, PlainText, RunState, RunStatus, ThreadMessage


class FakePlatform:
    """Records every call and replays scripted run statuses and thread messages."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple]] = []
        self.assistants: list[AssistantRef] = []
        self.run_statuses: list[RunStatus] = [RunStatus.COMPLETED]
        self.run_last_error: str | None = None
        self.messages: list[ThreadMessage] = [
            ThreadMessage(id="msg_reply", role="assistant", content=PlainText("Thanks for reaching out.")),
        ]
        self.uploaded_content: list[bytes] = []
        self.failures: dict[str, Exception] = {}
        self.retrieve_count = 0
        self._ids = itertools.count(1)

    def _record(self, op: str, *args) -> None:
        self.calls.append((op, args))
        if op in self.failures:
            raise self.failures.pop(op)

    def count(self, op: str) -> int:
        return sum(1 for name, _ in self.calls if name == op)

    def args_of(self, op: str) -> tuple:
        return next(args for name, args in self.calls if name == op)

    async def upload_file(self, path: Path, purpose: str) -> str:
        self._record("upload_file", path, purpose)
        self.uploaded_content.append(path.read_bytes())
        return f"file_{next(self._ids)}"

    async def create_vector_store(self, name: str, file_ids: list[str]) -> str:
        self._record("create_vector_store", name, file_ids)
        return f"vs_{next(self._ids)}"

    async def list_assistants(self) -> list[AssistantRef]:
        self._record("list_assistants")
        return list(self.assistants)

    async def create_assistant(self, name, instructions, model, tools) -> str:
        self._record("create_assistant", name, instructions, model, tools)
        assistant_id = f"asst_{next(self._ids)}"
        self.assistants.append(AssistantRef(id=assistant_id, name=name))
        return assistant_id

    async def create_thread(self, vector_store_id: str | None = None) -> str:
        self._record("create_thread", vector_store_id)
        return "thread_1"

    async def create_message(self, thread_id: str, role: str, content: str) -> str:
        self._record("create_message", thread_id, role, content)
        return "msg_user"

    async def create_run(self, thread_id: str, assistant_id: str) -> RunState:
        self._record("create_run", thread_id, assistant_id)
        return RunState(id="run_1", status=RunStatus.QUEUED)

    async def retrieve_run(self, thread_id: str, run_id: str) -> RunState:
        self._record("retrieve_run", thread_id, run_id)
        status = self.run_statuses[min(self.retrieve_count, len(self.run_statuses) - 1)]
        self.retrieve_count += 1
        return RunState(id=run_id, status=status, last_error=self.run_last_error)

    async def list_messages(self, thread_id: str) -> list[ThreadMessage]:
        self._record("list_messages", thread_id)
        return list(self.messages)


@pytest.fixture(autouse=True)
def reset_resource_cache():
    reset_all()
    yield
    reset_all()


@pytest.fixture
def fake_platform(monkeypatch: pytest.MonkeyPatch) -> FakePlatform:
    fake = FakePlatform()
    monkeypatch.setattr(platform_module, "_platform", fake)
    return fake


@pytest.fixture
def knowledge_download(tmp_path: Path):
    """Replace the knowledge download with one that writes a fresh local file per call."""
    counter = itertools.count(1)

    async def _download(*args, **kwargs) -> Path:
        path = tmp_path / f"knowledge_{next(counter)}.json"
        path.write_text('{"company": "Acme", "shipping": "Orders ship within 1 day."}')
        return path

    with patch("app.services.knowledge_service.download_knowledge_file", side_effect=_download) as mock:
        yield mock


@pytest.fixture
def fast_polling(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("app.services.reply_service.RUN_POLL_INTERVAL", 0)
