import io
from pathlib import Path

import pytest

from memory_cultivation.cultivation.approval import PromptSession


class FakeRunner:
    """Stands in for AICommandRunner; records every call."""

    def __init__(self, replies=None, error: Exception | None = None):
        self.replies = list(replies or [])
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def run(self, operation: str, prompt: str) -> str:
        self.calls.append((operation, prompt))
        if self.error is not None:
            raise self.error
        if self.replies:
            return self.replies.pop(0)
        return f"AI output {len(self.calls)}"


def make_session(*answers: str) -> tuple[PromptSession, io.StringIO]:
    out = io.StringIO()
    text = "".join(f"{a}\n" for a in answers)
    return PromptSession(io.StringIO(text), out), out


def write_memories(memory_dir: Path, names: list[str]) -> list[Path]:
    memory_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for name in names:
        path = memory_dir / name
        path.write_text(f"content of {name}", encoding="utf-8")
        paths.append(path)
    return paths


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
