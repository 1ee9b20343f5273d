"""Pytest configuration and shared fixtures."""
import asyncio
import itertools
from datetime import datetime, timedelta

import pytest

from chabby.agent import AgentClient, AgentResult
from chabby.conversation import ConversationStore
from chabby.session import ChatSession

BASE_TIME = datetime(2026, 3, 14, 9, 30, 0)


class FakeAgentClient(AgentClient):
    """Scripted agent backend.

    Each call pops the next scripted outcome: an AgentResult (or raw mapping)
    is returned, an exception instance is raised. When ``gate`` is set, calls
    block until it is released.
    """

    def __init__(self, *outcomes, gate: asyncio.Event | None = None):
        super().__init__()
        self._outcomes = list(outcomes)
        self.gate = gate
        self.calls: list[tuple[str, str]] = []
        self.started = asyncio.Event()
        self.closed = False

    def script(self, *outcomes) -> None:
        self._outcomes.extend(outcomes)

    async def call_agent(self, message: str, agent_id: str) -> AgentResult:
        self.calls.append((message, agent_id))
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        outcome = self._outcomes.pop(0) if self._outcomes else AgentResult.ok("ok")
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True

    @property
    def backend_type(self) -> str:
        return "fake"


class TickingClock:
    """Clock that advances one second per reading."""

    def __init__(self, start: datetime = BASE_TIME):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture
def id_generator():
    """Return a deterministic id generator (id-1, id-2, ...)."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def clock():
    """Return a clock that ticks one second per call."""
    return TickingClock()


@pytest.fixture
def store(id_generator, clock):
    """Return an empty conversation store with deterministic ids and time."""
    return ConversationStore(id_generator=id_generator, clock=clock)


@pytest.fixture
def fake_client():
    """Return a scripted fake agent client with no outcomes queued."""
    return FakeAgentClient()


@pytest.fixture
def session(fake_client, store, id_generator, clock):
    """Return a chat session wired to the fake client and test store."""
    return ChatSession(fake_client, store=store, id_generator=id_generator, clock=clock)


@pytest.fixture
def debug_log():
    """Return a list that collects (level, component, message) debug entries."""
    return []
