"""Shared test fixtures for Faultwarden."""

from __future__ import annotations

import io
import json
from collections.abc import Callable

import httpx
import pytest

from faultwarden.models.events import FaultEvent
from faultwarden.sources.channel import FaultChannel

COLLECTOR_URL = "https://collector.test/api/faults"


def make_chained_fault(message: str = "outer failure") -> BaseException:
    """Return a raised RuntimeError caused by a raised ValueError."""
    try:
        try:
            raise ValueError("inner failure")
        except ValueError as exc:
            raise RuntimeError(message) from exc
    except RuntimeError as exc:
        return exc


class FakeApplication:
    """Application-level source driven by the test."""

    def __init__(self) -> None:
        self.fault_occurred = FaultChannel("fault_occurred")

    def raise_fault(self, exc: BaseException) -> FaultEvent:
        event = FaultEvent(exception=exc)
        self.fault_occurred.emit(event)
        return event


class FakeDomain:
    """Domain-level source driven by the test."""

    def __init__(self) -> None:
        self.fault_observed = FaultChannel("fault_observed")
        self.fault_terminal = FaultChannel("fault_terminal")

    def terminal(self, exc: BaseException) -> FaultEvent:
        event = FaultEvent(exception=exc)
        self.fault_terminal.emit(event)
        return event


class RecordingCollector:
    """An ``httpx.MockTransport`` handler that records every request."""

    def __init__(
        self,
        status_code: int = 200,
        error: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json={"accepted": True})

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))

    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def stream() -> io.StringIO:
    """Provide an in-memory diagnostic stream."""
    return io.StringIO()


@pytest.fixture
def fault() -> BaseException:
    return make_chained_fault()


@pytest.fixture
def fault_factory() -> Callable[..., BaseException]:
    return make_chained_fault


@pytest.fixture
def application() -> FakeApplication:
    return FakeApplication()


@pytest.fixture
def domain() -> FakeDomain:
    return FakeDomain()


@pytest.fixture
def collector() -> RecordingCollector:
    return RecordingCollector()


@pytest.fixture
def collector_factory() -> Callable[..., RecordingCollector]:
    return RecordingCollector


@pytest.fixture
def collector_url() -> str:
    return COLLECTOR_URL
