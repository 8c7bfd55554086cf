"""Pytest configuration - loads .env for integration tests and stubs the transport for unit tests."""

import io
import json
import urllib.error
import urllib.request
from dataclasses import dataclass
from email.message import Message
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

from tavus_cli.core import client as client_module
from tavus_cli.core.config import reset_configuration

# Load .env from project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


# =============================================================================
# Fake transport
# =============================================================================


@dataclass
class RecordedRequest:
    """One request captured by FakeTransport."""

    method: str
    url: str
    headers: dict[str, str]
    data: bytes | None
    timeout: float | None

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())

    @property
    def json(self) -> Any:
        return json.loads(self.data.decode("utf-8")) if self.data is not None else None


class FakeResponse:
    def __init__(self, status: int, body: bytes):
        self.status = status
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc: object) -> None:
        return None


class FakeTransport:
    """Stand-in for the client's URL opener that replays queued responses."""

    def __init__(self) -> None:
        self.requests: list[RecordedRequest] = []
        self._queue: list[tuple[int, bytes] | BaseException] = []

    def respond(self, status: int = 200, body: Any = "") -> None:
        if not isinstance(body, (str, bytes)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._queue.append((status, body))

    def fail(self, error: BaseException) -> None:
        self._queue.append(error)

    @property
    def last(self) -> RecordedRequest:
        return self.requests[-1]

    def open(self, req: urllib.request.Request, timeout: float | None = None) -> FakeResponse:
        self.requests.append(
            RecordedRequest(
                method=req.get_method(),
                url=req.full_url,
                headers={k.lower(): v for k, v in req.header_items()},
                data=req.data,
                timeout=timeout,
            )
        )
        outcome = self._queue.pop(0) if self._queue else (200, b"{}")
        if isinstance(outcome, BaseException):
            raise outcome
        status, body = outcome
        if 200 <= status < 300:
            return FakeResponse(status, body)
        raise urllib.error.HTTPError(req.full_url, status, "error", Message(), io.BytesIO(body))


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_configuration(monkeypatch):
    """Isolate tests from process-wide defaults and the environment."""
    for name in ("TAVUS_API_KEY", "TAVUS_BASE_URL", "TAVUS_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    reset_configuration()
    yield
    reset_configuration()


@pytest.fixture
def transport(monkeypatch) -> FakeTransport:
    """Replace the client's URL opener with a recording fake."""
    fake = FakeTransport()
    monkeypatch.setattr(client_module, "_opener", fake)
    return fake
