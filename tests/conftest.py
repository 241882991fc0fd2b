"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from fogcat.api import AuthenticationError, RemoteCallError
from fogcat.config import Settings
from fogcat.session import Session

SERVER = "https://fogbugz.example.com"
EMAIL = "a@x.com"
PASSWORD = "secret"
TOKEN = "tok-1"


class FakeFogBugz:
    """In-memory stand-in for a FogBugz server.

    ``responses`` maps a command name to either a response dict or a callable
    taking the call parameters. ``failures`` holds ``(command, ixBug)`` pairs
    that raise RemoteCallError.
    """

    def __init__(self) -> None:
        self.password = PASSWORD
        self.logons: list[str | None] = []
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.clients: list[FakeClient] = []
        self.responses: dict[str, Any] = {}
        self.failures: set[tuple[str, str]] = set()

    def client(self, server: str, **kwargs: Any) -> FakeClient:
        """Client factory handed to Session."""
        client = FakeClient(self, server, **kwargs)
        self.clients.append(client)
        return client

    def commands(self, name: str) -> list[dict[str, Any]]:
        """Parameters of every call to ``name``, in call order."""
        return [params for cmd, params in self.calls if cmd == name]


class FakeClient:
    """Client handle bound to a FakeFogBugz."""

    def __init__(
        self,
        backend: FakeFogBugz,
        server: str,
        *,
        email: str | None = None,
        password: str | None = None,
        token: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.backend = backend
        self.server = server
        self.email = email
        self.password = password
        self.token = token
        self.timeout = timeout
        self.closed = False

    def logon(self) -> str:
        self.backend.logons.append(self.email)
        if self.password != self.backend.password:
            msg = "Logon failed: Incorrect password or username"
            raise AuthenticationError(msg, code="1")
        self.token = TOKEN
        return TOKEN

    def logoff(self) -> None:
        self.command("logoff")
        self.token = None

    def close(self) -> None:
        self.closed = True

    def command(self, name: str, **params: Any) -> dict[str, Any]:
        self.backend.calls.append((name, params))
        if (name, str(params.get("ixBug"))) in self.backend.failures:
            msg = f"{name} failed: Case {params.get('ixBug')} cannot be changed"
            raise RemoteCallError(msg, code="7")
        response = self.backend.responses.get(name, {})
        if callable(response):
            return response(params)
        return response


@pytest.fixture
def fogbugz() -> FakeFogBugz:
    """Provide a fresh fake FogBugz server."""
    return FakeFogBugz()


@pytest.fixture
def settings() -> Settings:
    """Provide settings with complete credentials."""
    return Settings(server=SERVER, email=EMAIL, password=PASSWORD)


@pytest.fixture
def session(settings: Settings, fogbugz: FakeFogBugz) -> Session:
    """Provide a session wired to the fake server."""
    return Session(settings, client_factory=fogbugz.client)
