"""Tests for Session authentication and token caching."""

from __future__ import annotations

import pytest
from conftest import EMAIL, SERVER, TOKEN, FakeFogBugz

from fogcat.api import AuthenticationError
from fogcat.config import Settings
from fogcat.session import Session


class TestAuthenticate:
    """Tests for Session.authenticate."""

    def test_first_call_logs_on_with_credentials(
        self, session: Session, fogbugz: FakeFogBugz
    ) -> None:
        """The first call exchanges email and password for a token."""
        client = session.authenticate()

        assert fogbugz.logons == [EMAIL]
        assert client.token == TOKEN
        assert session.token == TOKEN
        assert fogbugz.clients[0].password == "secret"

    def test_second_call_reuses_cached_token(
        self, session: Session, fogbugz: FakeFogBugz
    ) -> None:
        """Later calls reuse the logged-on client instead of logging on again."""
        first = session.authenticate()
        second = session.authenticate()

        assert len(fogbugz.logons) == 1
        assert second is first
        assert second.token == TOKEN
        assert len(fogbugz.clients) == 1

    def test_rejected_credentials_raise(
        self, settings: Settings, fogbugz: FakeFogBugz
    ) -> None:
        """A rejected logon raises and caches nothing."""
        settings.password = "wrong"
        session = Session(settings, client_factory=fogbugz.client)

        with pytest.raises(AuthenticationError):
            session.authenticate()
        assert session.token is None
        assert fogbugz.clients[0].closed is True

    def test_configured_token_skips_logon(self, fogbugz: FakeFogBugz) -> None:
        """A token from settings is used without a credential exchange."""
        session = Session(
            Settings(server=SERVER, token="preset"),
            client_factory=fogbugz.client,
        )
        client = session.authenticate()

        assert fogbugz.logons == []
        assert client.token == "preset"

    def test_timeout_is_passed_to_client(
        self, settings: Settings, fogbugz: FakeFogBugz
    ) -> None:
        """The configured timeout reaches every client handle."""
        settings.timeout = 4.5
        session = Session(settings, client_factory=fogbugz.client)
        session.authenticate()
        session.authenticate()

        assert [c.timeout for c in fogbugz.clients] == [4.5]


class TestPrompting:
    """Tests for missing credentials."""

    def test_missing_values_are_prompted_once(self, fogbugz: FakeFogBugz) -> None:
        """Server, email and password are asked for once each."""
        asked: list[tuple[str, bool]] = []
        answers = {
            "What is the URL of your FogBugz server?": SERVER,
            "What is your FogBugz email?": EMAIL,
            "What is your FogBugz password?": "secret",
        }

        def prompt(question: str, hide_input: bool) -> str:
            asked.append((question, hide_input))
            return answers[question]

        session = Session(Settings(), prompt=prompt, client_factory=fogbugz.client)
        session.authenticate()
        session.authenticate()
        assert session.email == EMAIL

        assert [q for q, _ in asked] == list(answers)
        assert dict(asked)["What is your FogBugz password?"] is True
        assert dict(asked)["What is your FogBugz email?"] is False

    def test_missing_value_without_prompt(self, fogbugz: FakeFogBugz) -> None:
        """Without a prompt callable a missing setting is an error."""
        session = Session(Settings(server=SERVER), client_factory=fogbugz.client)
        with pytest.raises(ValueError, match="email"):
            session.authenticate()


class TestLogoff:
    """Tests for Session.logoff."""

    def test_logoff_clears_token(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """logoff invalidates the token remotely and forgets it."""
        session.authenticate()
        session.logoff()

        assert fogbugz.commands("logoff") == [{}]
        assert session.token is None

    def test_logoff_without_token_is_a_noop(
        self, session: Session, fogbugz: FakeFogBugz
    ) -> None:
        """Nothing is sent when there is no token."""
        session.logoff()
        assert fogbugz.calls == []
        assert fogbugz.logons == []

    def test_logoff_closes_client(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """The client handle is released after logging off."""
        session.authenticate()
        session.logoff()
        assert fogbugz.clients[0].closed is True


class TestClose:
    """Tests for Session.close."""

    def test_close_releases_client_and_keeps_token(
        self, session: Session, fogbugz: FakeFogBugz
    ) -> None:
        """close releases the handle; the next call reuses the cached token."""
        session.authenticate()
        session.close()

        assert fogbugz.clients[0].closed is True
        assert session.token == TOKEN

        client = session.authenticate()
        assert len(fogbugz.logons) == 1
        assert client.token == TOKEN
        assert client.password is None

    def test_close_without_client(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """Closing an unused session does nothing."""
        session.close()
        assert fogbugz.clients == []
