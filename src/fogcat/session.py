"""Authenticated session for one fogcat invocation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fogcat.api import AuthenticationError, FogBugzClient

if TYPE_CHECKING:
    from collections.abc import Callable

    from fogcat.config import Settings

logger = logging.getLogger(__name__)


def _no_prompt(question: str, hide_input: bool) -> str:
    msg = f"Missing setting and no prompt available: {question}"
    raise ValueError(msg)


class Session:
    """Holds credentials and the cached token for the process lifetime.

    The token is obtained with one credential exchange on the first call to
    :meth:`authenticate`; later calls reuse the same client handle, so the
    password is never sent twice. Call :meth:`close` when done.

    Args:
        settings: Resolved settings (server, credentials, defaults)
        prompt: Called as ``prompt(question, hide_input)`` for any server
            address, email or password missing from ``settings``
        client_factory: Builds client handles; defaults to FogBugzClient
    """

    def __init__(
        self,
        settings: Settings,
        prompt: Callable[[str, bool], str] | None = None,
        client_factory: Callable[..., FogBugzClient] = FogBugzClient,
    ) -> None:
        self.settings = settings
        self._prompt = prompt or _no_prompt
        self._client_factory = client_factory
        self._token: str | None = settings.token
        self._client: FogBugzClient | None = None

    @property
    def token(self) -> str | None:
        """The cached token, or None before the first logon."""
        return self._token

    @property
    def server(self) -> str:
        """Server address, prompting once if it is not configured."""
        if not self.settings.server:
            self.settings.server = self._prompt(
                "What is the URL of your FogBugz server?", False
            )
        return self.settings.server

    @property
    def email(self) -> str:
        """Email of the authenticated user, prompting once if not configured."""
        if not self.settings.email:
            self.settings.email = self._prompt("What is your FogBugz email?", False)
        return self.settings.email

    def _password(self) -> str:
        if not self.settings.password:
            self.settings.password = self._prompt(
                "What is your FogBugz password?", True
            )
        return self.settings.password

    def authenticate(self) -> FogBugzClient:
        """Return the client handle, logging on only if no token is cached.

        The handle is built once and reused for the rest of the session.

        Raises:
            AuthenticationError: If the server rejects the credentials
        """
        if self._client is not None:
            logger.debug("Reusing cached token")
            return self._client

        if self._token is not None:
            self._client = self._client_factory(
                self.server,
                token=self._token,
                timeout=self.settings.timeout,
            )
            return self._client

        client = self._client_factory(
            self.server,
            email=self.email,
            password=self._password(),
            timeout=self.settings.timeout,
        )
        try:
            self._token = client.logon()
        except AuthenticationError:
            client.close()
            raise
        logger.debug("Authenticated as %s", self.settings.email)
        self._client = client
        return client

    def logoff(self) -> None:
        """Invalidate the cached token on the server and forget it."""
        if self._token is None:
            return
        client = self.authenticate()
        try:
            client.logoff()
        finally:
            self._token = None
            self.close()

    def close(self) -> None:
        """Close the client handle, keeping the cached token."""
        if self._client is not None:
            self._client.close()
            self._client = None
