"""FogBugz XML API client.

Every call is a form-encoded POST to ``{server}/api.asp`` with a ``cmd``
parameter. Responses are XML documents rooted at ``<response>`` and are
returned as nested dicts (see :func:`xml_to_dict`).
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Any

import requests
from defusedxml import DefusedXmlException
from defusedxml import ElementTree as DefusedET

from fogcat.constants import API_PATH, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class FogBugzError(Exception):
    """Base class for errors reported by the FogBugz API."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class AuthenticationError(FogBugzError):
    """Raised when the server rejects the logon credentials."""


class RemoteCallError(FogBugzError):
    """Raised when a search, list or mutation call fails."""


def _element_to_value(element: ET.Element) -> Any:
    children = list(element)
    if not children and not element.attrib:
        text = (element.text or "").strip()
        return text or None

    result: dict[str, Any] = dict(element.attrib)
    shadowed = set(element.attrib)
    for child in children:
        value = _element_to_value(child)
        if child.tag in shadowed:
            # <case ixBug="12"><ixBug>12</ixBug> carries the id twice
            result[child.tag] = value
            shadowed.discard(child.tag)
        elif child.tag in result:
            existing = result[child.tag]
            if isinstance(existing, list):
                existing.append(value)
            else:
                result[child.tag] = [existing, value]
        else:
            result[child.tag] = value

    if not children:
        text = (element.text or "").strip()
        if text:
            result["#text"] = text
    return result


def xml_to_dict(payload: str | bytes) -> dict[str, Any]:
    """Parse an API response into a dict of the ``<response>`` element.

    Repeated child tags become lists, attributes become keys, text-only
    elements become strings and empty elements become ``None``. A tag that
    occurs once therefore stays a single value; callers that expect a
    collection must normalize it. A child element named like an attribute
    of its parent replaces the attribute value.

    Payloads come from the network, so they are parsed with defusedxml and
    entity declarations are refused.

    Raises:
        RemoteCallError: If the payload is not well-formed or is refused
    """
    try:
        root = DefusedET.fromstring(payload)
    except (ET.ParseError, DefusedXmlException) as e:
        msg = f"Malformed response from FogBugz: {e}"
        raise RemoteCallError(msg) from e

    value = _element_to_value(root)
    if value is None:
        return {}
    if isinstance(value, str):
        return {"#text": value}
    return value


def _api_error(data: dict[str, Any]) -> tuple[str, str | None] | None:
    """Return ``(message, code)`` if the response carries an ``<error>``."""
    if "error" not in data:
        return None
    error = data["error"]
    if isinstance(error, dict):
        return str(error.get("#text") or "Unknown error"), error.get("code")
    return str(error or "Unknown error"), None


class FogBugzClient:
    """Client handle for one FogBugz server.

    Args:
        server:  Server root URL (e.g. 'https://example.fogbugz.com')
        email:   Logon email, used by :meth:`logon`
        password: Logon password, used by :meth:`logon`
        token:   Token from a previous logon, used instead of credentials
        timeout: Seconds to wait for each HTTP response
    """

    def __init__(
        self,
        server: str,
        *,
        email: str | None = None,
        password: str | None = None,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._url = f"{server.rstrip('/')}{API_PATH}"
        self._email = email
        self._password = password
        self._timeout = timeout
        self._session = requests.Session()
        self.token = token

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    def _post(self, params: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self._session.post(
                self._url,
                data=params,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            msg = f"Could not reach FogBugz at {self._url}: {e}"
            raise RemoteCallError(msg) from e

        if not response.ok:
            msg = f"FogBugz API error {response.status_code}: {response.text[:200]}"
            raise RemoteCallError(msg, code=str(response.status_code))
        return xml_to_dict(response.content)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def logon(self) -> str:
        """Exchange the email and password for a token.

        Returns:
            The session token, also stored on ``self.token``

        Raises:
            AuthenticationError: If the credentials are missing or rejected
        """
        if not self._email or not self._password:
            msg = "Email and password are required to log on"
            raise AuthenticationError(msg)

        logger.debug("Logging on to %s as %s", self._url, self._email)
        try:
            data = self._post(
                {"cmd": "logon", "email": self._email, "password": self._password},
            )
        except RemoteCallError as e:
            raise AuthenticationError(str(e), code=e.code) from e

        error = _api_error(data)
        if error is not None:
            message, code = error
            raise AuthenticationError(f"Logon failed: {message}", code=code)

        token = data.get("token")
        if not isinstance(token, str) or not token:
            # Ambiguous logons list the matching people instead of a token
            msg = "Logon failed: server did not return a token"
            raise AuthenticationError(msg)

        self.token = token
        return token

    def command(self, name: str, **params: Any) -> dict[str, Any]:
        """Run an API command and return the parsed ``<response>``.

        Args:
            name: API command (search, resolve, listStatuses, ...)
            **params: Command parameters, sent verbatim

        Raises:
            RemoteCallError: On transport, HTTP or API errors
        """
        if not self.token:
            msg = f"Cannot run '{name}' without logging on first"
            raise RemoteCallError(msg)

        logger.debug("FogBugz command %s %s", name, sorted(params))
        payload = {k: v for k, v in params.items() if v is not None}
        payload["cmd"] = name
        payload["token"] = self.token
        data = self._post(payload)

        error = _api_error(data)
        if error is not None:
            message, code = error
            msg = f"{name} failed: {message}"
            raise RemoteCallError(msg, code=code)
        return data

    def logoff(self) -> None:
        """Invalidate the current token on the server."""
        if not self.token:
            return
        self.command("logoff")
        self.token = None

    def close(self) -> None:
        """Release the pooled HTTP connections."""
        self._session.close()

    def __enter__(self) -> FogBugzClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
