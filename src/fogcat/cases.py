"""Case search, filtering and list retrieval."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fogcat.constants import LIST_SINGULARS, OPEN_FALSE, OPEN_TRUE

if TYPE_CHECKING:
    from collections.abc import Iterable

    from fogcat.session import Session

Case = dict[str, Any]
ListItem = dict[str, Any]


def normalize_query(parts: Iterable[str] | None) -> str:
    """Join CLI query arguments into one search string.

    Arguments are joined without a delimiter, so ``12, 25`` given as two
    shell words becomes ``12,25``.

    Examples:
        ["12,25,556"]          -> "12,25,556"
        ["12,", "25"]          -> "12,25"
        ["Test Title"]         -> "Test Title"
        []                     -> ""
    """
    if not parts:
        return ""
    return "".join(parts).strip()


def as_list(value: Any) -> list[dict[str, Any]]:
    """Normalize a one-or-many API collection into a list.

    The XML API returns a single mapping when exactly one element matched
    and a list when several did.
    """
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        return [v for v in value if isinstance(v, dict)]
    return []


def _collection(data: dict[str, Any] | None, outer: str, inner: str) -> Any:
    if not data:
        return None
    container = data.get(outer)
    if not isinstance(container, dict):
        return None
    return container.get(inner)


def search_all(
    session: Session,
    query: str,
    columns: str | None = None,
    mine: bool = False,
) -> list[Case]:
    """Search for cases.

    A blank query returns the caller's current case list. A malformed query
    is handled the same way by the server.

    Args:
        session: Authenticated session
        query: Free text, a case number or comma-separated case numbers
        columns: Comma-separated columns to fetch (default from settings)
        mine: Only keep cases assigned to the authenticated user

    Returns:
        Matching cases, in server order
    """
    client = session.authenticate()
    cols = columns if columns is not None else session.settings.default_columns
    results = client.command("search", q=query, cols=cols)

    cases = as_list(_collection(results, "cases", "case"))
    if mine:
        email = session.email
        cases = [c for c in cases if c.get("sEmailAssignedTo") == email]
    return cases


def search_open(
    session: Session,
    query: str,
    columns: str | None = None,
    mine: bool = False,
) -> list[Case]:
    """Search for cases, keeping only those that are not closed."""
    cases = search_all(session, query, columns, mine)
    return [c for c in cases if c.get("fOpen") != OPEN_FALSE]


def search_closed(
    session: Session,
    query: str,
    columns: str | None = None,
    mine: bool = False,
) -> list[Case]:
    """Search for cases, keeping only those that are not open."""
    cases = search_all(session, query, columns, mine)
    return [c for c in cases if c.get("fOpen") != OPEN_TRUE]


def singularize(list_type: str) -> str:
    """Return the element name used for one entry of a list response."""
    lower = list_type.lower()
    if lower in LIST_SINGULARS:
        return LIST_SINGULARS[lower]
    if lower.endswith("ies"):
        return lower[:-3] + "y"
    if lower.endswith("ses"):
        return lower[:-2]
    return lower.removesuffix("s")


def list_command(list_type: str) -> str:
    """Return the API command for a list type (statuses -> listStatuses)."""
    return f"list{list_type.capitalize()}"


def list_items(
    session: Session,
    list_type: str,
    options: dict[str, Any] | None = None,
) -> list[ListItem]:
    """Fetch a list of objects from FogBugz.

    Args:
        session: Authenticated session
        list_type: Plural type name (statuses, people, projects, categories)
        options: Filters specific to the list, sent verbatim
            (e.g. ``{"fResolved": 1, "ixCategory": "2"}`` for statuses)

    Returns:
        List items, empty if the response holds none
    """
    client = session.authenticate()
    results = client.command(list_command(list_type), **(options or {}))
    return as_list(
        _collection(results, list_type.lower(), singularize(list_type)),
    )
