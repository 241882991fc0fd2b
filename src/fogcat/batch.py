"""Batch resolve, close and reopen of cases."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from fogcat.api import RemoteCallError
from fogcat.constants import DEFAULT_RESOLVE_STATUS

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from fogcat.api import FogBugzClient
    from fogcat.cases import Case
    from fogcat.session import Session

logger = logging.getLogger(__name__)


@dataclass
class BatchFailure:
    """A case whose mutation call failed."""

    case_id: str
    error: str


@dataclass
class BatchResult:
    """Outcome of one batch operation.

    ``succeeded`` keeps the input order. Cases not attempted because of
    ``fail_fast`` appear in neither list.
    """

    succeeded: list[str] = field(default_factory=list)
    failed: list[BatchFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if no case failed."""
        return not self.failed


def _run_batch(
    session: Session,
    cases: Iterable[Case],
    action: str,
    call: Callable[[FogBugzClient, str], Any],
    on_progress: Callable[[Case], None] | None,
    fail_fast: bool,
) -> BatchResult:
    result = BatchResult()
    client: FogBugzClient | None = None

    for case in cases:
        case_id = str(case.get("ixBug", ""))
        if client is None:
            client = session.authenticate()
        try:
            call(client, case_id)
        except RemoteCallError as e:
            logger.info("Could not %s case %s: %s", action, case_id, e)
            result.failed.append(BatchFailure(case_id=case_id, error=str(e)))
        else:
            result.succeeded.append(case_id)
        if on_progress is not None:
            on_progress(case)
        if fail_fast and result.failed:
            break

    return result


def resolve_cases(
    session: Session,
    cases: Iterable[Case],
    status: int | str = DEFAULT_RESOLVE_STATUS,
    *,
    on_progress: Callable[[Case], None] | None = None,
    fail_fast: bool = False,
) -> BatchResult:
    """Resolve each case with the given status.

    Args:
        session: Authenticated session
        cases: Cases to resolve, each with an ``ixBug`` field
        status: Resolution status id (45 is "Fixed")
        on_progress: Called with each case after its call was attempted
        fail_fast: Stop at the first failed case instead of continuing

    Returns:
        Ids resolved, and the cases that failed
    """
    return _run_batch(
        session,
        cases,
        "resolve",
        lambda client, case_id: client.command(
            "resolve", ixBug=case_id, ixStatus=status
        ),
        on_progress,
        fail_fast,
    )


def close_cases(
    session: Session,
    cases: Iterable[Case],
    *,
    on_progress: Callable[[Case], None] | None = None,
    fail_fast: bool = False,
) -> BatchResult:
    """Close each case. See :func:`resolve_cases` for the arguments."""
    return _run_batch(
        session,
        cases,
        "close",
        lambda client, case_id: client.command("close", ixBug=case_id),
        on_progress,
        fail_fast,
    )


def reopen_cases(
    session: Session,
    cases: Iterable[Case],
    *,
    on_progress: Callable[[Case], None] | None = None,
    fail_fast: bool = False,
) -> BatchResult:
    """Reopen each case. See :func:`resolve_cases` for the arguments."""
    return _run_batch(
        session,
        cases,
        "reopen",
        lambda client, case_id: client.command("reopen", ixBug=case_id),
        on_progress,
        fail_fast,
    )
