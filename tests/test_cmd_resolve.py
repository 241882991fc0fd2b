"""Tests for the resolve command."""

from __future__ import annotations

import json

from cli_test_helpers import make_case, runner, search_response
from conftest import FakeFogBugz

from fogcat.cli import app
from fogcat.session import Session


class TestCLIResolve:
    """Test resolve command."""

    def test_resolve_my_open_cases(
        self, session: Session, fogbugz: FakeFogBugz
    ) -> None:
        """Only open cases assigned to me are resolved, as Fixed by default."""
        fogbugz.responses["search"] = search_response(
            make_case("12"),
            make_case("13", email="b@x.com"),
            make_case("14", f_open="false"),
            make_case("15"),
        )

        result = runner.invoke(app, ["resolve", "12,13,14,15"], obj=session)

        assert result.exit_code == 0, result.output
        assert "The following cases were resolved: 12, 15" in result.stdout
        assert fogbugz.commands("resolve") == [
            {"ixBug": "12", "ixStatus": 45},
            {"ixBug": "15", "ixStatus": 45},
        ]
        assert fogbugz.commands("close") == []

    def test_resolve_with_status(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """--status overrides the resolution status."""
        fogbugz.responses["search"] = search_response(make_case("12"))

        result = runner.invoke(app, ["resolve", "12", "--status", "47"], obj=session)

        assert result.exit_code == 0, result.output
        assert fogbugz.commands("resolve") == [{"ixBug": "12", "ixStatus": 47}]

    def test_configured_status(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """The resolve_status setting is the default for --status."""
        session.settings.resolve_status = 48
        fogbugz.responses["search"] = search_response(make_case("12"))

        runner.invoke(app, ["resolve", "12"], obj=session)

        assert fogbugz.commands("resolve")[0]["ixStatus"] == 48

    def test_resolve_and_close(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """--close closes the same cases after resolving them."""
        fogbugz.responses["search"] = search_response(make_case("12"), make_case("13"))

        result = runner.invoke(app, ["resolve", "12,13", "--close"], obj=session)

        assert result.exit_code == 0, result.output
        assert "resolved: 12, 13" in result.stdout
        assert "The following cases were closed: 12, 13" in result.stdout
        assert [name for name, _ in fogbugz.calls] == [
            "search",
            "resolve",
            "resolve",
            "close",
            "close",
        ]

    def test_logs_on_once(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """Search, resolve and close share one credential exchange."""
        fogbugz.responses["search"] = search_response(make_case("12"))

        runner.invoke(app, ["resolve", "12", "--close"], obj=session)

        assert len(fogbugz.logons) == 1

    def test_no_matching_cases(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """No open cases is informational."""
        fogbugz.responses["search"] = search_response(make_case("12", f_open="false"))

        result = runner.invoke(app, ["resolve", "12"], obj=session)

        assert result.exit_code == 0
        assert "No open cases were found that match that query." in result.stdout
        assert fogbugz.commands("resolve") == []

    def test_query_required(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """resolve without a query is a user error."""
        result = runner.invoke(app, ["resolve"], obj=session)

        assert result.exit_code == 1
        assert "You must provide a search query." in result.output
        assert fogbugz.calls == []
        assert fogbugz.logons == []

    def test_partial_failure(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """A failing case is reported, the rest are resolved, exit code is 1."""
        fogbugz.responses["search"] = search_response(
            make_case("12"), make_case("13"), make_case("14")
        )
        fogbugz.failures.add(("resolve", "13"))

        result = runner.invoke(app, ["resolve", "12,13,14"], obj=session)

        assert result.exit_code == 1
        assert "The following cases were resolved: 12, 14" in result.stdout
        assert "resolving case 13" in result.output

    def test_fail_fast(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """--fail-fast stops at the first failure."""
        fogbugz.responses["search"] = search_response(
            make_case("12"), make_case("13"), make_case("14")
        )
        fogbugz.failures.add(("resolve", "12"))

        result = runner.invoke(app, ["resolve", "12,13,14", "--fail-fast"], obj=session)

        assert result.exit_code == 1
        assert [p["ixBug"] for p in fogbugz.commands("resolve")] == ["12"]

    def test_progress_bar(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """--progress does not change what is resolved."""
        fogbugz.responses["search"] = search_response(make_case("12"), make_case("13"))

        result = runner.invoke(app, ["resolve", "12,13", "--progress"], obj=session)

        assert result.exit_code == 0, result.output
        assert "resolved: 12, 13" in result.output

    def test_json_output(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """--json reports resolved and closed ids."""
        fogbugz.responses["search"] = search_response(make_case("12"))

        result = runner.invoke(
            app,
            ["--json", "resolve", "12", "--close"],
            obj=session,
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {
            "resolved": ["12"],
            "closed": ["12"],
            "failed": [],
        }
