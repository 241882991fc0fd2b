"""Tests for the reopen command."""

from __future__ import annotations

import json

from cli_test_helpers import make_case, runner, search_response
from conftest import FakeFogBugz

from fogcat.cli import app
from fogcat.session import Session


class TestCLIReopen:
    """Test reopen command."""

    def test_reopen_closed_cases(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """Closed cases are reopened whoever they are assigned to."""
        fogbugz.responses["search"] = search_response(
            make_case("12", f_open="false"),
            make_case("13", f_open="false", email="b@x.com"),
            make_case("14"),
        )

        result = runner.invoke(app, ["reopen", "12,13,14"], obj=session)

        assert result.exit_code == 0, result.output
        assert "The following cases were reopened: 12, 13" in result.stdout
        assert fogbugz.commands("reopen") == [{"ixBug": "12"}, {"ixBug": "13"}]

    def test_no_closed_cases(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """Nothing to reopen is informational."""
        fogbugz.responses["search"] = search_response(make_case("12"))

        result = runner.invoke(app, ["reopen", "12"], obj=session)

        assert result.exit_code == 0
        assert "No closed cases were found that match that query." in result.stdout
        assert fogbugz.commands("reopen") == []

    def test_query_required(self, session: Session) -> None:
        """reopen without a query is a user error."""
        result = runner.invoke(app, ["reopen"], obj=session)

        assert result.exit_code == 1
        assert "You must provide a search query." in result.output

    def test_json_output(self, session: Session, fogbugz: FakeFogBugz) -> None:
        """--json reports reopened ids."""
        fogbugz.responses["search"] = search_response(make_case("12", f_open="false"))

        result = runner.invoke(app, ["--json", "reopen", "12"], obj=session)

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"reopened": ["12"], "failed": []}
