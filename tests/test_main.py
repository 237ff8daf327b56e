"""
Unit tests for the command-line entry point.
"""

import json
from unittest.mock import patch

import pytest

from issuesmith.exceptions import NotFoundError
from issuesmith.formatting import Card, ToolResult
from issuesmith.main import main, setup_argument_parser


class TestArgumentParser:
    """Test argument parsing."""

    def test_tool_and_input(self):
        args = setup_argument_parser().parse_args(["get-github-issues", "--input", "{}", "--json"])

        assert args.tool == "get-github-issues"
        assert args.input == "{}"
        assert args.json is True

    def test_input_sources_are_exclusive(self):
        with pytest.raises(SystemExit):
            setup_argument_parser().parse_args(["x", "--input", "{}", "--input-file", "a.json"])


class TestMain:
    """Test command dispatch."""

    def test_list_tools(self, capsys):
        assert main(["--list-tools"]) == 0

        output = capsys.readouterr().out
        assert "write-code" in output
        assert "close-github-issue" in output

    def test_invokes_tool(self, capsys):
        result = ToolResult(
            text="Found 0 issues in repository acme/widgets",
            data={"issues": []},
            ui=Card("GitHub Issues", "No issues found"),
        )
        with patch("issuesmith.main.invoke_tool", return_value=result) as invoke:
            exit_code = main(
                ["get-github-issues", "--input", '{"repoURL": "https://github.com/acme/widgets"}', "--json"]
            )

        assert exit_code == 0
        invoke.assert_called_once_with("get-github-issues", {"repoURL": "https://github.com/acme/widgets"})
        output = capsys.readouterr().out
        assert "Found 0 issues" in output
        assert "GitHub Issues" in output
        assert '"issues": []' in output

    def test_input_file(self, tmp_path):
        request_file = tmp_path / "request.json"
        request_file.write_text(json.dumps({"repoURL": "acme/widgets"}), encoding="utf-8")
        result = ToolResult(text="ok")

        with patch("issuesmith.main.invoke_tool", return_value=result) as invoke:
            assert main(["get-github-issues", "--input-file", str(request_file)]) == 0

        invoke.assert_called_once_with("get-github-issues", {"repoURL": "acme/widgets"})

    def test_invalid_json_input(self, capsys):
        with patch("issuesmith.main.invoke_tool") as invoke:
            assert main(["get-github-issues", "--input", "{not json"]) == 1

        invoke.assert_not_called()
        assert "not valid JSON" in capsys.readouterr().out

    def test_tool_error(self, capsys):
        with patch(
            "issuesmith.main.invoke_tool",
            side_effect=NotFoundError("Failed to read repository contents: Not Found", status_code=404),
        ):
            assert main(["read-git-repo", "--input", '{"repoURL": "acme/nope"}']) == 1

        assert "Failed to read repository contents: Not Found" in capsys.readouterr().out

    def test_no_tool_prints_help(self, capsys):
        assert main([]) == 2

        assert "usage" in capsys.readouterr().out

    def test_config_test_incomplete(self, monkeypatch):
        monkeypatch.delenv("GROQ_API_KEY")

        assert main(["--config-test"]) == 1


if __name__ == "__main__":
    pytest.main([__file__])
