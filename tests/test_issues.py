"""
Unit tests for the issues module.
"""

import pytest
from conftest import make_response, route

from issuesmith.exceptions import AuthenticationError, RemoteApiError
from issuesmith.issues import close_issue, create_issue, list_issues, to_issue

ISSUES = "https://api.github.com/repos/acme/widgets/issues"


def issue_payload(number, body="Steps to reproduce", state="open"):
    return {
        "number": number,
        "title": f"Issue {number}",
        "body": body,
        "state": state,
        "created_at": "2024-03-05T10:00:00Z",
        "html_url": f"https://github.com/acme/widgets/issues/{number}",
        "labels": [],
    }


class TestListIssues:
    """Test issue listing."""

    def test_maps_issues(self, github):
        github.get_paginated_results.return_value = [issue_payload(2), issue_payload(1, body=None)]

        issues = list_issues(github, "acme", "widgets")

        assert [i.number for i in issues] == [2, 1]
        assert issues[0].body == "Steps to reproduce"
        assert issues[1].body == ""
        assert issues[1].html_url == "https://github.com/acme/widgets/issues/1"
        github.get_paginated_results.assert_called_once_with(ISSUES)

    def test_no_issues(self, github):
        github.get_paginated_results.return_value = []

        assert list_issues(github, "acme", "widgets") == []

    def test_to_issue_drops_extra_fields(self):
        issue = to_issue(issue_payload(5, state="closed"))

        assert issue.to_data() == {
            "number": 5,
            "title": "Issue 5",
            "body": "Steps to reproduce",
            "state": "closed",
            "created_at": "2024-03-05T10:00:00Z",
            "html_url": "https://github.com/acme/widgets/issues/5",
        }


class TestCreateIssue:
    """Test issue creation."""

    def test_create_issue(self, github):
        github.make_request.return_value = make_response(issue_payload(12, body="Details"))

        issue = create_issue(github, "acme", "widgets", "Issue 12", "Details")

        assert issue.html_url == "https://github.com/acme/widgets/issues/12"
        github.make_request.assert_called_once_with(
            "POST", ISSUES, data={"title": "Issue 12", "body": "Details"}
        )

    def test_requires_token(self, anonymous_github):
        with pytest.raises(AuthenticationError):
            create_issue(anonymous_github, "acme", "widgets", "t", "b")

        anonymous_github.make_request.assert_not_called()


class TestCloseIssue:
    """Test closing issues."""

    def test_comment_posted_before_close(self, github):
        route(
            github,
            {
                ("POST", f"{ISSUES}/7/comments"): {"id": 1},
                ("PATCH", f"{ISSUES}/7"): issue_payload(7, state="closed"),
            },
        )

        closed, comment_added = close_issue(github, "acme", "widgets", 7, "Fixed in abc123")

        assert (closed, comment_added) == (True, True)
        calls = github.make_request.call_args_list
        assert [(c.args[0], c.args[1]) for c in calls] == [
            ("POST", f"{ISSUES}/7/comments"),
            ("PATCH", f"{ISSUES}/7"),
        ]
        assert calls[0].kwargs["data"] == {"body": "Fixed in abc123"}
        assert calls[1].kwargs["data"] == {"state": "closed"}

    def test_close_without_comment_is_one_call(self, github):
        github.make_request.return_value = make_response(issue_payload(7, state="closed"))

        closed, comment_added = close_issue(github, "acme", "widgets", 7)

        assert (closed, comment_added) == (True, False)
        github.make_request.assert_called_once_with("PATCH", f"{ISSUES}/7", data={"state": "closed"})

    def test_empty_comment_is_skipped(self, github):
        github.make_request.return_value = make_response({})

        _, comment_added = close_issue(github, "acme", "widgets", 7, "")

        assert comment_added is False
        assert github.make_request.call_count == 1

    def test_comment_failure_stops_before_close(self, github):
        github.make_request.side_effect = RemoteApiError("Issue is locked", status_code=403)

        with pytest.raises(RemoteApiError):
            close_issue(github, "acme", "widgets", 7, "done")

        assert github.make_request.call_count == 1

    def test_close_failure_leaves_comment(self, github):
        route(
            github,
            {
                ("POST", f"{ISSUES}/7/comments"): {"id": 1},
                ("PATCH", f"{ISSUES}/7"): RemoteApiError("Server Error", status_code=500),
            },
        )

        with pytest.raises(RemoteApiError):
            close_issue(github, "acme", "widgets", 7, "done")

        assert github.make_request.call_count == 2

    def test_requires_token(self, anonymous_github):
        with pytest.raises(AuthenticationError):
            close_issue(anonymous_github, "acme", "widgets", 7, "done")

        anonymous_github.make_request.assert_not_called()


if __name__ == "__main__":
    pytest.main([__file__])
