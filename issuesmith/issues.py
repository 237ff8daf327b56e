"""
Issue operations for IssueSmith.

Issues live entirely on GitHub; these functions read and mutate them
without caching anything locally.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .github_api import GitHubAPI
from .schemas import Issue

logger = logging.getLogger(__name__)


def to_issue(data: Dict[str, Any]) -> Issue:
    """Normalize a GitHub issue object."""
    return Issue(
        number=data["number"],
        title=data["title"],
        body=data.get("body") or "",
        state=data["state"],
        created_at=data["created_at"],
        html_url=data["html_url"],
    )


def list_issues(github: GitHubAPI, owner: str, repo: str) -> List[Issue]:
    """
    List the issues of a repository (GitHub's default filter: open issues).

    Args:
        github: GitHub API client
        owner: Repository owner
        repo: Repository name

    Returns:
        Normalized issues, newest first as GitHub returns them
    """
    logger.info(f"Listing issues in {owner}/{repo}")

    url = github.repo_url(owner, repo, "issues")
    issues = [to_issue(item) for item in github.get_paginated_results(url)]

    logger.info(f"Found {len(issues)} issues")
    return issues


def create_issue(github: GitHubAPI, owner: str, repo: str, title: str, body: str) -> Issue:
    """
    Create an issue.

    Raises:
        AuthenticationError: If no GitHub token is configured
    """
    github.require_auth()
    logger.info(f"Creating issue in {owner}/{repo}: {title}")

    url = github.repo_url(owner, repo, "issues")
    response = github.make_request("POST", url, data={"title": title, "body": body})
    issue = to_issue(response.json())

    logger.info(f"Issue created successfully: {issue.html_url}")
    return issue


def add_comment(github: GitHubAPI, owner: str, repo: str, issue_number: int, body: str) -> None:
    """Add a comment to an issue."""
    github.require_auth()
    url = github.repo_url(owner, repo, "issues", issue_number, "comments")
    github.make_request("POST", url, data={"body": body})
    logger.info(f"Comment added to issue #{issue_number} in {owner}/{repo}")


def close_issue(
    github: GitHubAPI, owner: str, repo: str, issue_number: int, comment: Optional[str] = None
) -> Tuple[bool, bool]:
    """
    Close an issue, optionally commenting on it first.

    The comment and the state change are separate calls. If closing fails
    after the comment was posted, the comment stays and the error propagates.

    Returns:
        (closed, comment_added)

    Raises:
        AuthenticationError: If no GitHub token is configured
        RemoteApiError: If either call fails
    """
    github.require_auth()
    logger.info(f"Closing issue #{issue_number} in {owner}/{repo}")

    comment_added = False
    if comment:
        add_comment(github, owner, repo, issue_number, comment)
        comment_added = True

    url = github.repo_url(owner, repo, "issues", issue_number)
    github.make_request("PATCH", url, data={"state": "closed"})

    logger.info(f"Issue #{issue_number} closed")
    return True, comment_added
