"""
Response formatting for IssueSmith tools.

Each function turns a tool's structured result into a ToolResult: a one-line
summary, the response data, and a display card. No I/O happens here.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .schemas import CommitResult, GeneratedFile, Issue, RepositoryFile


@dataclass
class Card:
    """A titled block of text for the host UI."""

    title: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "content": self.content}


@dataclass
class ToolResult:
    """What a tool hands back to the hosting framework."""

    text: str
    data: Dict[str, Any] = field(default_factory=dict)
    ui: Optional[Card] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "data": self.data,
            "ui": self.ui.to_dict() if self.ui else None,
        }


def short_sha(sha: str) -> str:
    return sha[:7]


def count_lines(text: str) -> int:
    return len(text.split("\n"))


def format_date(timestamp: str) -> str:
    """Render an ISO-8601 GitHub timestamp as YYYY-MM-DD."""
    try:
        return datetime.fromisoformat(timestamp.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return timestamp


def format_read_result(files: List[RepositoryFile], data: Dict[str, Any]) -> ToolResult:
    if files:
        content = "\n".join(f"{f.path} ({count_lines(f.content)} lines)" for f in files)
    else:
        content = "No files found in specified path"
    return ToolResult(
        text=f"Read {len(files)} files from repository",
        data=data,
        ui=Card("Repository Contents", content),
    )


def format_push_result(paths: List[str], commits: List[CommitResult], data: Dict[str, Any]) -> ToolResult:
    lines = [
        f"{index}. {path} - Commit {short_sha(commit.sha)}"
        for index, (path, commit) in enumerate(zip(paths, commits), 1)
    ]
    return ToolResult(
        text=f"Successfully pushed {len(commits)} files to repository",
        data=data,
        ui=Card("Push Results", "\n".join(lines)),
    )


def format_issues(owner: str, repo: str, issues: List[Issue], data: Dict[str, Any]) -> ToolResult:
    blocks = [
        f"#{issue.number} - {issue.title}\nState: {issue.state}\nCreated: {format_date(issue.created_at)}\n"
        for issue in issues
    ]
    return ToolResult(
        text=f"Found {len(issues)} issues in repository {owner}/{repo}",
        data=data,
        ui=Card("GitHub Issues", "\n".join(blocks) if blocks else "No issues found"),
    )


def format_close_result(
    issue_number: int, comment: Optional[str], comment_added: bool, data: Dict[str, Any]
) -> ToolResult:
    suffix = " with comment" if comment_added else ""
    detail = f"Comment added: {comment}" if comment_added else "No closing comment added"
    return ToolResult(
        text=f"Successfully closed issue #{issue_number}{suffix}",
        data=data,
        ui=Card("Issue Closed", f"Issue #{issue_number} has been closed\n{detail}"),
    )


def format_code_changes(
    files: List[GeneratedFile], commits: List[CommitResult], data: Dict[str, Any]
) -> ToolResult:
    lines = [
        f"{index}. Modified {generated.file_name} (Commit: {short_sha(commit.sha)})"
        for index, (generated, commit) in enumerate(zip(files, commits), 1)
    ]
    return ToolResult(
        text=f"Generated and pushed {len(files)} file modifications",
        data=data,
        ui=Card("Code Changes", "\n".join(lines)),
    )


def format_new_issue(title: str, issue_url: str, data: Dict[str, Any]) -> ToolResult:
    return ToolResult(
        text=f'Created new issue "{title}" at {issue_url}',
        data=data,
        ui=Card("New Issue Created", f"Issue Title: {title}\nIssue URL: {issue_url}"),
    )


def format_new_project(git_url: str, language: str, data: Dict[str, Any]) -> ToolResult:
    return ToolResult(
        text=f"Made a new repository {git_url} and initialized a {language} project",
        data=data,
        ui=Card("New GitHub Repository Created", f"Repository URL: {git_url}\nLanguage: {language}"),
    )


def format_tasks(tasks: List[str], data: Dict[str, Any]) -> ToolResult:
    return ToolResult(
        text=f"Generated {len(tasks)} tasks for your project idea",
        data=data,
        ui=Card("Project Tasks", "\n".join(f"{index}. {task}" for index, task in enumerate(tasks, 1))),
    )
