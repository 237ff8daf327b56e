"""
Tool definitions and implementations for IssueSmith.

Each tool validates its request, runs one pipeline against GitHub and/or
the completion API, and returns a ToolResult. Clients are passed in by the
caller; invoke_tool builds them from configuration when it is not given any.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from .codegen import commit_message_for, generate_code_changes
from .completions import CompletionClient
from .exceptions import InvalidRequestError, RemoteApiError, UnknownToolError
from .formatting import (
    ToolResult,
    format_close_result,
    format_code_changes,
    format_issues,
    format_new_issue,
    format_new_project,
    format_push_result,
    format_read_result,
    format_tasks,
)
from .github_api import GitHubAPI, parse_repo_url
from .ideas import expand_idea
from .issues import close_issue, create_issue, list_issues
from .repository import commit_files, create_repository, read_contents
from .schemas import (
    CloseIssueRequest,
    CloseIssueResponse,
    FileChange,
    GetIssuesRequest,
    GetIssuesResponse,
    NewIssueRequest,
    NewIssueResponse,
    NewProjectRequest,
    NewProjectResponse,
    PushRequest,
    PushResponse,
    ReadRepoRequest,
    ReadRepoResponse,
    ValidateIdeaRequest,
    ValidateIdeaResponse,
    WriteCodeRequest,
    WriteCodeResponse,
)

logger = logging.getLogger(__name__)

PRICING = {"pricePerUse": 0, "currency": "USD"}


@contextmanager
def failure_context(prefix: str):
    """Prefix remote error messages with what the tool was doing, keeping the error type."""
    try:
        yield
    except RemoteApiError as e:
        raise type(e)(f"{prefix}: {e.message}", status_code=e.status_code) from e


# =============================================================================
# Handlers
# =============================================================================


def read_git_repo(request: ReadRepoRequest, github: GitHubAPI, completions=None) -> ToolResult:
    """Read the files at a path of a repository (no recursion into subdirectories)."""
    owner, repo = parse_repo_url(request.repo_url)
    with failure_context("Failed to read repository contents"):
        files = read_contents(github, owner, repo, request.path)
    return format_read_result(files, ReadRepoResponse(files=files).to_data())


def push_to_git_repo(request: PushRequest, github: GitHubAPI, completions=None) -> ToolResult:
    """Create or update each file in order, one commit per file."""
    owner, repo = parse_repo_url(request.repo_url)
    commits = commit_files(github, owner, repo, request.files)
    return format_push_result(
        [change.path for change in request.files],
        commits,
        PushResponse(commits=commits).to_data(),
    )


def get_github_issues(request: GetIssuesRequest, github: GitHubAPI, completions=None) -> ToolResult:
    owner, repo = parse_repo_url(request.repo_url)
    with failure_context("Failed to fetch GitHub issues"):
        issues = list_issues(github, owner, repo)
    return format_issues(owner, repo, issues, GetIssuesResponse(issues=issues).to_data())


def close_github_issue(request: CloseIssueRequest, github: GitHubAPI, completions=None) -> ToolResult:
    owner, repo = parse_repo_url(request.repo_url)
    with failure_context("Failed to close issue"):
        closed, comment_added = close_issue(
            github, owner, repo, request.issue_number, request.comment
        )
    return format_close_result(
        request.issue_number,
        request.comment,
        comment_added,
        CloseIssueResponse(closed=closed, comment_added=comment_added).to_data(),
    )


def write_code(
    request: WriteCodeRequest, github: GitHubAPI, completions: CompletionClient
) -> ToolResult:
    """
    Generate a fix for an issue and commit every produced file.

    Both credentials are checked before the first remote call. Files are
    committed one by one after generation succeeds; a malformed review
    answer aborts before anything is written.
    """
    owner, repo = parse_repo_url(request.repo_url)
    github.require_auth()

    changes = generate_code_changes(completions, request.issue_context, request.code_context)
    message = commit_message_for(request.issue_context)
    file_changes = [
        FileChange(path=generated.file_name, content=generated.file_content, message=message)
        for generated in changes.list_outputs
    ]
    commits = commit_files(github, owner, repo, file_changes)

    response = WriteCodeResponse(list_outputs=changes.list_outputs, commits=commits)
    return format_code_changes(changes.list_outputs, commits, response.to_data())


def new_gh_issue(request: NewIssueRequest, github: GitHubAPI, completions=None) -> ToolResult:
    owner, repo = parse_repo_url(request.repo_url)
    issue = create_issue(github, owner, repo, request.title, request.description)
    return format_new_issue(
        request.title, issue.html_url, NewIssueResponse(issue_url=issue.html_url).to_data()
    )


def new_gh_project(request: NewProjectRequest, github: GitHubAPI, completions=None) -> ToolResult:
    git_url = create_repository(
        github,
        request.name,
        description=f"{request.name}, scaffolded by IssueSmith",
        private=True,
    )
    return format_new_project(git_url, request.language, NewProjectResponse(git_url=git_url).to_data())


def validate_idea(
    request: ValidateIdeaRequest, github: GitHubAPI, completions: CompletionClient
) -> ToolResult:
    tasks = expand_idea(completions, request.prompt, model=completions.planner_model)
    return format_tasks(tasks, ValidateIdeaResponse(expanded_idea=tasks).to_data())


# =============================================================================
# Registry
# =============================================================================


@dataclass
class Tool:
    """A named, schema-typed operation exposed to the hosting framework."""

    id: str
    name: str
    description: str
    request_model: Type[BaseModel]
    response_model: Type[BaseModel]
    handler: Callable[..., ToolResult]
    needs_completions: bool = False

    def parse_request(self, payload: Dict[str, Any]) -> BaseModel:
        """
        Validate a raw payload against the tool's request schema.

        Raises:
            InvalidRequestError: Listing every invalid or missing field
        """
        try:
            return self.request_model.model_validate(payload)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
                for error in e.errors()
            )
            raise InvalidRequestError(f"Invalid input for {self.id}: {problems}") from e

    def schema(self) -> Dict[str, Any]:
        """Describe the tool for registration with a host."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "input": self.request_model.model_json_schema(by_alias=True),
            "output": self.response_model.model_json_schema(by_alias=True),
            "pricing": PRICING,
        }


TOOLS: List[Tool] = [
    Tool(
        id="read-git-repo",
        name="Read Git Repository",
        description="Reads the content of files from a GitHub repository",
        request_model=ReadRepoRequest,
        response_model=ReadRepoResponse,
        handler=read_git_repo,
    ),
    Tool(
        id="push-to-git-repo",
        name="Push to Git Repository",
        description="Pushes file changes to a GitHub repository",
        request_model=PushRequest,
        response_model=PushResponse,
        handler=push_to_git_repo,
    ),
    Tool(
        id="get-github-issues",
        name="Get GitHub Issues",
        description="Extracts all issues from a given GitHub repository",
        request_model=GetIssuesRequest,
        response_model=GetIssuesResponse,
        handler=get_github_issues,
    ),
    Tool(
        id="close-github-issue",
        name="Close GitHub Issue",
        description="Closes a GitHub issue and optionally adds a closing comment",
        request_model=CloseIssueRequest,
        response_model=CloseIssueResponse,
        handler=close_github_issue,
    ),
    Tool(
        id="write-code",
        name="Write Code",
        description=(
            "Generates code to solve a GitHub issue based on provided context "
            "and pushes it to the repository"
        ),
        request_model=WriteCodeRequest,
        response_model=WriteCodeResponse,
        handler=write_code,
        needs_completions=True,
    ),
    Tool(
        id="new-gh-issue",
        name="New Github Issue",
        description="Makes a new issue for a Github Project",
        request_model=NewIssueRequest,
        response_model=NewIssueResponse,
        handler=new_gh_issue,
    ),
    Tool(
        id="new-gh-project",
        name="New Github Project",
        description="Initializes a new private GitHub repository for a project",
        request_model=NewProjectRequest,
        response_model=NewProjectResponse,
        handler=new_gh_project,
    ),
    Tool(
        id="validate-idea",
        name="Validate Idea",
        description="Given the user's idea it expands on it and makes small checkpoints to be completed",
        request_model=ValidateIdeaRequest,
        response_model=ValidateIdeaResponse,
        handler=validate_idea,
        needs_completions=True,
    ),
]

TOOL_FUNCTIONS = {tool.id: tool.handler for tool in TOOLS}

_TOOLS_BY_ID = {tool.id: tool for tool in TOOLS}


def get_tool(tool_id: str) -> Tool:
    try:
        return _TOOLS_BY_ID[tool_id]
    except KeyError:
        raise UnknownToolError(
            f"Unknown tool '{tool_id}'. Available tools: {', '.join(_TOOLS_BY_ID)}"
        ) from None


def tool_schemas() -> List[Dict[str, Any]]:
    return [tool.schema() for tool in TOOLS]


def invoke_tool(
    tool_id: str,
    payload: Dict[str, Any],
    github: Optional[GitHubAPI] = None,
    completions: Optional[CompletionClient] = None,
) -> ToolResult:
    """
    Validate a payload and run a tool.

    Args:
        tool_id: Registered tool id, e.g. 'write-code'
        payload: Raw request fields (camelCase, as declared by the tool)
        github: GitHub client (built from configuration if omitted)
        completions: Completion client (built from configuration if omitted
            and the tool needs one)

    Returns:
        The tool's result

    Raises:
        UnknownToolError: If no tool has this id
        InvalidRequestError: If the payload does not match the tool's schema
        ConfigurationError: If a required credential is missing
        RemoteApiError: If a remote call fails
        MalformedResponseError: If completion output has the wrong shape
    """
    tool = get_tool(tool_id)
    request = tool.parse_request(payload)
    logger.info(f"Invoking tool: {tool.id}")

    if tool.needs_completions and completions is None:
        completions = CompletionClient.from_config()

    owns_github = github is None
    if owns_github:
        github = GitHubAPI.from_config()

    try:
        result = tool.handler(request, github, completions)
    except Exception as e:
        logger.error(f"Tool {tool.id} failed: {str(e)}")
        raise
    finally:
        if owns_github:
            github.close()

    logger.info(f"Tool {tool.id} completed: {result.text}")
    return result
