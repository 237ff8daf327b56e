"""
Pydantic schemas for the tool request/response contracts.

Field names on the wire are camelCase (as the hosting framework expects);
Python code uses the snake_case attribute names.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Schema(BaseModel):
    """Base model: accepts either alias or attribute names, dumps by alias."""

    model_config = ConfigDict(populate_by_name=True)

    def to_data(self) -> dict:
        return self.model_dump(by_alias=True)


# =============================================================================
# Shared value objects
# =============================================================================


class RepositoryFile(Schema):
    """A file read from a repository."""

    path: str = Field(..., description="File path")
    content: str = Field(..., description="File content")
    sha: str = Field(..., description="File SHA")


class FileChange(Schema):
    """A file to create or update."""

    path: str = Field(..., description="File path in the repository")
    content: str = Field(..., description="New file content")
    message: str = Field(..., description="Commit message for this file change")


class CommitResult(Schema):
    """The commit produced by writing one file."""

    sha: str = Field(..., description="Commit SHA")
    url: str = Field(..., description="Commit URL")


class Issue(Schema):
    """A GitHub issue, normalized."""

    number: int = Field(..., description="Issue number")
    title: str = Field(..., description="Issue title")
    body: str = Field("", description="Issue description")
    state: Literal["open", "closed"] = Field(..., description="Issue state (open/closed)")
    created_at: str = Field(..., description="Issue creation date")
    html_url: str = Field(..., description="Issue URL")


class GeneratedFile(Schema):
    """One file produced by code generation."""

    file_name: str = Field(..., alias="fileName", description="Name of the file that was modified")
    file_content: str = Field(
        ..., alias="fileContent", description="The complete updated content of the modified file"
    )


class CodeChangeSet(Schema):
    """The reviewer's JSON answer: {"listOutputs": [{fileName, fileContent}, ...]}."""

    list_outputs: List[GeneratedFile] = Field(..., alias="listOutputs")


class TaskList(Schema):
    """The structuring step's JSON answer: {"tasks": [...]}."""

    tasks: List[str]


# =============================================================================
# Tool requests
# =============================================================================


class ReadRepoRequest(Schema):
    """Input parameters to read repository contents"""

    repo_url: str = Field(
        ..., alias="repoURL", description="The GitHub repository URL (format: https://github.com/owner/repo)"
    )
    path: Optional[str] = Field(
        None, description="Specific path within the repository to read (optional)"
    )


class PushRequest(Schema):
    """Input parameters to push changes to repository"""

    repo_url: str = Field(
        ..., alias="repoURL", description="The GitHub repository URL (format: https://github.com/owner/repo)"
    )
    files: List[FileChange]


class GetIssuesRequest(Schema):
    """Input parameters to fetch GitHub issues"""

    repo_url: str = Field(
        ..., alias="repoURL", description="The GitHub repository URL (format: https://github.com/owner/repo)"
    )


class CloseIssueRequest(Schema):
    """Input parameters to close a GitHub issue"""

    repo_url: str = Field(
        ..., alias="repoURL", description="The GitHub repository URL (format: https://github.com/owner/repo)"
    )
    issue_number: int = Field(..., alias="issueNumber", description="The issue number to close")
    comment: Optional[str] = Field(
        None, description="Optional comment to add before closing the issue"
    )


class WriteCodeRequest(Schema):
    """Context needed to generate appropriate code solution"""

    issue_context: str = Field(
        ...,
        alias="issueContext",
        description="The GitHub issue description and requirements that need to be implemented",
    )
    code_context: str = Field(
        ...,
        alias="codeContext",
        description="Relevant code files and their contents that provide context for the implementation",
    )
    repo_url: str = Field(
        ..., alias="repoURL", description="The GitHub repository URL to push changes to"
    )


class NewIssueRequest(Schema):
    """Input for making a new issue"""

    repo_url: str = Field(
        ..., alias="repoUrl", description="URL of the repository to create issues in"
    )
    title: str = Field(..., description="Title of the issue")
    description: str = Field(..., description="Description of the issue")


class NewProjectRequest(Schema):
    """Input parameters for a new project"""

    name: str = Field(..., description="Name of the project")
    language: Literal["python", "typescript"] = Field(
        ..., description="Language to initialize project in"
    )


class ValidateIdeaRequest(Schema):
    """Input parameters to generate checkpoints for ideas"""

    prompt: str = Field(..., description="The prompt for the project to be built")


# =============================================================================
# Tool responses
# =============================================================================


class ReadRepoResponse(Schema):
    """The repository contents"""

    files: List[RepositoryFile]


class PushResponse(Schema):
    """The created commits"""

    commits: List[CommitResult]


class GetIssuesResponse(Schema):
    """The extracted GitHub issues"""

    issues: List[Issue] = Field(..., description="List of issues from the repository")


class CloseIssueResponse(Schema):
    """The result of closing the issue"""

    closed: bool = Field(..., description="Whether the issue was successfully closed")
    comment_added: bool = Field(..., alias="commentAdded", description="Whether a comment was added")


class WriteCodeResponse(Schema):
    """The generated code solution and commit information"""

    list_outputs: List[GeneratedFile] = Field(..., alias="listOutputs")
    commits: List[CommitResult]


class NewIssueResponse(Schema):
    """Created issue information"""

    issue_url: str = Field(..., alias="issueUrl", description="URL of the created issue")


class NewProjectResponse(Schema):
    """Repository URL for the new project"""

    git_url: str = Field(..., alias="gitUrl", description="URL for the new github repository")


class ValidateIdeaResponse(Schema):
    """The idea the user inputted but expanded upon"""

    expanded_idea: List[str] = Field(
        ..., description="List of smaller checkpoints that need to be completed"
    )
