"""
Repository read and write operations for IssueSmith.

Reads go through the contents API (with a raw-URL fallback for files whose
inline content is withheld); writes are create-or-update PUTs performed one
file at a time.
"""

import base64
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from .exceptions import NotFoundError, RemoteApiError, RemoteWriteError
from .github_api import GitHubAPI
from .schemas import CommitResult, FileChange, RepositoryFile

logger = logging.getLogger(__name__)

MAX_RAW_FETCH_WORKERS = 8


def decode_content(content: str) -> str:
    """Decode a base64 contents-API body (which GitHub wraps at 60 columns) to text."""
    return base64.b64decode(content).decode("utf-8", errors="replace")


def encode_content(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def read_contents(
    github: GitHubAPI, owner: str, repo: str, path: Optional[str] = None
) -> List[RepositoryFile]:
    """
    Read a file or the files of one directory in a repository.

    Args:
        github: GitHub API client
        owner: Repository owner
        repo: Repository name
        path: File or directory path (defaults to the repository root)

    Returns:
        Files in listing order; subdirectories are skipped, not recursed

    Raises:
        NotFoundError: If the repository or path does not exist
    """
    logger.info(f"Reading contents: {owner}/{repo}/{path or ''}")

    url = github.repo_url(owner, repo, "contents", path or "")
    data = github.make_request("GET", url).json()
    entries = data if isinstance(data, list) else [data]
    files = [entry for entry in entries if entry.get("type") == "file"]

    def load(entry: Dict[str, Any]) -> RepositoryFile:
        if entry.get("content"):
            text = decode_content(entry["content"])
        elif entry.get("download_url"):
            text = github.get_raw_content(entry["download_url"])
        else:
            text = ""
        return RepositoryFile(path=entry["path"], content=text, sha=entry.get("sha", ""))

    if not files:
        return []

    # map() yields results in submission order regardless of completion order
    with ThreadPoolExecutor(max_workers=min(MAX_RAW_FETCH_WORKERS, len(files))) as executor:
        result = list(executor.map(load, files))

    logger.info(f"Read {len(result)} files from {owner}/{repo}")
    return result


def get_file_sha(github: GitHubAPI, owner: str, repo: str, path: str) -> Optional[str]:
    """
    Get the current blob SHA of a file.

    Returns:
        The SHA, or None if the file does not exist yet
    """
    url = github.repo_url(owner, repo, "contents", path)
    try:
        data = github.make_request("GET", url).json()
    except NotFoundError:
        return None

    if isinstance(data, dict):
        return data.get("sha")
    return None


def write_file(github: GitHubAPI, owner: str, repo: str, change: FileChange) -> CommitResult:
    """
    Create or update one file.

    The SHA read immediately beforehand is sent only when the file already
    exists; GitHub rejects updates without it and creates without it.

    Raises:
        RemoteWriteError: If GitHub rejects the write
    """
    current_sha = get_file_sha(github, owner, repo, change.path)

    data = {"message": change.message, "content": encode_content(change.content)}
    if current_sha:
        data["sha"] = current_sha

    url = github.repo_url(owner, repo, "contents", change.path)
    try:
        response = github.make_request("PUT", url, data=data)
    except RemoteApiError as e:
        raise RemoteWriteError(
            f"Failed to push changes: {e.message}", status_code=e.status_code
        ) from e

    commit = response.json()["commit"]
    action = "Updated" if current_sha else "Created"
    logger.info(f"{action} {change.path} in {owner}/{repo} ({commit['sha'][:7]})")
    return CommitResult(sha=commit["sha"], url=commit["html_url"])


def commit_files(
    github: GitHubAPI, owner: str, repo: str, changes: List[FileChange]
) -> List[CommitResult]:
    """
    Write files one at a time, in order, one commit per file.

    There is no rollback: if a write fails, files before it stay committed
    and files after it are not attempted.

    Raises:
        AuthenticationError: If no GitHub token is configured
        RemoteWriteError: On the first failed write
    """
    github.require_auth()
    logger.info(f"Committing {len(changes)} files to {owner}/{repo}")

    commits = []
    for change in changes:
        commits.append(write_file(github, owner, repo, change))
    return commits


def create_repository(github: GitHubAPI, name: str, description: str = "", private: bool = True) -> str:
    """
    Create a repository for the authenticated user.

    Returns:
        The repository's html_url
    """
    github.require_auth()
    logger.info(f"Creating repository: {name} (private: {private})")

    url = f"{github.base_url}/user/repos"
    data = {"name": name, "description": description, "private": private}
    repo_data = github.make_request("POST", url, data=data).json()

    repo_url = repo_data["html_url"]
    logger.info(f"Repository created successfully: {repo_url}")
    return str(repo_url)
