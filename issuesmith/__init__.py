"""
IssueSmith - AI tools for turning GitHub issues into commits.

This package provides agent-callable tools that read and write GitHub
repositories, manage issues, and generate code fixes with a hosted LLM.
"""

try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("issuesmith")
except PackageNotFoundError:
    # Package not installed
    __version__ = "1.0.0"
__description__ = "AI tools for turning GitHub issues into commits"

# Main modules
from . import config
from . import github_api
from . import tools

__all__ = ["config", "github_api", "tools"]
