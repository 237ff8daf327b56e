"""
Configuration management for IssueSmith.

This module handles environment variables, API configuration,
and logging setup for the tool service.
"""

import os
import logging

from dotenv import load_dotenv

from .exceptions import ConfigurationError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler()],
)

logger = logging.getLogger(__name__)


class Config:
    """Configuration class for IssueSmith.

    Values are read from the environment on every access so credentials
    can be rotated without restarting the process.
    """

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        load_dotenv()

    @property
    def github_token(self) -> str:
        """Get GitHub token from environment."""
        return os.getenv("GITHUB_TOKEN", "")

    @property
    def groq_api_key(self) -> str:
        """Get Groq API key from environment."""
        return os.getenv("GROQ_API_KEY", "")

    @property
    def groq_base_url(self) -> str:
        """Get Groq base URL (OpenAI-compatible) from environment or use default."""
        return os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1")

    @property
    def model_name(self) -> str:
        """Get the code generation model from environment or use default."""
        return os.getenv("MODEL_NAME", "llama-3.3-70b-versatile")

    @property
    def planner_model_name(self) -> str:
        """Get the idea expansion model (defaults to the main model)."""
        return os.getenv("PLANNER_MODEL_NAME", self.model_name)

    @property
    def github_api_base_url(self) -> str:
        """Get GitHub API base URL from environment or use default."""
        return os.getenv("GITHUB_API_BASE_URL", "https://api.github.com")

    @property
    def github_api_version(self) -> str:
        """Get GitHub API version."""
        return os.getenv("GITHUB_API_VERSION", "2022-11-28")

    @property
    def api_timeout(self) -> int:
        """Get API timeout in seconds for GitHub API calls (not AI requests)."""
        return int(os.getenv("API_TIMEOUT", "30"))

    @property
    def log_level(self) -> str:
        """Get log level from environment or use default."""
        return os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def log_file(self) -> str:
        """Get the log file path from environment or use default."""
        return os.getenv("LOG_FILE", "issuesmith.log")

    def require_completion_api_key(self) -> str:
        """Return the Groq API key or fail if it is not configured."""
        if not self.groq_api_key:
            raise ConfigurationError(
                "GROQ_API_KEY environment variable is required for code generation"
            )
        return self.groq_api_key

    def setup_logging(self) -> None:
        """Setup logging configuration.

        Also attaches a file handler for LOG_FILE, once per path.
        """
        numeric_level = getattr(logging, self.log_level, None)
        if not isinstance(numeric_level, int):
            raise ConfigurationError(f"Invalid log level: {self.log_level}")

        root = logging.getLogger()
        root.setLevel(numeric_level)
        log_file = os.path.abspath(self.log_file)
        if not any(
            isinstance(handler, logging.FileHandler) and handler.baseFilename == log_file
            for handler in root.handlers
        ):
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(file_handler)

        # The openai SDK logs every request through httpx
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logger.info(f"Logging level set to {self.log_level}")


# Global configuration instance (lazy initialization)
_config_instance = None


def get_config() -> Config:
    """Get the global configuration instance (lazy initialization)."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


class ConfigProxy:
    """Proxy object that provides lazy access to config properties."""

    def __getattr__(self, name):
        return getattr(get_config(), name)


config = ConfigProxy()
