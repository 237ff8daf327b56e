"""
Pytest configuration and fixtures for IssueSmith tests.
"""

import logging
import os
from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest

from issuesmith.completions import CompletionClient
from issuesmith.github_api import GitHubAPI


@pytest.fixture(autouse=True)
def setup_test_environment(tmp_path):
    """Set up test environment variables and keep real .env files out of the way."""
    test_env = {
        "GITHUB_TOKEN": "test_github_token",
        "GROQ_API_KEY": "test_groq_key",
        "MODEL_NAME": "llama-test",
        "LOG_LEVEL": "WARNING",  # Reduce log noise during tests
        "LOG_FILE": str(tmp_path / "issuesmith.log"),
    }
    root = logging.getLogger()
    handlers_before = list(root.handlers)

    with patch.dict(os.environ, test_env):
        with patch("issuesmith.config.load_dotenv"):
            yield

    for handler in root.handlers[:]:
        if isinstance(handler, logging.FileHandler) and handler not in handlers_before:
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def clean_environment():
    """Fixture to provide a clean environment for tests that need it."""
    with patch.dict(os.environ, {}, clear=True):
        yield


def make_response(payload):
    """A stand-in for requests.Response carrying a JSON body."""
    response = Mock()
    response.json.return_value = payload
    response.status_code = 200
    return response


def completion(content):
    """A stand-in for an OpenAI chat completion."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def github():
    """A real GitHubAPI whose network methods are mocks."""
    api = GitHubAPI(token="test_github_token")
    api.make_request = Mock()
    api.get_paginated_results = Mock(return_value=[])
    api.get_raw_content = Mock()
    return api


@pytest.fixture
def anonymous_github():
    api = GitHubAPI(token="")
    api.make_request = Mock()
    api.get_paginated_results = Mock(return_value=[])
    api.get_raw_content = Mock()
    return api


@pytest.fixture
def sdk_client():
    """A mock of the OpenAI SDK client."""
    return Mock()


@pytest.fixture
def completions(sdk_client):
    return CompletionClient(api_key="test_groq_key", model="llama-test", client=sdk_client)


def route(github, routes):
    """
    Make github.make_request answer by (method, url).

    Values are JSON payloads, or exceptions to raise.
    """

    def handler(method, url, data=None, params=None):
        outcome = routes[(method, url)]
        if isinstance(outcome, Exception):
            raise outcome
        return make_response(outcome)

    github.make_request.side_effect = handler
    return github
