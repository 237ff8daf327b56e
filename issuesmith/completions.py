"""
Completion client for IssueSmith.

Thin wrapper over the OpenAI SDK pointed at Groq's OpenAI-compatible
endpoint. One request per call, no retries.
"""

import logging
from typing import Any, Dict, List, Optional

import openai
from openai import OpenAI

from .config import config
from .exceptions import ConfigurationError, RemoteApiError

logger = logging.getLogger(__name__)


def _error_message(error: openai.APIStatusError) -> str:
    """Pull the 'message' field out of the error object the SDK parsed from the body."""
    if isinstance(error.body, dict) and error.body.get("message"):
        return str(error.body["message"])
    return error.message


def system_message(content: str) -> Dict[str, str]:
    return {"role": "system", "content": content}


def user_message(content: str) -> Dict[str, str]:
    return {"role": "user", "content": content}


class CompletionClient:
    """Sends role-tagged message sequences to the completion endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.groq.com/openai/v1",
        model: str = "llama-3.3-70b-versatile",
        client: Optional[Any] = None,
        planner_model: Optional[str] = None,
    ):
        """
        Initialize the completion client.

        Args:
            api_key: Groq API key
            base_url: OpenAI-compatible endpoint
            model: Default model identifier
            client: Pre-built SDK client (used by tests)
            planner_model: Model for idea expansion (defaults to model)

        Raises:
            ConfigurationError: If no API key is given
        """
        if not api_key:
            raise ConfigurationError(
                "GROQ_API_KEY environment variable is required for code generation"
            )
        self.model = model
        self.planner_model = planner_model or model
        self.client = client or OpenAI(base_url=base_url, api_key=api_key, max_retries=0)

    @classmethod
    def from_config(cls, model: Optional[str] = None) -> "CompletionClient":
        """Build a client from the current environment."""
        return cls(
            api_key=config.require_completion_api_key(),
            base_url=config.groq_base_url,
            model=model or config.model_name,
            planner_model=config.planner_model_name,
        )

    def complete(
        self,
        messages: List[Dict[str, str]],
        json_output: bool = False,
        model: Optional[str] = None,
    ) -> str:
        """
        Send one completion request and return the first choice's text.

        Args:
            messages: Ordered role-tagged messages
            json_output: Ask the endpoint to constrain output to a JSON object
            model: Override the default model

        Returns:
            The response text (empty string if the model returned nothing)

        Raises:
            RemoteApiError: If the endpoint rejects the request or is unreachable
        """
        request: Dict[str, Any] = {"model": model or self.model, "messages": messages}
        if json_output:
            request["response_format"] = {"type": "json_object"}

        logger.info(f"Requesting completion from {request['model']} ({len(messages)} messages)")
        try:
            response = self.client.chat.completions.create(**request)
        except openai.APIStatusError as e:
            message = _error_message(e)
            logger.error(f"Completion request failed: {e.status_code} - {message}")
            raise RemoteApiError(message, status_code=e.status_code) from e
        except openai.APIError as e:
            logger.error(f"Completion request failed: {str(e)}")
            raise RemoteApiError(str(e)) from e

        return response.choices[0].message.content or ""
