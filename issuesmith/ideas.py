"""
Project idea expansion.

Turns a one-line project idea into a list of developer-sized tasks with
three chained completions: expand, break down, structure as JSON.
"""

import logging
from typing import List, Optional

from pydantic import ValidationError

from .completions import CompletionClient, system_message, user_message
from .exceptions import MalformedResponseError
from .schemas import TaskList

logger = logging.getLogger(__name__)

EXPAND_PROMPT = (
    "You are an AI Product Manager, your role is to take the idea given to you and expand on it. "
    "If a detail is not given, assume the simplest. Expand on the idea as much as you can, we'll be "
    "summarizing these ideas into bullet points later. Return only the description nothing more "
    "nothing less"
)

BREAKDOWN_PROMPT = (
    "You are an AI Product Manager, your job is to look at the description of the project given to "
    "you and break it down into smaller tasks that developers can complete. Only output the smaller "
    "tasks in a bulletpoint format, nothing else."
)

STRUCTURE_PROMPT = (
    "You are a structured output generator. Take the bullet points given to you and format them into "
    "an array of strings. Each bullet point should be its own string in the array. Your response must "
    'be valid JSON in the format: {"tasks": ["task 1", "task 2", ...]}.'
)


def expand_idea(completions: CompletionClient, prompt: str, model: Optional[str] = None) -> List[str]:
    """
    Expand a project idea into tasks.

    Raises:
        RemoteApiError: If any completion request fails
        MalformedResponseError: If the final answer is not {"tasks": [str, ...]}
    """
    logger.info(f"Expanding on idea: {prompt}")

    description = completions.complete(
        [system_message(EXPAND_PROMPT), user_message(prompt)], model=model
    )
    bullets = completions.complete(
        [system_message(BREAKDOWN_PROMPT), user_message(description)], model=model
    )
    structured = completions.complete(
        [system_message(STRUCTURE_PROMPT), user_message(bullets)], json_output=True, model=model
    )

    try:
        tasks = TaskList.model_validate_json(structured).tasks
    except ValidationError as e:
        logger.debug(f"Response content: {structured}")
        raise MalformedResponseError(f'Task list response is not valid {{"tasks": [...]}} JSON: {e}') from e

    logger.info(f"Generated {len(tasks)} tasks")
    return tasks
