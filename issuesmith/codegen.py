"""
Two-pass code generation for GitHub issues.

A first completion drafts the change as an "AI Software Engineer"; a second
one reviews the draft as an "AI Code Reviewer" and answers in JSON, which
is validated into a CodeChangeSet before anything is written.
"""

import logging

from pydantic import ValidationError

from .completions import CompletionClient, system_message, user_message
from .exceptions import MalformedResponseError
from .schemas import CodeChangeSet

logger = logging.getLogger(__name__)

ENGINEER_PROMPT = (
    "You are an AI Software Engineer, your role is to take the code and issue context given to you "
    "and solve the github issue. If a detail is not given, assume the simplest. Return the fileName "
    "and the full file content of the file that's being changed and nothing else"
)

REVIEWER_PROMPT = (
    "You are an AI Code Reviewer, look at the output generated + the github issue content. Make sure "
    "the code solves the github issue in question, if there's any obvious bugs fix them. Return the "
    "output in valid JSON format with the following structure: "
    '{"listOutputs": [{"fileName": "string", "fileContent": "string"}]}'
)


def parse_code_changes(raw: str) -> CodeChangeSet:
    """
    Validate the reviewer's answer.

    Raises:
        MalformedResponseError: If the text is not JSON of the expected shape
    """
    try:
        return CodeChangeSet.model_validate_json(raw)
    except ValidationError as e:
        logger.error(f"Reviewer returned malformed output: {e.error_count()} error(s)")
        logger.debug(f"Response content: {raw}")
        raise MalformedResponseError(
            f"Code review response is not valid JSON of the form "
            f'{{"listOutputs": [{{"fileName", "fileContent"}}]}}: {e}'
        ) from e


def generate_code_changes(
    completions: CompletionClient, issue_context: str, code_context: str
) -> CodeChangeSet:
    """
    Draft and review a code change for an issue.

    Args:
        completions: Completion client
        issue_context: The issue description and requirements
        code_context: Relevant files and their contents

    Returns:
        The reviewed files with their full new content

    Raises:
        RemoteApiError: If either completion request fails
        MalformedResponseError: If the review is not valid CodeChangeSet JSON
    """
    logger.info("Generating code for issue")
    draft = completions.complete(
        [
            system_message(ENGINEER_PROMPT),
            user_message(f"Github Issue:\n{issue_context}\nCode Context:\n{code_context}"),
        ]
    )

    logger.info("Reviewing generated code")
    review = completions.complete(
        [
            system_message(REVIEWER_PROMPT),
            user_message(f"Github Issue:\n{issue_context}\nCode Generated:{draft}"),
        ],
        json_output=True,
    )

    changes = parse_code_changes(review)
    logger.info(f"Reviewer produced {len(changes.list_outputs)} file(s)")
    return changes


def commit_message_for(issue_context: str) -> str:
    """Commit message used for generated changes: summary line plus the issue's first line."""
    lines = issue_context.split("\n")
    return f"fix: Automated code update for issue\n\n{lines[0]}"
