"""
Workflow Event Loader

Reads the pull request descriptor from the GitHub Actions event payload.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..config import ConfigurationError
from ..models.event import PullRequestEvent, PullRequestInfo


logger = logging.getLogger(__name__)


def load_pull_request(event_path: Optional[str]) -> Optional[PullRequestInfo]:
    """
    Load the pull request from a workflow event payload.

    Args:
        event_path: Path from GITHUB_EVENT_PATH, or None

    Returns:
        PullRequestInfo, or None when the run has no pull request context

    Raises:
        ConfigurationError: If the payload cannot be read or parsed
    """
    if not event_path:
        logger.info("No event payload path given")
        return None

    try:
        raw = Path(event_path).read_text(encoding='utf-8')
        payload = json.loads(raw)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Cannot read event payload {event_path}: {e}") from e

    if not isinstance(payload, dict):
        raise ConfigurationError(f"Event payload {event_path} is not a JSON object")

    try:
        event = PullRequestEvent.model_validate(payload)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid pull_request in event payload: {e}") from e

    if event.pull_request is None:
        logger.info("Event payload has no pull_request")
        return None

    logger.info(f"Loaded PR #{event.pull_request.number} from event payload")
    return event.pull_request
