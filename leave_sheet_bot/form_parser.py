"""
Slack slash-command body parsing.

Slack posts slash commands as ``application/x-www-form-urlencoded`` bodies.
Only ``command``, ``text`` and ``user_name`` matter here; every other field
is parsed and ignored.
"""

import logging
from dataclasses import dataclass
from urllib.parse import unquote

logger = logging.getLogger(__name__)

PARAM_COMMAND = "command"
PARAM_USER = "user_name"
PARAM_TEXT = "text"

DEFAULT_USER_NAME = "Unknown User"


def parse_form_body(body: str) -> dict[str, str]:
    """
    Decode a form-encoded body into a flat mapping.

    Each pair is split on its first ``=``. Keys and values are
    percent-decoded, ``+`` in the decoded value becomes a space and both
    sides are trimmed. The last occurrence of a duplicate key wins.

    Returns an empty dict for empty or non-string input. Missing keys are
    not an error; callers check for what they need.
    """
    if not body or not isinstance(body, str):
        logger.warning("Invalid form body received: %r", type(body).__name__)
        return {}

    params: dict[str, str] = {}
    for pair in body.split("&"):
        raw_key, _, raw_value = pair.partition("=")
        key = unquote(raw_key).strip()
        if not key:
            continue
        params[key] = unquote(raw_value).replace("+", " ").strip()

    logger.debug(f"Parsed form body keys: {sorted(params)}")
    return params


@dataclass(frozen=True)
class ParsedCommand:
    """One slash-command invocation, consumed once by a handler."""

    command: str
    user_name: str
    raw_text: str

    @classmethod
    def from_form(cls, params: dict[str, str]) -> "ParsedCommand":
        return cls(
            command=params.get(PARAM_COMMAND, ""),
            user_name=params.get(PARAM_USER) or DEFAULT_USER_NAME,
            raw_text=params.get(PARAM_TEXT, ""),
        )
