"""
Slash-command routing.

Every command produces exactly one result for Slack: the handler's text on
success, or ``{"error": ...}`` on failure. Failures are also reported to the
notifier; internal errors are logged with a traceback and shown to the user
as a generic message.
"""

import json
import logging

from leave_sheet_bot.errors import LeaveBotError, MalformedInputError
from leave_sheet_bot.form_parser import ParsedCommand, parse_form_body
from leave_sheet_bot.handlers import LeaveCommandHandlers, Notifier

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = (
    "🚨 Something went wrong while processing your command. Please try again later."
)

CMD_LEAVE_REQUEST = "/leave_request"
CMD_LEAVE_STATUS = "/leave_status"
CMD_LEAVE_CANCEL = "/leave_cancel"


def render_response(result: str | dict) -> str:
    """Serialize a command result into the plain-text body Slack displays."""
    if isinstance(result, dict):
        return json.dumps(result, indent=2, ensure_ascii=False)
    return result


class CommandDispatcher:
    """Routes slash commands to handlers and renders every failure."""

    def __init__(self, handlers: LeaveCommandHandlers, notifier: Notifier):
        self.notifier = notifier
        self.routes = {
            CMD_LEAVE_REQUEST: handlers.create,
            CMD_LEAVE_STATUS: handlers.status,
            CMD_LEAVE_CANCEL: handlers.cancel,
        }

    def dispatch(self, body: str) -> str | dict:
        command_name = "<unknown>"
        try:
            if not body:
                raise MalformedInputError("Invalid request: No post data received.")

            command = ParsedCommand.from_form(parse_form_body(body))
            command_name = command.command or "<missing>"
            logger.info(f"Received Slack command: {command_name}, text: {command.raw_text}")

            handler = self.routes.get(command.command)
            if handler is None:
                raise MalformedInputError(f"Invalid command received - {command_name}")

            return handler(command)

        except LeaveBotError as e:
            logger.warning(f"{command_name} rejected ({type(e).__name__}): {e.message}")
            self.notifier.notify_error(e.message)
            return {"error": f"❌ Error: {e.message}"}

        except Exception as e:
            logger.error(f"Unexpected error handling {command_name}: {e}", exc_info=True)
            self.notifier.notify_error(f"🚨 Error processing {command_name}: {e}")
            return {"error": GENERIC_FAILURE_MESSAGE}
