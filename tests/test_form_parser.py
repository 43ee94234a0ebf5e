"""
Tests for Slack form body parsing.
"""

from leave_sheet_bot.form_parser import ParsedCommand, parse_form_body

SLACK_BODY = (
    "token=E2nVZxTfCjqMx1XGbpVdzMQD&team_id=T07SUG42H9C&team_domain=testing02workspace"
    "&channel_id=C07T3KY2B28&user_id=U08BHUACMDZ&user_name=Aditya+Mishra"
    "&command=%2Fleave_request&text=25%2F02%2F2025-05%2F03%2F2025+2+%22Vacation%22"
    "&api_app_id=A08BYGJ4C3F&is_enterprise_install=false"
)


class TestParseFormBody:
    """Test parse_form_body."""

    def test_parses_slack_command_body(self):
        """Percent-encoding and '+' are decoded in values."""
        params = parse_form_body(SLACK_BODY)

        assert params["command"] == "/leave_request"
        assert params["user_name"] == "Aditya Mishra"
        assert params["text"] == '25/02/2025-05/03/2025 2 "Vacation"'
        assert params["is_enterprise_install"] == "false"

    def test_empty_and_non_string_input(self):
        """Invalid input fails softly."""
        assert parse_form_body("") == {}
        assert parse_form_body(None) == {}
        assert parse_form_body(b"command=%2Fleave_status") == {}

    def test_last_duplicate_key_wins(self):
        """Repeated keys keep the last value."""
        params = parse_form_body("text=first&text=second")
        assert params == {"text": "second"}

    def test_splits_on_first_equals_only(self):
        """Only the first '=' separates key and value."""
        params = parse_form_body("text=a=b=c")
        assert params["text"] == "a=b=c"

    def test_missing_value_and_empty_pairs(self):
        """Keys without '=' get an empty value; empty keys are skipped."""
        params = parse_form_body("command=%2Fleave_status&text&&=orphan")
        assert params == {"command": "/leave_status", "text": ""}

    def test_values_are_trimmed(self):
        """Keys and values are trimmed after decoding."""
        params = parse_form_body("text=++LID-123++&%20user_name%20=Bob")
        assert params["text"] == "LID-123"
        assert params["user_name"] == "Bob"

    def test_encoded_plus_also_becomes_space(self):
        """'+' is replaced after percent-decoding, so %2B reads as a space."""
        params = parse_form_body("text=1%2B1")
        assert params["text"] == "1 1"

    def test_missing_expected_keys_do_not_fail(self):
        """Absent Slack fields are simply missing."""
        params = parse_form_body("token=abc")
        assert "command" not in params
        assert "text" not in params


class TestParsedCommand:
    """Test ParsedCommand.from_form defaults."""

    def test_from_form(self):
        """Slack fields map onto the command."""
        command = ParsedCommand.from_form(parse_form_body(SLACK_BODY))
        assert command.command == "/leave_request"
        assert command.user_name == "Aditya Mishra"
        assert command.raw_text == '25/02/2025-05/03/2025 2 "Vacation"'

    def test_defaults(self):
        """Missing fields fall back to defaults."""
        command = ParsedCommand.from_form({})
        assert command.command == ""
        assert command.user_name == "Unknown User"
        assert command.raw_text == ""

    def test_blank_user_name_defaults(self):
        """A blank user name reads as Unknown User."""
        command = ParsedCommand.from_form({"user_name": ""})
        assert command.user_name == "Unknown User"
