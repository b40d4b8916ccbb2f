"""Unit tests for option parsing and credential prompts."""

from unittest.mock import Mock, patch

import pytest

from edge_portal_role.cli import parse_options, prompt_credentials
from edge_portal_role.config import DEFAULT_BASE_URL, DEFAULT_ROLE


class TestParseOptions:
    """Test flag parsing, defaults and usage errors."""

    def test_defaults(self) -> None:
        args = parse_options(["-o", "acme"])

        assert args.org == "acme"
        assert args.username == ""
        assert args.base_url == DEFAULT_BASE_URL
        assert args.role == DEFAULT_ROLE == "drupalportal"
        assert args.debug is False

    def test_all_flags(self) -> None:
        args = parse_options(
            ["-o", "acme", "-u", "admin@example.com", "-b", "https://edge.example.com/v1/", "-r", "portal", "-d"]
        )

        assert args.username == "admin@example.com"
        assert args.base_url == "https://edge.example.com/v1"
        assert args.role == "portal"
        assert args.debug is True

    def test_help_exits_zero(self, capsys: pytest.CaptureFixture) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_options(["-h"])

        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert "-o <org>" in out
        assert "drupalportal" in out

    @pytest.mark.parametrize("argv", [["-x"], ["-o", "acme", "-z"], ["-o", "acme", "extra"]])
    def test_unknown_option(self, argv: list, capsys: pytest.CaptureFixture) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_options(argv)

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "Invalid option" in captured.err
        assert "usage:" in captured.out

    @pytest.mark.parametrize("flag", ["-o", "-u", "-b", "-r"])
    def test_missing_argument(self, flag: str, capsys: pytest.CaptureFixture) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_options(["-d", flag])

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "expected one argument" in captured.err
        assert "usage:" in captured.out

    def test_missing_org(self, capsys: pytest.CaptureFixture) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_options(["-u", "admin@example.com"])

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "ERROR: no org specified." in captured.err
        assert "usage:" in captured.out

    def test_invalid_base_url(self, capsys: pytest.CaptureFixture) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_options(["-o", "acme", "-b", "api.enterprise.apigee.com/v1"])

        assert exc_info.value.code == 1
        assert "http://" in capsys.readouterr().err

    def test_debug_echoes_options(self, capsys: pytest.CaptureFixture) -> None:
        parse_options(["-o", "acme", "-u", "admin@example.com", "-d"])

        out = capsys.readouterr().out
        assert "EDGE_ORGADMIN_EMAIL: [admin@example.com]" in out
        assert "EDGE_ORG_NAME: [acme]" in out
        assert "PORTAL_API_ROLE: [drupalportal]" in out
        assert f"APIGEE_API_BASE_URL: [{DEFAULT_BASE_URL}]" in out

    def test_combined_short_flags(self) -> None:
        args = parse_options(["-do", "acme"])

        assert args.debug is True
        assert args.org == "acme"


class TestPromptCredentials:
    """Test interactive credential prompts."""

    @patch("edge_portal_role.cli.Prompt.ask")
    def test_prompts_for_email_and_password(self, mock_ask: Mock, capsys: pytest.CaptureFixture) -> None:
        mock_ask.side_effect = ["admin@example.com", "s3cret"]

        assert prompt_credentials("acme") == ("admin@example.com", "s3cret")

        assert mock_ask.call_count == 2
        assert mock_ask.call_args_list[1].kwargs["password"] is True
        assert 'connect to the Apigee org "acme"' in capsys.readouterr().out

    @patch("edge_portal_role.cli.Prompt.ask")
    def test_known_email_only_prompts_password(self, mock_ask: Mock) -> None:
        mock_ask.return_value = "s3cret"

        assert prompt_credentials("acme", "admin@example.com") == ("admin@example.com", "s3cret")

        mock_ask.assert_called_once()
        assert mock_ask.call_args.kwargs["password"] is True
