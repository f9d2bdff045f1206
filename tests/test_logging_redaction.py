"""Log redaction: AI command args and git output must not leak tokens."""

import logging

import pytest

from memory_cultivation.logging import LOG_LEVEL_ENV, _redact_event, _redact_value, mask_secret, resolve_log_level


class TestMaskSecret:
    def test_normal_key(self):
        assert mask_secret("ghp_abc123456789xyz") == "ghp_****9xyz"

    def test_short_key(self):
        assert mask_secret("short") == "****"

    def test_exactly_8_chars(self):
        assert mask_secret("12345678") == "****"


class TestRedactValue:
    def test_github_pat(self):
        result = _redact_value("token ghp_abcdefghijklmnop1234")
        assert "ghp_abcdefghijklmnop1234" not in result
        assert "****" in result

    def test_openai_key(self):
        result = _redact_value("--api-key sk-abc123456789xyzABCDEF")
        assert "sk-abc123456789xyzABCDEF" not in result

    def test_plain_text_untouched(self):
        assert _redact_value("copilot -m gpt-4o-mini") == "copilot -m gpt-4o-mini"


class TestRedactEvent:
    def test_redacts_strings_and_string_lists(self):
        event = {
            "event": "Running AI command",
            "argv": ["copilot", "--token", "ghp_abcdefghijklmnop1234"],
            "prompt_chars": 42,
        }
        out = _redact_event(logging.getLogger("test"), "debug", event)
        assert "ghp_abcdefghijklmnop1234" not in out["argv"][2]
        assert out["argv"][:2] == ["copilot", "--token"]
        assert out["prompt_chars"] == 42


@pytest.mark.parametrize("raw,expected", [("debug", "DEBUG"), ("", "WARNING"), ("LOUD", "WARNING")])
def test_resolve_log_level(monkeypatch, raw, expected):
    monkeypatch.setenv(LOG_LEVEL_ENV, raw)
    assert resolve_log_level() == expected
