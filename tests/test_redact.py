"""Tests for skcfctl.redact: secret redaction in text and log records."""

import logging

import skcfctl.redact as redact_module
from skcfctl.redact import SecretRedactingFilter, redact_secrets, register_secret


def _reset_cache():
    """Reset the module-level pattern cache so env changes take effect."""
    redact_module._patterns = None


def _record(msg, args=None):
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=args,
        exc_info=None,
    )


# ── redact_secrets ──────────────────────────────────────────────


def test_redact_secrets_replaces_value(monkeypatch):
    monkeypatch.setenv("SKCF_TOKEN", "skcf_SuperSecretToken123")
    _reset_cache()

    text = "Calling API with token skcf_SuperSecretToken123 now"
    assert redact_secrets(text) == "Calling API with token *** now"


def test_redact_secrets_short_values_ignored(monkeypatch):
    monkeypatch.setenv("SKCF_TOKEN", "short")
    _reset_cache()

    text = "Token is short and should not be redacted"
    assert redact_secrets(text) == text


def test_redact_secrets_no_env_vars():
    text = "Nothing secret here"
    assert redact_secrets(text) == text


def test_redact_secrets_multiple_values(monkeypatch):
    monkeypatch.setenv("SKCF_TOKEN", "skcf_TokenAAAA")
    monkeypatch.setenv("STACKIT_SERVICE_ACCOUNT_TOKEN", "sa_key_BBBB_long_enough")
    _reset_cache()

    result = redact_secrets("A=skcf_TokenAAAA B=sa_key_BBBB_long_enough done")
    assert result == "A=*** B=*** done"


def test_register_secret_from_config():
    register_secret("config-file-token-42")
    assert redact_secrets("Bearer config-file-token-42") == "Bearer ***"


def test_register_secret_ignores_empty_and_short():
    register_secret(None)
    register_secret("abc")
    assert redact_secrets("abc") == "abc"


# ── SecretRedactingFilter ───────────────────────────────────────


def test_secret_redacting_filter(monkeypatch):
    monkeypatch.setenv("SKCF_TOKEN", "skcf_FilterTestToken99")
    _reset_cache()

    record = _record("Using token skcf_FilterTestToken99")
    assert SecretRedactingFilter().filter(record) is True
    assert record.msg == "Using token ***"


def test_secret_redacting_filter_with_args(monkeypatch):
    monkeypatch.setenv("SKCF_TOKEN", "skcf_ArgsTestToken88")
    _reset_cache()

    record = _record("Token: %s (%d)", ("skcf_ArgsTestToken88", 3))
    SecretRedactingFilter().filter(record)
    assert record.args == ("***", 3)
    assert record.getMessage() == "Token: *** (3)"
