"""Tests for credential redaction in logs."""

import logging

import pytest

from afterbuy_client.utils import security
from afterbuy_client.utils.security import REDACTED, SanitizingFormatter, redact_credentials, setup_logging

REQUEST = (
    "<Request><AfterbuyGlobal><PartnerID>1234</PartnerID>"
    "<PartnerPassword>p&amp;ss</PartnerPassword><UserID>shop</UserID>"
    "<UserPassword>hunter2</UserPassword></AfterbuyGlobal></Request>"
)


@pytest.mark.unit
def test_redacts_password_elements_only():
    redacted = redact_credentials(REQUEST)

    assert "hunter2" not in redacted
    assert "p&amp;ss" not in redacted
    assert f"<UserPassword>{REDACTED}</UserPassword>" in redacted
    assert "<UserID>shop</UserID>" in redacted
    assert "<PartnerID>1234</PartnerID>" in redacted


@pytest.mark.unit
def test_text_without_credentials_is_unchanged():
    assert redact_credentials("<Afterbuy/>") == "<Afterbuy/>"
    assert redact_credentials("") == ""


@pytest.mark.unit
def test_formatter_redacts_interpolated_arguments():
    formatter = SanitizingFormatter("%(levelname)s %(message)s")
    record = logging.LogRecord("afterbuy", logging.DEBUG, __file__, 1, "Posting: %s", (REQUEST,), None)

    output = formatter.format(record)

    assert output.startswith("DEBUG Posting: <Request>")
    assert "hunter2" not in output


@pytest.mark.unit
def test_setup_logging_runs_once(monkeypatch):
    monkeypatch.setattr(security, "_LOGGING_CONFIGURED", False)
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("DEBUG")
        handler = root.handlers[0]
        assert isinstance(handler.formatter, SanitizingFormatter)
        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

        setup_logging("ERROR")
        assert root.handlers[0] is handler
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
        logging.getLogger("httpx").setLevel(logging.NOTSET)
