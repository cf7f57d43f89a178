"""Credential redaction and secure logging setup.

Every request document carries the user and partner passwords in clear
text. The dispatcher logs request bodies at DEBUG level, so everything
that reaches a log handler passes through :func:`redact_credentials`.
"""

import logging
import re
import sys
from typing import Iterable

SENSITIVE_ELEMENTS = ("UserPassword", "PartnerPassword", "PartnerToken", "AccountToken")

REDACTED = "<REDACTED>"


def _element_pattern(names: Iterable[str]) -> "re.Pattern[str]":
    alternatives = "|".join(re.escape(name) for name in names)
    return re.compile(rf"(<(?P<tag>{alternatives})>)(.*?)(</(?P=tag)>)", re.DOTALL)


_SENSITIVE_PATTERN = _element_pattern(SENSITIVE_ELEMENTS)


def redact_credentials(text: str) -> str:
    """Mask the content of password elements in an XML document.

    :param text: XML text, possibly containing credentials
    :type text: str
    :return: Same text with password element contents replaced
    :rtype: str
    """
    if not text:
        return text
    return _SENSITIVE_PATTERN.sub(lambda m: f"{m.group(1)}{REDACTED}{m.group(4)}", text)


class SanitizingFormatter(logging.Formatter):
    """Formatter that redacts credentials from the rendered message.

    :param record: Log record to format
    :type record: logging.LogRecord
    :return: Formatted log message with credentials removed
    :rtype: str
    """

    def format(self, record: logging.LogRecord) -> str:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            message = str(record.msg)
        record.msg = redact_credentials(message)
        record.args = None
        return super().format(record)


_LOGGING_CONFIGURED = False


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a sanitizing stdout handler.

    Calling it more than once is a no-op.

    :param level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    :type level: str
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        logging.getLogger(__name__).debug("Logging already configured, skipping duplicate setup")
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        SanitizingFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logging.basicConfig(level=getattr(logging, level.upper()), handlers=[handler], force=True)

    # httpx logs every request at INFO; keep it one level quieter than ours
    logging.getLogger("httpx").setLevel(max(logging.WARNING, getattr(logging, level.upper())))

    _LOGGING_CONFIGURED = True
