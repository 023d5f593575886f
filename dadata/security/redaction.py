"""Redaction of credentials in header maps and free-form log text.

Sensitive names are matched case-sensitively against a fixed set:
- Authorization (API key, sent as "Token <key>")
- X-Secret (secret key)
- API-Key

Matched values are replaced with a fixed placeholder before the text
reaches a log sink or an exception message.
"""

import re
from collections.abc import Mapping

SENSITIVE_HEADERS: tuple[str, ...] = ("Authorization", "X-Secret", "API-Key")

FILTERED = "[FILTERED]"

# "<Name> : <value up to the next comma or newline>"
_MESSAGE_PATTERNS: list[tuple[re.Pattern, str]] = [
    (re.compile(rf"{re.escape(name)}\s*:\s*[^\n,]+"), f"{name}: {FILTERED}")
    for name in SENSITIVE_HEADERS
]


def sanitize_headers(headers: Mapping[str, str] | None) -> str:
    """Render headers as "k: v, k: v" with sensitive values filtered.

    >>> sanitize_headers({"API-Key": "secret", "Content-Type": "application/json"})
    'API-Key: [FILTERED], Content-Type: application/json'
    """
    if not headers:
        return ""

    parts = []
    for key, value in headers.items():
        if key in SENSITIVE_HEADERS:
            parts.append(f"{key}: {FILTERED}")
        else:
            parts.append(f"{key}: {value}")
    return ", ".join(parts)


def sanitize_message(msg) -> str:
    """Replace every "<SensitiveName>: <value>" occurrence in free text.

    Non-string input yields an empty string. Applying it twice gives the
    same result as applying it once.
    """
    if not isinstance(msg, str):
        return ""

    result = msg
    for pattern, replacement in _MESSAGE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result
