"""Field name sanitization.

Field names arrive as query-string keys and are interpolated into the
statement as document paths (``c["Sub Category"]``). Cosmos DB has no
parameter mechanism for property paths, so stripping everything outside
the allow-list is the only identifier defence and must run on every name
before it reaches a clause or a DISTINCT projection.
"""

import re
from typing import Any

from sheetquery.constants import FIELD_NAME_PATTERN

_UNSAFE_CHARS = re.compile(FIELD_NAME_PATTERN)


def sanitize_field_name(raw: Any) -> str:
    """Remove every character that is not a letter, digit, space, ``_`` or ``-``.

    Never raises. ``None`` and empty input yield ``""``; other non-string
    input is converted with ``str()`` first. Idempotent.

    Example:
        >>> sanitize_field_name('Sub Category"] OR 1=1 --')
        'Sub Category OR 11 --'
    """
    if raw is None:
        return ""
    return _UNSAFE_CHARS.sub("", raw if isinstance(raw, str) else str(raw))


def document_path(field: Any) -> str:
    """Render a sanitized bracketed property path for ``field``."""
    return f'c["{sanitize_field_name(field)}"]'
