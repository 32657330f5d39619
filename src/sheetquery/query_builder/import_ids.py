"""Import id normalization.

Callers pass the identifier of an uploaded file in one of several shapes:
the bare id (``42``), the stored form (``import_42``) or a form that an
upstream producer prefixed twice (``import_import_42``). Rows are stored
under ``import_<base>``; this module maps any of those shapes to the
partition key values worth querying.
"""

import re
from typing import Any, List

from sheetquery.constants import IMPORT_ID_PREFIX
from sheetquery.logging import get_logger
from sheetquery.types import ImportIdCandidateSet

logger = get_logger(__name__)

_LEADING_PREFIXES = re.compile(rf"^(?:{re.escape(IMPORT_ID_PREFIX)})+")
_DOUBLE_PREFIX = IMPORT_ID_PREFIX * 2


def strip_import_prefixes(raw_id: Any) -> str:
    """Remove every leading ``import_`` repetition."""
    return _LEADING_PREFIXES.sub("", str(raw_id))


def normalize_import_id(raw_id: Any, match_legacy_double_prefix: bool = False) -> ImportIdCandidateSet:
    """Build the candidate partition key values for a file identifier.

    1. ``import_<base>`` where ``base`` is ``raw_id`` without any leading
       ``import_`` repetitions. Always present.
    2. ``import_<raw_id>``, only when ``raw_id`` does not already start with
       ``import_import_`` and, by default, only when the result is not
       itself double-prefixed. With the default that rules out
       ``raw_id`` values starting with ``import_``, so ``import_42`` yields
       just ``import_42``.

    ``match_legacy_double_prefix`` drops the second condition and keeps
    ``import_import_<id>`` so partitions written by the double-prefixing
    producer can still be found. Duplicates are removed, order is kept.

    Example:
        >>> normalize_import_id("import_import_42").candidates
        ['import_42']
        >>> normalize_import_id("42").candidates
        ['import_42']
        >>> normalize_import_id("import_42").candidates
        ['import_42']
        >>> normalize_import_id("import_42", match_legacy_double_prefix=True).candidates
        ['import_42', 'import_import_42']
    """
    raw = str(raw_id)
    base = strip_import_prefixes(raw)
    candidates: List[str] = [f"{IMPORT_ID_PREFIX}{base}"]

    if not raw.startswith(_DOUBLE_PREFIX):
        literal = f"{IMPORT_ID_PREFIX}{raw}"
        if literal not in candidates and (
            match_legacy_double_prefix or not literal.startswith(_DOUBLE_PREFIX)
        ):
            candidates.append(literal)

    logger.debug("Normalized import id", extra={"raw_import_id": raw, "candidates": candidates})
    return ImportIdCandidateSet(candidates=candidates)
