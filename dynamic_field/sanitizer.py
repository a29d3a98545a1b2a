"""
Safety check for administrator supplied option queries.

This is a deny-by-keyword, allow-by-structure filter, not a SQL parser: a
query is accepted only when it is a single statement starting with SELECT
and none of the data-changing keywords appears as a whole word.
"""
import logging
import re
from typing import FrozenSet, List

logger = logging.getLogger(__name__)

FORBIDDEN_KEYWORDS: FrozenSet[str] = frozenset({
    'insert', 'update', 'delete', 'drop', 'alter', 'truncate',
    'create', 'replace', 'merge', 'grant', 'revoke',
})

READ_ONLY_KEYWORD = 'select'
STATEMENT_SEPARATOR = ';'

_WHITESPACE_RE = re.compile(r'\s+')
_READ_ONLY_RE = re.compile(r"^" + READ_ONLY_KEYWORD + r"\b")
_FORBIDDEN_RE = re.compile(
    r'\b(' + '|'.join(re.escape(k) for k in sorted(FORBIDDEN_KEYWORDS)) + r')\b'
)


def normalize_query(query: str) -> str:
    """
    Lower-case a query and collapse every whitespace run to one space.

    Args:
        query: Raw query text

    Returns:
        Normalized query text (not trimmed)
    """
    return _WHITESPACE_RE.sub(' ', query.lower())


def find_forbidden_keywords(query: str) -> List[str]:
    """
    List the forbidden keywords that appear as whole words in a query.

    Identifiers that merely contain a keyword (``updated_at``, ``dropdown``)
    do not match.

    Args:
        query: Raw query text

    Returns:
        Sorted list of matching keywords, empty if none
    """
    if not isinstance(query, str):
        return []
    return sorted(set(_FORBIDDEN_RE.findall(normalize_query(query))))


def sanitize_query(query: str) -> bool:
    """
    Decide whether a query is safe to execute verbatim.

    Args:
        query: Raw query text from the field configuration

    Returns:
        True if the query may be executed, False otherwise
    """
    if not query or not isinstance(query, str):
        return False

    normalized = normalize_query(query)

    forbidden = sorted(set(_FORBIDDEN_RE.findall(normalized)))
    if forbidden:
        logger.debug(f"Query rejected, forbidden keywords: {forbidden}")
        return False

    # No chained statements
    if STATEMENT_SEPARATOR in normalized:
        logger.debug("Query rejected, contains a statement separator")
        return False

    if not _READ_ONLY_RE.match(normalized.strip()):
        logger.debug(f"Query rejected, does not start with {READ_ONLY_KEYWORD!r}")
        return False

    return True
