"""
rulelex — Priority-Ordered Rule Tokenizer for Python

Splits a byte buffer into named tokens using an ordered list of matcher
rules. The first rule that recognizes or consumes input wins; skip rules
consume input silently (whitespace, comments) and scanning stops with a
NoMatchError when nothing applies.

Quick Start:
    >>> from rulelex import Scanner, skip_if_matches, tokenize_if_matches
    >>> scanner = Scanner("price 12", [
    ...     tokenize_if_matches(r"[a-z]+", "WORD"),
    ...     skip_if_matches(r"\\s+"),
    ...     tokenize_if_matches(r"\\d+", "PRICE"),
    ... ])
    >>> while scanner.scan():
    ...     print(scanner.token.name, scanner.token.text)
    WORD b'price'
    PRICE b'12'
    >>> scanner.error is None
    True

    >>> # Or collect everything at once (raises NoMatchError if stuck)
    >>> from rulelex import tokenize
    >>> [t.name for t in tokenize("12 34", [
    ...     tokenize_if_matches(r"\\d+", "DIGIT"),
    ...     skip_if_matches(r"\\s+"),
    ... ])]
    ['DIGIT', 'DIGIT']

Custom Matchers:
    Any callable taking the remaining input and returning
    ``(matched, shift, name, text)`` works as a matcher:

    >>> def price(data):
    ...     m = re.match(rb"\\$(\\d+(?:\\.\\d+)?)", data)
    ...     if m is None:
    ...         return NO_MATCH
    ...     return True, m.end(), "PRICE", m.group(1)

Installation:
    pip install rulelex              # Core scanner (zero deps)
"""

from collections.abc import Iterable

from rulelex.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from rulelex.errors import MatcherError, NoMatchError, RulelexError, ScanError
from rulelex.location import SourceLocation
from rulelex.matchers import (
    NO_MATCH,
    Matcher,
    MatchResult,
    anchor_pattern,
    catch_all,
    skip_if_matches,
    tokenize_if_matches,
)
from rulelex.profiling import ScanAccumulator, get_scan_accumulator, profiled_scan
from rulelex.scanner import Scanner
from rulelex.states import ScannerState
from rulelex.tokens import Token

__version__ = "0.1.0"


def tokenize(
    text: str | bytes,
    matchers: Iterable[Matcher],
    *,
    source_file: str | None = None,
) -> list[Token]:
    """Tokenize text in one call.

    Args:
        text: Input to scan
        matchers: Matchers in priority order
        source_file: Optional source file path for error messages

    Returns:
        List of tokens in input order

    Raises:
        NoMatchError: If no matcher recognizes part of the input
    """
    scanner = Scanner(text, matchers, source_file=source_file)
    return list(scanner.tokens())


__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "Scanner",
    "ScannerState",
    "Token",
    "tokenize",
    # Matchers
    "Matcher",
    "MatchResult",
    "NO_MATCH",
    "anchor_pattern",
    "catch_all",
    "skip_if_matches",
    "tokenize_if_matches",
    # Errors
    "RulelexError",
    "ScanError",
    "NoMatchError",
    "MatcherError",
    # Location
    "SourceLocation",
    # Configuration (ContextVar-based)
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
    # Profiling
    "ScanAccumulator",
    "get_scan_accumulator",
    "profiled_scan",
]
