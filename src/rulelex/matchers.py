"""Matcher protocol and the built-in pattern matchers.

A matcher is any callable that takes the remaining, unconsumed input and
reports what it recognizes at the very start of it::

    matcher(data) -> (matched, shift, name, text)

- ``matched``: True if a token was recognized
- ``shift``: bytes to consume, applied whether or not ``matched`` is True
- ``name``: token name, required when ``matched`` is True
- ``text``: token body, required when ``matched`` is True (normally the
  first ``shift`` bytes, but a matcher may return a sub-span)

``(False, 0, None, None)`` means "does not apply" and the scanner falls
through to the next matcher. ``(False, n, None, None)`` with ``n > 0`` is a
skip: the bytes are consumed and nothing is emitted.

The scanner passes ``data`` as a read-only ``memoryview`` over the
remaining input, so nothing is copied per call. Match it with ``re``,
slicing and comparison (``data[:1] == b"$"``); ``bytes`` methods such as
``startswith`` are not available on it, so call ``bytes(data)`` first if a
matcher needs them.

Matchers must be stateless so one matcher list can serve many scanners.
A matcher that reports a zero-length token stalls the scanner; avoiding
that is the matcher author's job.

Example:
    >>> from rulelex.matchers import skip_if_matches, tokenize_if_matches
    >>> word = tokenize_if_matches(r"[a-z]+", "WORD")
    >>> word(b"price 12")
    MatchResult(matched=True, shift=5, name='WORD', text=b'price')
    >>> skip_if_matches(r"\\s+")(b"  12")
    MatchResult(matched=False, shift=2, name=None, text=None)

"""

from __future__ import annotations

import re
from typing import Any, NamedTuple, Protocol

from rulelex.errors import MatcherError


class MatchResult(NamedTuple):
    """Outcome of a single matcher invocation."""

    matched: bool
    shift: int
    name: Any = None
    text: bytes | None = None


NO_MATCH = MatchResult(False, 0, None, None)


class Matcher(Protocol):
    """Structural type of a matcher: any callable returning the 4-tuple.

    ``data`` is a ``memoryview`` when called by the scanner. Use ``re`` or
    slicing on it, not ``bytes`` methods.
    """

    def __call__(
        self, data: memoryview | bytes, /
    ) -> tuple[bool, int, Any, bytes | memoryview | None]: ...


# Leading global inline flags, e.g. "(?i)" or "(?ms)". Python only accepts
# these at the very start of a pattern, so an anchor goes after them.
_FLAGS_PREFIX = re.compile(r"(?:\(\?[aiLmsux]+\))*")
_FLAGS_PREFIX_BYTES = re.compile(rb"(?:\(\?[aiLmsux]+\))*")


def anchor_pattern(pattern: str | bytes) -> str | bytes:
    """Anchor a pattern to the start of input.

    Patterns that already begin with ``^`` or ``\\A`` (after any leading
    global flag groups) are returned unchanged.

    Examples:
        >>> anchor_pattern(r"\\d+")
        '^\\\\d+'
        >>> anchor_pattern(r"^foo")
        '^foo'
        >>> anchor_pattern(r"(?i)if")
        '(?i)^if'
    """
    if isinstance(pattern, bytes):
        end = _FLAGS_PREFIX_BYTES.match(pattern).end()
        body = pattern[end:]
        if body.startswith((b"^", rb"\A")):
            return pattern
        return pattern[:end] + b"^" + body

    end = _FLAGS_PREFIX.match(pattern).end()
    body = pattern[end:]
    if body.startswith(("^", r"\A")):
        return pattern
    return pattern[:end] + "^" + body


def compile_pattern(pattern: str | bytes | re.Pattern, flags: int = 0) -> re.Pattern:
    """Compile a pattern for matching against bytes input.

    str patterns must be ASCII and are encoded as such. A non-ASCII str
    pattern would silently match single bytes where it names characters
    (``é+`` repeating only the last byte of ``é``), so it is rejected; write
    such rules as bytes patterns, grouping multi-byte characters explicitly
    (``"(?:é)+".encode()``). Already compiled bytes patterns are re-anchored
    only if needed.

    Raises:
        MatcherError: If the pattern does not compile, uses flags a bytes
            pattern rejects (``re.UNICODE``), is a non-ASCII str pattern, or
            is a str-compiled pattern that cannot match bytes.
    """
    if isinstance(pattern, re.Pattern):
        if isinstance(pattern.pattern, str):
            raise MatcherError(pattern, "compiled patterns must be bytes patterns")
        anchored = anchor_pattern(pattern.pattern)
        if anchored is pattern.pattern and not flags:
            return pattern
        flags |= pattern.flags
        pattern = anchored
    elif isinstance(pattern, str):
        if not pattern.isascii():
            raise MatcherError(
                pattern, "str patterns must be ASCII; use a bytes pattern for non-ASCII text"
            )
        pattern = anchor_pattern(pattern).encode("ascii")
    else:
        pattern = anchor_pattern(pattern)

    try:
        return re.compile(pattern, flags)
    except (re.error, ValueError) as e:
        raise MatcherError(pattern, f"invalid pattern: {e}") from e


class PatternMatcher:
    """Matcher backed by a compiled, start-anchored regular expression.

    Compiled once at construction; safe to share between scanners.
    Build with skip_if_matches() or tokenize_if_matches().

    """

    __slots__ = ("_regex", "name", "emit")

    def __init__(self, regex: re.Pattern, name: Any = None, *, emit: bool = True) -> None:
        self._regex = regex
        self.name = name
        self.emit = emit

    @property
    def pattern(self) -> bytes:
        """The anchored pattern source."""
        return self._regex.pattern

    def __call__(self, data: memoryview | bytes) -> MatchResult:
        m = self._regex.match(data)
        if m is None:
            return NO_MATCH
        shift = m.end()
        if not self.emit:
            return MatchResult(False, shift, None, None)
        return MatchResult(True, shift, self.name, bytes(m.group()))

    def __repr__(self) -> str:
        if self.emit:
            return f"tokenize_if_matches({self.pattern!r}, {self.name!r})"
        return f"skip_if_matches({self.pattern!r})"


def skip_if_matches(pattern: str | bytes | re.Pattern, flags: int = 0) -> PatternMatcher:
    """Consume matches of pattern without creating a token.

    Useful for whitespace, comments and other text that carries no tokens.
    A ``^`` anchor is inserted if the pattern lacks one.

    Args:
        pattern: Regular expression (str, bytes or compiled bytes pattern); str
            patterns must be ASCII
        flags: Extra ``re`` flags

    Returns:
        Matcher reporting ``(False, len(match), None, None)`` on a match
    """
    return PatternMatcher(compile_pattern(pattern, flags), emit=False)


def tokenize_if_matches(
    pattern: str | bytes | re.Pattern, name: Any, flags: int = 0
) -> PatternMatcher:
    """Create a token with the given name if pattern matches.

    A ``^`` anchor is inserted if the pattern lacks one.

    Usage examples:
        tokenize_if_matches(r"\\d+", "DIGIT")
        tokenize_if_matches(r"(?i)if", "IF")  # case-insensitive
        tokenize_if_matches(r"\\d+", TokenKind.DIGIT)  # any name type works
        tokenize_if_matches("(?:é)+".encode(), "E")  # non-ASCII needs bytes

    Returns:
        Matcher reporting ``(True, len(match), name, match)`` on a match
    """
    return PatternMatcher(compile_pattern(pattern, flags), name)


class _CatchAll:
    __slots__ = ("name",)

    def __init__(self, name: Any) -> None:
        self.name = name

    def __call__(self, data: memoryview | bytes) -> MatchResult:
        if not data:
            return NO_MATCH
        return MatchResult(True, 1, self.name, bytes(data[:1]))

    def __repr__(self) -> str:
        return f"catch_all({self.name!r})"


def catch_all(name: Any = "ERROR") -> _CatchAll:
    """Tokenize any single byte under name.

    Append it last to make a scanner lenient: input no other matcher
    recognizes comes out as one-byte tokens instead of a NoMatchError.
    """
    return _CatchAll(name)
