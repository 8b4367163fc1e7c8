"""Priority-ordered rule scanner.

The scanner owns an input buffer, a cursor into it and an ordered list of
matchers. Each scan() call tries the matchers in order against the
remaining input; the first one that either recognizes a token or consumes
bytes wins. Skips are applied in a loop until a token is produced, the
input runs out, or no matcher fires.

There is no longest-match arbitration: an earlier matcher shadows a later
one even if the later one would consume more. Order the list accordingly.

Usage:
    >>> scanner = Scanner("price 12", [
    ...     tokenize_if_matches(r"[a-z]+", "WORD"),
    ...     skip_if_matches(r"\\s+"),
    ...     tokenize_if_matches(r"\\d+", "PRICE"),
    ... ])
    >>> while scanner.scan():
    ...     print(scanner.token)
    Token(WORD, b'price', 1:1)
    Token(PRICE, b'12', 1:7)

Thread Safety:
Scanner instances are not shared. All state is instance-local; matchers
are stateless and may be reused by any number of scanners.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from rulelex.config import ScanConfig, get_scan_config
from rulelex.errors import MatcherError, NoMatchError
from rulelex.matchers import Matcher
from rulelex.profiling import get_scan_accumulator
from rulelex.states import ScannerState
from rulelex.tokens import Token
from rulelex.utils.logger import get_logger
from rulelex.utils.text import excerpt

logger = get_logger(__name__)


class Scanner:
    """Sequential tokenizer driven by a priority list of matchers.

    States:
        READY -> scan() -> READY (token) | EXHAUSTED | STUCK
        any   -> reset() -> READY at the start of the input

    The current token and the error are never set at the same time.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_source_file",
        "_config",
        "_matchers",
        "_pos",
        "_lineno",
        "_col",
        "_token",
        "_error",
        "_state",
    )

    def __init__(
        self,
        text: str | bytes,
        matchers: Iterable[Matcher] | None = None,
        *,
        source_file: str | None = None,
    ) -> None:
        """Initialize scanner with input text.

        Args:
            text: Input to scan. str input is encoded with the active
                ScanConfig encoding; bytes-like input is copied as-is.
            matchers: Optional matchers, appended in order
            source_file: Optional source file path for error messages
        """
        self._config: ScanConfig = get_scan_config()
        if isinstance(text, str):
            text = text.encode(self._config.encoding)
        self._source = bytes(text)
        self._source_len = len(self._source)
        self._source_file = source_file
        self._matchers: list[Matcher] = []
        self.reset()

        if matchers is not None:
            for matcher in matchers:
                self.add_matcher(matcher)

    @classmethod
    def with_matchers(
        cls,
        text: str | bytes,
        matchers: Iterable[Matcher],
        *,
        source_file: str | None = None,
    ) -> Scanner:
        """Create a scanner and append each matcher in order.

        Example:
            >>> scanner = Scanner.with_matchers("12 34", [
            ...     tokenize_if_matches(r"\\d+", "DIGIT"),
            ...     skip_if_matches(r"\\s+"),
            ... ])
        """
        return cls(text, matchers, source_file=source_file)

    def add_matcher(self, matcher: Matcher) -> None:
        """Append a matcher to the end of the matcher list.

        Duplicates are allowed; there is no removal.
        """
        if not callable(matcher):
            raise MatcherError(matcher, "matchers must be callable")
        self._matchers.append(matcher)

    def reset(self) -> None:
        """Rewind to the start of the input and clear token and error."""
        self._pos = 0
        self._lineno = 1
        self._col = 1
        self._token: Token | None = None
        self._error: NoMatchError | None = None
        self._state = ScannerState.READY

    # =========================================================================
    # Scanning
    # =========================================================================

    def scan(self) -> bool:
        """Scan for the next token.

        Returns:
            True if a token is available via ``token``; False once the
            input is exhausted or no matcher recognizes what is left
            (see ``error``).

        Raises:
            MatcherError: If a matcher returns an invalid shift.
            NoMatchError: Only when ScanConfig.raise_on_error is set.
        """
        self._token = None
        if self._state is not ScannerState.READY:
            return False

        acc = get_scan_accumulator()
        view = memoryview(self._source)
        matchers = self._matchers

        while True:
            remaining = view[self._pos :]
            matched = False
            shift = 0
            name = None
            text = None
            calls = 0

            for fn in matchers:
                calls += 1
                matched, shift, name, text = fn(remaining)
                if shift < 0 or shift > len(remaining):
                    logger.debug("Matcher %r returned shift %d at offset %d", fn, shift, self._pos)
                    raise MatcherError(
                        fn, f"shift {shift} outside remaining input of {len(remaining)} bytes"
                    )
                if matched or shift > 0:
                    break

            if acc is not None:
                acc.record_matcher_calls(calls)

            if matched:
                if shift == 0 and self._config.forbid_empty_tokens:
                    raise MatcherError(fn, f"zero-length token {name!r} at offset {self._pos}")
                self._token = self._make_token(name, text, shift)
                if acc is not None:
                    acc.record_token(shift)
                return True

            if shift > 0:
                self._advance(shift)
                if acc is not None:
                    acc.record_skip(shift)
                continue

            if remaining:
                self._fail(remaining)
                if acc is not None:
                    acc.record_failure()
                if self._config.raise_on_error:
                    raise self._error
                return False

            self._state = ScannerState.EXHAUSTED
            return False

    def tokens(self) -> Iterator[Token]:
        """Yield tokens until the input is consumed.

        Raises:
            NoMatchError: After the last token, if the scanner got stuck.
        """
        while self.scan():
            yield self._token
        if self._error is not None:
            raise self._error

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens until scan() returns False; check ``error`` after."""
        while self.scan():
            yield self._token

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def token(self) -> Token | None:
        """Token produced by the last scan() call, or None."""
        return self._token

    @property
    def error(self) -> NoMatchError | None:
        """Pending NoMatchError; set only in the STUCK state."""
        return self._error

    @property
    def state(self) -> ScannerState:
        return self._state

    @property
    def source(self) -> bytes:
        return self._source

    @property
    def source_file(self) -> str | None:
        return self._source_file

    @property
    def matchers(self) -> tuple[Matcher, ...]:
        """Snapshot of the matcher list in priority order."""
        return tuple(self._matchers)

    @property
    def pos(self) -> int:
        """Cursor: byte offset of the first unconsumed byte."""
        return self._pos

    @property
    def remaining(self) -> bytes:
        return self._source[self._pos :]

    # =========================================================================
    # Cursor helpers
    # =========================================================================

    def _advance(self, shift: int) -> None:
        """Move the cursor forward by shift bytes, tracking line and column."""
        start = self._pos
        end = start + shift
        newline_count = self._source.count(b"\n", start, end)
        if newline_count > 0:
            self._lineno += newline_count
            self._col = end - self._source.rfind(b"\n", start, end)
        else:
            self._col += shift
        self._pos = end

    def _make_token(self, name: object, text: bytes | memoryview | None, shift: int) -> Token:
        """Consume shift bytes and build the token for them.

        A missing text falls back to the consumed bytes.
        """
        start = self._pos
        lineno = self._lineno
        col = self._col
        self._advance(shift)
        body = self._source[start : self._pos] if text is None else bytes(text)
        return Token(
            name=name,
            text=body,
            _start_offset=start,
            _end_offset=self._pos,
            _lineno=lineno,
            _col=col,
            _end_lineno=self._lineno,
            _end_col=self._col,
            _source_file=self._source_file,
        )

    def _fail(self, remaining: memoryview) -> None:
        """Record a NoMatchError for the remaining input and get stuck."""
        shown, truncated = excerpt(remaining, self._config.error_excerpt_limit)
        self._error = NoMatchError(
            shown,
            self._pos,
            truncated=truncated,
            lineno=self._lineno,
            col_offset=self._col,
            source_file=self._source_file,
        )
        self._state = ScannerState.STUCK
        logger.debug(
            "No matcher recognized input at offset %d (%d bytes left)",
            self._pos,
            len(remaining),
        )
