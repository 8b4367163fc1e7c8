"""Exception classes for rulelex.

Provides standardized exceptions for error handling throughout rulelex.
"""

from __future__ import annotations


class RulelexError(Exception):
    """Base exception for all rulelex errors.

    Subclass this for specific error categories.
    """

    pass


class ScanError(RulelexError):
    """Error during scanning.

    Raised (or stored on the scanner) when the input cannot be tokenized.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize scan error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class NoMatchError(ScanError):
    """No matcher recognized the remaining input.

    Carries the unmatched remainder (or a bounded prefix of it) so callers
    can report what the scanner got stuck on.
    """

    def __init__(
        self,
        remainder: bytes,
        offset: int,
        *,
        truncated: bool = False,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize no-match error.

        Args:
            remainder: Unmatched input (possibly a prefix of it)
            offset: Byte offset of the remainder in the scanned input
            truncated: True if remainder was cut to the excerpt limit
            lineno: Line number of the remainder start (1-indexed)
            col_offset: Column of the remainder start (1-indexed)
            source_file: Path to source file (optional)
        """
        self.remainder = remainder
        self.offset = offset
        self.truncated = truncated

        shown = remainder.decode("utf-8", errors="replace")
        suffix = "..." if truncated else ""
        super().__init__(
            f"Can't match any existing matchers for the following text: {shown!r}{suffix}",
            lineno=lineno,
            col_offset=col_offset,
            source_file=source_file,
        )


class MatcherError(RulelexError):
    """A matcher is invalid or broke the matcher contract.

    Raised for patterns that fail to compile and for outcomes such as a
    negative shift or a shift past the end of the input.
    """

    def __init__(self, matcher: object, message: str) -> None:
        """Initialize matcher error.

        Args:
            matcher: The offending matcher (or its pattern)
            message: Description of the problem
        """
        self.matcher = repr(matcher)
        super().__init__(f"Matcher {self.matcher}: {message}")
