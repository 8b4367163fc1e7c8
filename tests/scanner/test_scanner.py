"""Scanner behavior: construction, the scan step, ordering and reset."""

from __future__ import annotations

import re
from enum import Enum, auto

import pytest

from rulelex import (
    NO_MATCH,
    NoMatchError,
    Scanner,
    ScannerState,
    Token,
    skip_if_matches,
    tokenize,
    tokenize_if_matches,
)


def price_matcher(data):
    """Recognize $<number> and keep only the number as token text."""
    m = re.match(rb"\$(\d+(?:\.\d+)?)", data)
    if m is None:
        return NO_MATCH
    return True, m.end(), "PRICE", m.group(1)


def scan_all(scanner: Scanner) -> list[tuple[object, bytes]]:
    result = []
    while scanner.scan():
        result.append((scanner.token.name, scanner.token.text))
    return result


class TestConstruction:
    """Constructors and matcher list management."""

    def test_new_scanner_is_empty(self) -> None:
        scanner = Scanner("foo")
        assert scanner.source == b"foo"
        assert scanner.matchers == ()
        assert scanner.pos == 0
        assert scanner.token is None
        assert scanner.error is None
        assert scanner.state is ScannerState.READY

    def test_bytes_input_kept_as_is(self) -> None:
        scanner = Scanner(b"\xff\x00foo")
        assert scanner.source == b"\xff\x00foo"

    def test_str_input_encoded_as_utf8(self) -> None:
        scanner = Scanner("café")
        assert scanner.source == "café".encode()

    def test_with_matchers(self) -> None:
        scanner = Scanner.with_matchers("foo", [tokenize_if_matches(r"^foo", "FOO")])
        assert len(scanner.matchers) == 1

    def test_matchers_argument_keeps_order(self) -> None:
        first = tokenize_if_matches(r"a", "A")
        second = skip_if_matches(r"\s+")
        scanner = Scanner("a", [first, second])
        assert scanner.matchers == (first, second)

    def test_add_matcher_appends(self) -> None:
        scanner = Scanner("foo")
        assert len(scanner.matchers) == 0

        def fn(data):
            return True, 0, None, b""

        scanner.add_matcher(fn)
        assert len(scanner.matchers) == 1
        scanner.add_matcher(fn)
        assert scanner.matchers == (fn, fn)

    def test_matchers_snapshot_is_read_only(self) -> None:
        scanner = Scanner("foo", [tokenize_if_matches(r"foo", "FOO")])
        snapshot = scanner.matchers
        scanner.add_matcher(skip_if_matches(r"\s+"))
        assert len(snapshot) == 1
        assert len(scanner.matchers) == 2


class TestScan:
    """The scan step."""

    def test_custom_and_builtin_matchers(self) -> None:
        def foo_matcher(data):
            m = re.match(rb"fo+", data)
            if m is None:
                return NO_MATCH
            return True, m.end(), "TEST", m.group()

        scanner = Scanner("foo fooo  123")
        scanner.add_matcher(foo_matcher)
        scanner.add_matcher(tokenize_if_matches(r"^\d+", "DIGIT"))
        scanner.add_matcher(skip_if_matches(r"\s+"))

        assert scanner.scan()
        assert scanner.token == Token("TEST", b"foo")
        assert scanner.error is None

        assert scanner.scan()
        assert scanner.token == Token("TEST", b"fooo")

        assert scanner.scan()
        assert scanner.token == Token("DIGIT", b"123")

        assert not scanner.scan()
        assert scanner.token is None
        assert scanner.error is None

    def test_price_words(self) -> None:
        """Words, skipped whitespace, then a price."""
        scanner = Scanner(
            "price 12",
            [
                tokenize_if_matches(r"[a-z]+", "WORD"),
                skip_if_matches(r"\s+"),
                tokenize_if_matches(r"\d+", "PRICE"),
            ],
        )
        assert scan_all(scanner) == [("WORD", b"price"), ("PRICE", b"12")]
        assert not scanner.scan()
        assert scanner.error is None
        assert scanner.state is ScannerState.EXHAUSTED

    def test_custom_matcher_strips_dollar(self) -> None:
        scanner = Scanner(
            "price $12.4",
            [
                tokenize_if_matches(r"\w+", "WORD"),
                skip_if_matches(r"\s+"),
                price_matcher,
            ],
        )
        assert scan_all(scanner) == [("WORD", b"price"), ("PRICE", b"12.4")]
        assert scanner.token is None
        assert scanner.error is None

    def test_stripped_token_location_covers_consumed_bytes(self) -> None:
        scanner = Scanner(
            "price $12.4",
            [tokenize_if_matches(r"\w+", "W"), skip_if_matches(r" "), price_matcher],
        )
        scanner.scan()
        scanner.scan()
        loc = scanner.token.location
        assert (loc.offset, loc.end_offset) == (6, 11)
        assert loc.col_offset == 7

    def test_more_tokens_after_price(self) -> None:
        scanner = Scanner(
            "price $12.4 foo",
            [tokenize_if_matches(r"\w+", "WORD"), skip_if_matches(r"\s+"), price_matcher],
        )
        assert scan_all(scanner) == [
            ("WORD", b"price"),
            ("PRICE", b"12.4"),
            ("WORD", b"foo"),
        ]
        assert scanner.error is None

    def test_stuck_on_unmatched_space(self) -> None:
        scanner = Scanner("foo 123")
        scanner.add_matcher(tokenize_if_matches(r"^foo", "WORD"))
        scanner.add_matcher(tokenize_if_matches(r"\d+", "DIGIT"))

        assert scanner.scan()
        assert scanner.token == Token("WORD", b"foo")
        assert scanner.error is None

        assert not scanner.scan()
        assert scanner.token is None
        assert isinstance(scanner.error, NoMatchError)
        assert scanner.error.remainder == b" 123"
        assert "' 123'" in str(scanner.error)
        assert scanner.state is ScannerState.STUCK

        scanner.reset()
        assert scanner.error is None
        assert scanner.scan()
        assert scanner.token == Token("WORD", b"foo")

    def test_empty_input(self) -> None:
        scanner = Scanner("", [tokenize_if_matches(r"\w+", "WORD")])
        assert not scanner.scan()
        assert scanner.error is None
        assert scanner.token is None
        assert scanner.state is ScannerState.EXHAUSTED

    def test_no_matchers_on_input_is_stuck(self) -> None:
        scanner = Scanner("abc")
        assert not scanner.scan()
        assert scanner.error.remainder == b"abc"

    def test_only_skips_exhausts_cleanly(self) -> None:
        scanner = Scanner("   \n\t ", [skip_if_matches(r"\s+")])
        assert not scanner.scan()
        assert scanner.error is None
        assert scanner.pos == 6

    def test_skip_then_stuck(self) -> None:
        scanner = Scanner("  ?", [skip_if_matches(r"\s+")])
        assert not scanner.scan()
        assert scanner.error.remainder == b"?"
        assert scanner.error.offset == 2

    def test_terminal_states_stay_terminal(self) -> None:
        calls = []

        def counting(data):
            calls.append(bytes(data))
            return NO_MATCH

        scanner = Scanner("x", [counting])
        assert not scanner.scan()
        error = scanner.error
        assert not scanner.scan()
        assert scanner.error is error
        assert calls == [b"x"]

    def test_token_name_is_opaque(self) -> None:
        class Kind(Enum):
            NUMBER = auto()
            WORD = auto()

        tokens = tokenize(
            "a 1",
            [
                tokenize_if_matches(r"\d+", Kind.NUMBER),
                tokenize_if_matches(r"[a-z]+", Kind.WORD),
                skip_if_matches(r" "),
            ],
        )
        assert [t.name for t in tokens] == [Kind.WORD, Kind.NUMBER]

        numbered = tokenize("ab", [tokenize_if_matches(r"a", 1), tokenize_if_matches(r"b", 2)])
        assert [t.name for t in numbered] == [1, 2]

    def test_missing_text_falls_back_to_consumed_bytes(self) -> None:
        def ab_without_text(data):
            return (True, 2, "AB", None) if data[:2] == b"ab" else NO_MATCH

        scanner = Scanner("abc", [ab_without_text])
        assert scanner.scan()
        assert scanner.token.text == b"ab"


class TestMatcherOrder:
    """Earlier matchers always win."""

    def test_earlier_shorter_matcher_shadows_longer(self) -> None:
        tokens = tokenize(
            "foobar",
            [
                tokenize_if_matches(r"foo", "SHORT"),
                tokenize_if_matches(r"foobar", "LONG"),
                tokenize_if_matches(r"bar", "BAR"),
            ],
        )
        assert [(t.name, t.text) for t in tokens] == [("SHORT", b"foo"), ("BAR", b"bar")]

    def test_reordered_longer_matcher_wins(self) -> None:
        tokens = tokenize(
            "foobar",
            [tokenize_if_matches(r"foobar", "LONG"), tokenize_if_matches(r"foo", "SHORT")],
        )
        assert [(t.name, t.text) for t in tokens] == [("LONG", b"foobar")]

    def test_skip_before_token_wins(self) -> None:
        scanner = Scanner("aaa", [skip_if_matches(r"a"), tokenize_if_matches(r"a+", "A")])
        assert not scanner.scan()
        assert scanner.error is None

    def test_non_applicable_matcher_falls_through(self) -> None:
        calls = []

        def never(data):
            calls.append(len(data))
            return False, 0, "IGNORED", b"ignored"

        tokens = tokenize("ab", [never, tokenize_if_matches(r"[ab]", "L")])
        assert [t.text for t in tokens] == [b"a", b"b"]
        assert calls == [2, 1, 0]

    def test_matchers_see_remaining_input_only(self) -> None:
        seen = []

        def spy(data):
            seen.append(bytes(data))
            return NO_MATCH

        tokenize("ab c", [spy, tokenize_if_matches(r"\w", "C"), skip_if_matches(r" ")])
        assert seen == [b"ab c", b"b c", b" c", b"c", b""]


class TestReset:
    """reset() rewinds to the original start."""

    def test_reset_rewinds_after_exhaustion(self) -> None:
        scanner = Scanner("a b", [tokenize_if_matches(r"\w", "L"), skip_if_matches(r" ")])
        first = scan_all(scanner)
        scanner.reset()
        assert scanner.pos == 0
        assert scanner.state is ScannerState.READY
        assert scan_all(scanner) == first

    def test_reset_clears_token(self) -> None:
        scanner = Scanner("a", [tokenize_if_matches(r"a", "A")])
        assert scanner.scan()
        scanner.reset()
        assert scanner.token is None

    def test_reset_is_idempotent(self) -> None:
        scanner = Scanner("foo 1", [tokenize_if_matches(r"foo", "W")])
        scanner.scan()
        scanner.scan()
        scanner.reset()
        snapshot = (scanner.pos, scanner.token, scanner.error, scanner.state)
        scanner.reset()
        assert (scanner.pos, scanner.token, scanner.error, scanner.state) == snapshot
        assert snapshot == (0, None, None, ScannerState.READY)

    def test_reset_restores_line_tracking(self) -> None:
        scanner = Scanner("a\nb", [tokenize_if_matches(r"\w", "L"), skip_if_matches(r"\n")])
        scan_all(scanner)
        scanner.reset()
        scanner.scan()
        assert (scanner.token.lineno, scanner.token.col) == (1, 1)


class TestIteration:
    """tokens(), __iter__ and tokenize()."""

    def test_iter_stops_silently_when_stuck(self) -> None:
        scanner = Scanner("foo 123", [tokenize_if_matches(r"foo", "WORD")])
        assert [t.text for t in scanner] == [b"foo"]
        assert scanner.error is not None

    def test_tokens_raises_when_stuck(self) -> None:
        scanner = Scanner("foo 123", [tokenize_if_matches(r"foo", "WORD")])
        seen = []
        with pytest.raises(NoMatchError, match="123"):
            for token in scanner.tokens():
                seen.append(token.text)
        assert seen == [b"foo"]

    def test_tokenize_returns_list(self) -> None:
        tokens = tokenize("1 2 3", [tokenize_if_matches(r"\d", "N"), skip_if_matches(r" ")])
        assert tokens == [Token("N", b"1"), Token("N", b"2"), Token("N", b"3")]

    def test_tokenize_passes_source_file(self) -> None:
        with pytest.raises(NoMatchError) as exc_info:
            tokenize(
                "1 x",
                [tokenize_if_matches(r"\d", "N"), skip_if_matches(r" ")],
                source_file="nums.txt",
            )
        assert str(exc_info.value).startswith("nums.txt:1:3 ")


class TestLocations:
    """Line and column tracking."""

    def test_tokens_on_multiple_lines(self) -> None:
        tokens = tokenize(
            "ab\ncd\n\n  ef",
            [tokenize_if_matches(r"[a-z]+", "W"), skip_if_matches(r"\s+")],
        )
        assert [(t.lineno, t.col) for t in tokens] == [(1, 1), (2, 1), (4, 3)]

    def test_multiline_token_end(self) -> None:
        tokens = tokenize('"a\nbc"', [tokenize_if_matches(r'"[^"]*"', "STR")])
        loc = tokens[0].location
        assert (loc.lineno, loc.col_offset) == (1, 1)
        assert (loc.end_lineno, loc.end_col_offset) == (2, 4)
        assert (loc.offset, loc.end_offset) == (0, 6)

    def test_error_location(self) -> None:
        scanner = Scanner("ab\n  ?", [tokenize_if_matches(r"\w+", "W"), skip_if_matches(r"\s+")])
        list(scanner)
        assert (scanner.error.lineno, scanner.error.col_offset) == (2, 3)
        assert scanner.error.offset == 5
