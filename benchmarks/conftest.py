"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest

from rulelex import skip_if_matches, tokenize_if_matches


@pytest.fixture
def expression_rules() -> list:
    """Rules for a small expression language, keywords before names."""
    return [
        tokenize_if_matches(r"(?:let|if|else|return)\b", "KEYWORD"),
        tokenize_if_matches(r"[A-Za-z_]\w*", "NAME"),
        tokenize_if_matches(r"\d+(?:\.\d+)?", "NUMBER"),
        tokenize_if_matches(r'"[^"\n]*"', "STRING"),
        tokenize_if_matches(r"==|[=+*/<>(){};-]", "OP"),
        skip_if_matches(r"#[^\n]*"),
        skip_if_matches(r"\s+"),
    ]


@pytest.fixture
def large_program() -> str:
    """Generate a large source text (~100KB)."""
    blocks = []
    for i in range(1000):
        blocks.append(
            f'let value_{i} = {i} * 2.5 + "label {i}";  # block {i}\n'
            f"if (value_{i} == {i}) {{ return value_{i}; }}\n"
        )
    return "".join(blocks)


@pytest.fixture
def whitespace_heavy() -> str:
    """A few tokens separated by long whitespace runs."""
    return ("x" + " " * 10_000 + "\n") * 20
