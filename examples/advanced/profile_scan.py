"""Opt-in profiling: count tokens, skips and matcher calls."""

from rulelex import skip_if_matches, tokenize, tokenize_if_matches
from rulelex.profiling import profiled_scan

RULES = [
    tokenize_if_matches(r"[a-z]+", "WORD"),
    skip_if_matches(r"\s+"),
    tokenize_if_matches(r"\d+", "NUMBER"),
]

with profiled_scan() as metrics:
    for i in range(100):
        tokenize(f"item {i}   qty {i * 3}", RULES)

print(metrics.summary())
