"""Matchers are stateless: share one rule list across threads."""

from concurrent.futures import ThreadPoolExecutor

from rulelex import skip_if_matches, tokenize, tokenize_if_matches

RULES = [
    tokenize_if_matches(r"[a-z]+", "WORD"),
    tokenize_if_matches(r"\d+", "NUMBER"),
    skip_if_matches(r"\s+"),
]

lines = [f"line {i} has {i * 2} words" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(lambda line: tokenize(line, RULES), lines))

print(f"Scanned {len(results)} lines in parallel")
print("First line tokens:", len(results[0]))
print("Last line tokens:", len(results[-1]))
