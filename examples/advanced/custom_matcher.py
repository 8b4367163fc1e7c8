"""Custom matcher: parse the cost and drop the $ sign."""

import re

from rulelex import NO_MATCH, MatchResult, skip_if_matches, tokenize, tokenize_if_matches

PRICE = re.compile(rb"\$(\d+(?:\.\d+)?)")


def price(data):
    m = PRICE.match(data)
    if m is None:
        return NO_MATCH
    # Consume "$12.4" but emit only "12.4"
    return MatchResult(True, m.end(), "PRICE", m.group(1))


tokens = tokenize(
    "price $12.4",
    [
        tokenize_if_matches(r"\w+", "WORD"),
        skip_if_matches(r"\s+"),
        price,
    ],
)

for token in tokens:
    print(f"{token.name} => {token.value} (at {token.location})")
