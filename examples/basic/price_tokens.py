"""Tokenize a line of text with a word rule, a whitespace skip and a number rule."""

from rulelex import Scanner, skip_if_matches, tokenize_if_matches

scanner = Scanner(
    "price 12",
    [
        tokenize_if_matches(r"[a-z]+", "WORD"),
        skip_if_matches(r"\s+"),
        tokenize_if_matches(r"\d+", "PRICE"),
    ],
)

while scanner.scan():
    print(f"{scanner.token.name} => {scanner.token.value}")

if scanner.error is not None:
    print("error:", scanner.error)
