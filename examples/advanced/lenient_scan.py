"""Strict vs lenient scanning: stop on unknown input, or tag it and continue."""

from rulelex import NoMatchError, Scanner, catch_all, skip_if_matches, tokenize_if_matches

RULES = [
    tokenize_if_matches(r"[A-Za-z_]\w*", "NAME"),
    tokenize_if_matches(r"\d+", "NUMBER"),
    tokenize_if_matches(r"[=+*/-]", "OP"),
    skip_if_matches(r"\s+"),
]

source = "total = price * 3 # tax"

strict = Scanner(source, RULES, source_file="<strict>")
try:
    for token in strict.tokens():
        print(token)
except NoMatchError as e:
    print("stuck:", e)

lenient = Scanner(source, [*RULES, catch_all("UNKNOWN")])
print([t.name for t in lenient])
