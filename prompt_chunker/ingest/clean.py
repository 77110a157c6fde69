import re

POLITE_PHRASES = ("please", "could you")
TERMINAL_PUNCTUATION = (".", "?", "!")


def normalize_newlines(s: str) -> str:
    # Normalize Windows / old Mac line endings
    return s.replace("\r\n", "\n").replace("\r", "\n")


def optimize_input(s: str, polite: bool = True) -> str:
    """
    Tidy a short prompt: collapse whitespace, add a polite opener and a
    terminal punctuation mark. Running it twice gives the same result.
    """
    if not s:
        return s
    out = re.sub(r"\s+", " ", s).strip()
    if not out:
        return out
    if polite and not any(p in out.lower() for p in POLITE_PHRASES):
        out = "Please " + out[0].lower() + out[1:]
    if not out.endswith(TERMINAL_PUNCTUATION):
        out += "."
    return out
