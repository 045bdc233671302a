"""Re-interleave analyzed tokens with the literal text they came from.

The analysis backend returns tokens without punctuation and not necessarily in
sentence order. `interpolate_tokens_with_text` puts them back in text order and
fills the gaps with synthetic tokens carrying the punctuation between words.
"""
from typing import List, NamedTuple

from log import get_logger

from models import Token, synthetic_token

logger = get_logger("grammr.interpolation")


class TokensNotFoundError(ValueError):
    """Raised when one or more tokens do not occur anywhere in the text."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Some tokens were not found in the text: {', '.join(self.missing)}")


class TokenMatch(NamedTuple):
    token: Token
    start: int
    end: int


def fold(s: str) -> str:
    """Lower-case one character at a time, so fold(s) is as long as s.

    Characters whose lower case is longer (e.g. 'İ') are kept as they are.
    """
    return "".join(c.lower() if len(c.lower()) == 1 else c for c in s)


def find_token_matches(lower_text: str, tokens: List[Token]) -> List[TokenMatch]:
    """Every occurrence of every token, overlapping ones included, sorted by start."""
    matches = []
    for token in tokens:
        needle = fold(token.text)
        if not needle:
            continue
        pos = lower_text.find(needle)
        while pos != -1:
            matches.append(TokenMatch(token, pos, pos + len(needle)))
            pos = lower_text.find(needle, pos + 1)
    # sort is stable: equal starts keep token order, then occurrence order
    matches.sort(key=lambda m: m.start)
    return matches


def select_non_overlapping(matches: List[TokenMatch]) -> List[TokenMatch]:
    """Leftmost first-fit selection; a character is never consumed twice."""
    selected = []
    last_end = 0
    for match in matches:
        if match.start >= last_end:
            selected.append(match)
            last_end = match.end
    return selected


def interpolate_tokens_with_text(original_text: str, tokens: List[Token]) -> List[Token]:
    """Return `tokens` in text order, interleaved with punctuation tokens.

    Matching is case-insensitive; the emitted tokens are the input objects
    themselves, so their casing is the analyzer's, not the text's. Each gap
    between matches becomes one synthetic token, trimmed at its edges only,
    and is dropped when nothing but whitespace remains.

    Raises TokensNotFoundError naming every token that could not be placed.
    """
    lower_text = fold(original_text)

    valid_matches = select_non_overlapping(find_token_matches(lower_text, tokens))

    result: List[Token] = []
    position = 0
    for match in valid_matches:
        if match.start > position:
            gap = original_text[position:match.start].strip()
            if gap:
                result.append(synthetic_token(gap))
        result.append(match.token)
        position = match.end

    if position < len(original_text):
        remaining = original_text[position:].strip()
        if remaining:
            result.append(synthetic_token(remaining))

    used = {fold(m.token.text) for m in valid_matches}
    missing = [t.text for t in tokens if fold(t.text) not in used]
    if missing:
        logger.debug("Tokens missing from text", extra={"component": "interpolation", "missing": missing})
        raise TokensNotFoundError(missing)

    return result
