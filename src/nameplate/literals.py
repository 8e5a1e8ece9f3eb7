""" Number literal normalization

Display conditions are written by people, and people write numbers the way
their locale does: "1,234.5", "319,46", "1.234.567". The expression engine
only understands "." as a decimal point and no grouping at all, so before
evaluation we rewrite every ambiguous numeric token into that canonical form.

Rules, per token:
 * no "," and at most one ".": already canonical, left alone. A single "."
   is always taken as a decimal point, even in "1.234".
 * both "," and ".": whichever occurs last is the decimal separator, the
   other one is grouping and gets dropped.
 * only ",": a final group of exactly three digits means grouping
   ("1,234" => "1234"), otherwise the last comma is the decimal point
   ("319,46" => "319.46").
 * several ".": same three digit rule as for ",".
"""

import re

NUMBER_RE = re.compile(r"-?[0-9][0-9.,]*")

def has_locale_separators(token:str) -> bool:
    return "," in token or token.count(".") > 1

def _segments(token:str, sep:str) -> list[str]:
    # trailing separators (e.g. the argument comma in "max(1, 2)") don't
    # start a new segment
    parts = token.split(sep)
    while len(parts) > 1 and parts[-1] == "":
        parts.pop()
    return parts

def _join_segments(parts:list[str]) -> str:
    last = parts[-1]
    if len(last) == 3:
        # grouping separators only, e.g. 1,234,567
        return "".join(parts)
    # final separator is the decimal point, e.g. 319,46
    return "".join(parts[:-1]) + "." + last

def normalize_number_token(token:str) -> str:
    has_comma = "," in token
    has_dot = "." in token

    if has_comma and has_dot:
        decimal_sep = "," if token.rfind(",") > token.rfind(".") else "."
        return "".join(
            "." if ch == decimal_sep else ch
            for ch in token
            if ch.isdigit() or ch == "-" or ch == decimal_sep
        )

    if has_comma:
        parts = _segments(token, ",")
        if len(parts) == 1:
            return token
        return _join_segments(parts)

    if not has_dot:
        return token

    parts = _segments(token, ".")
    if len(parts) <= 2:
        # single decimal point (or none), already valid
        return token
    return _join_segments(parts)

def _normalize_match(match:re.Match) -> str:
    token = match.group(0)
    if has_locale_separators(token):
        return normalize_number_token(token)
    return token

def normalize_number_literals(expression:str) -> str:
    """ Rewrites every ambiguous numeric literal in expression.

    Everything that isn't a matched number is preserved verbatim. """
    return NUMBER_RE.sub(_normalize_match, expression)
