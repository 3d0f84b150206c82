"""Delimited text parsing into numeric row records."""

from __future__ import annotations

import math
import re

from loguru import logger

from geoviz.core.models import RawRow

FIELD_SEPARATOR = re.compile(r"[\t, ]+")
DECIMAL_TOKEN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
INTEGER_LITERAL = re.compile(r"0(?:[xX][0-9a-fA-F]+|[bB][01]+|[oO][0-7]+)", re.ASCII)
MIN_FIELDS = 2


def parse_number(token: str) -> float | None:
    """Convert one ASCII numeric token, or return ``None``.

    Accepts decimal and exponent notation plus ``0x``/``0b``/``0o``
    integer literals. Digit separators and non-ASCII digits are rejected.
    """
    if INTEGER_LITERAL.fullmatch(token):
        try:
            return float(int(token, 0))
        except OverflowError:
            return None
    if DECIMAL_TOKEN.fullmatch(token):
        return float(token)
    return None


def parse_line(line: str) -> RawRow | None:
    """Parse one input line into a numeric row.

    Parameters
    ----------
    line : str
        Raw line, fields separated by any run of tab, comma or space.

    Returns
    -------
    tuple[float, ...] | None
        Parsed fields, or ``None`` when the line is blank, has fewer than
        two fields, or holds a token that is not a finite number.

    Examples
    --------
    >>> parse_line("0, 45\\t-10")
    (0.0, 45.0, -10.0)
    >>> parse_line("abc,1,2") is None
    True
    """
    tokens = [token for token in FIELD_SEPARATOR.split(line.strip()) if token]
    if len(tokens) < MIN_FIELDS:
        return None
    values: list[float] = []
    for token in tokens:
        value = parse_number(token)
        if value is None or not math.isfinite(value):
            return None
        values.append(value)
    return tuple(values)


def parse_records(text: str) -> list[RawRow]:
    """Parse raw survey text into numeric rows in input order.

    Malformed lines are excluded silently; they are never an error.

    Parameters
    ----------
    text : str
        Pasted or decoded file text.

    Returns
    -------
    list[tuple[float, ...]]
        Rows with at least two finite fields each.
    """
    rows: list[RawRow] = []
    excluded = 0
    for line in text.splitlines():
        if not line.strip():
            continue
        row = parse_line(line)
        if row is None:
            excluded += 1
            continue
        rows.append(row)
    if excluded:
        logger.debug(f"Excluded {excluded} malformed line(s)")
    logger.debug(f"Parsed {len(rows)} row(s)")
    return rows
