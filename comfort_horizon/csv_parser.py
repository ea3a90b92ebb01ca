"""
CSV parser for the Comfort Horizon Viewer.

Loads the sensor feed (``id, time, category, field, value, score``)
into a list of ``Record``.  Handles:

- A header row (always skipped)
- UTF-8 BOM markers and blank lines
- Rows with fewer than six columns (skipped, reported once)
- Lenient numbers: a leading numeric prefix is accepted, anything else
  becomes ``NaN`` so the chart shows a gap instead of failing
- ISO-8601 timestamps, with or without a trailing ``Z``

Category and field strings are kept exactly as written.
"""

import csv
import io
import math
import os
import re
import warnings
from datetime import datetime, timezone
from typing import List, Optional

from .constants import (
    COL_ID, COL_TIME, COL_CATEGORY, COL_FIELD, COL_VALUE, COL_SCORE,
    MIN_COLUMNS,
)
from .data_model import Record

_FLOAT_PREFIX = re.compile(
    r"^\s*([+-]?(?:inf(?:inity)?|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")

# Examples shown per warning before the list is cut short
_MAX_EXAMPLES = 10


# ── Lenient field parsing ────────────────────────────────────────────────

def _lenient_float(text: str) -> float:
    """Parse the leading number of *text*; ``NaN`` if there is none.

    ``"21.5"`` → 21.5, ``"21.5°C"`` → 21.5, ``""`` → nan, ``"n/a"`` → nan.
    """
    match = _FLOAT_PREFIX.match(text or "")
    if not match:
        return math.nan
    try:
        return float(match.group(1))
    except ValueError:
        return math.nan


def _lenient_int(text: str) -> Optional[int]:
    """Parse the leading integer of *text*; ``None`` if there is none."""
    match = _INT_PREFIX.match(text or "")
    if not match:
        return None
    return int(match.group(1))


def _parse_time(text: str) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; ``None`` if unparseable.

    Aware timestamps are converted to naive UTC so every record sits on
    one clock.
    """
    s = (text or "").strip()
    if not s:
        return None
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(s)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _warn_examples(message: str, examples: List[str]) -> None:
    detail = "; ".join(examples[:_MAX_EXAMPLES])
    if len(examples) > _MAX_EXAMPLES:
        detail += f" ... and {len(examples) - _MAX_EXAMPLES} more"
    warnings.warn(f"{message}: {detail}", stacklevel=3)


# ── Parsers ──────────────────────────────────────────────────────────────

def parse_row(tokens: List[str]) -> Optional[Record]:
    """Build a ``Record`` from one split CSV row.

    Returns ``None`` if the row has fewer than six columns or no
    parseable ``id``.
    """
    if len(tokens) < MIN_COLUMNS:
        return None
    record_id = _lenient_int(tokens[COL_ID])
    if record_id is None:
        return None
    return Record(
        id=record_id,
        time=_parse_time(tokens[COL_TIME]),
        category=tokens[COL_CATEGORY],
        field=tokens[COL_FIELD],
        value=_lenient_float(tokens[COL_VALUE]),
        score=_lenient_float(tokens[COL_SCORE]),
    )


def parse_csv_text(text: str, source: str = "<text>") -> List[Record]:
    """Parse CSV *text* (header row first) into records.

    Short rows and rows without an integer id are skipped with one
    ``UserWarning`` per kind of problem.
    """
    if text.startswith("﻿"):
        text = text[1:]

    records: List[Record] = []
    short_rows: List[str] = []
    bad_ids: List[str] = []
    bad_times = 0

    reader = csv.reader(io.StringIO(text))
    for line_idx, tokens in enumerate(reader, start=1):
        if line_idx == 1:
            continue  # header
        if not tokens or all(not t.strip() for t in tokens):
            continue

        if len(tokens) < MIN_COLUMNS:
            short_rows.append(f"line {line_idx} ({len(tokens)} columns)")
            continue

        record = parse_row(tokens)
        if record is None:
            bad_ids.append(f"line {line_idx}: {tokens[COL_ID]!r}")
            continue
        if record.time is None:
            bad_times += 1
        records.append(record)

    if short_rows:
        _warn_examples(
            f"Rows with fewer than {MIN_COLUMNS} columns in '{source}' "
            f"were skipped", short_rows,
        )
    if bad_ids:
        _warn_examples(
            f"Rows without an integer id in '{source}' were skipped",
            bad_ids,
        )
    if bad_times:
        warnings.warn(
            f"{bad_times} row(s) in '{source}' have an unparseable "
            f"timestamp and will not be plotted.",
            stacklevel=2,
        )
    return records


def load_records(filepath: str) -> List[Record]:
    """Load the sensor CSV at *filepath*.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file holds no data rows at all.
    """
    if not os.path.isfile(filepath):
        raise FileNotFoundError(f"CSV file not found: {filepath}")

    with open(filepath, 'r', encoding='utf-8-sig', newline='') as fh:
        text = fh.read()

    name = os.path.basename(filepath)
    records = parse_csv_text(text, source=name)
    if not records:
        raise ValueError(f"No valid data rows found in '{name}'.")
    return records
