"""
Display-string helpers for field names and category ordering.

Field names in sensor feeds use a light markup for chemical formulas
and units: ``CO_2``, ``PM_{2.5}``, ``m^{3}``.  These helpers turn them
into chart labels.
"""

import re
from typing import Iterable, List

from .constants import CATEGORY_ORDER

_SUBSCRIPTS = str.maketrans("0123456789", "₀₁₂₃₄₅₆₇₈₉")
_SUPERSCRIPTS = str.maketrans("0123456789", "⁰¹²³⁴⁵⁶⁷⁸⁹")

_BRACED_SUB = re.compile(r"_\{([^}]+)\}")
_BRACED_SUP = re.compile(r"\^\{([^}]+)\}")
_LETTERS_UNDERSCORE_NUMBER = re.compile(r"([A-Za-z]+)_(\d+(?:\.\d+)?)")
_LETTERS_SPACE_NUMBER = re.compile(r"\b([A-Z]+)\s+(\d+(?:\.\d+)?)\b")


def format_field_name(field: str) -> str:
    """Band label: underscores become spaces, upper-cased."""
    return field.replace("_", " ").upper()


def format_with_unicode_subscripts(field: str) -> str:
    """Render sub/superscript markup with Unicode characters.

    >>> format_with_unicode_subscripts("CO_{2}")
    'CO₂'
    >>> format_with_unicode_subscripts("PM_2.5")
    'PM₂.₅'
    >>> format_with_unicode_subscripts("air_flow_m^{3}")
    'air flow m³'
    """
    formatted = _BRACED_SUB.sub(
        lambda m: m.group(1).replace("_", "").translate(_SUBSCRIPTS), field,
    )
    formatted = _BRACED_SUP.sub(
        lambda m: re.sub(r"[\^_]", "", m.group(1)).translate(_SUPERSCRIPTS),
        formatted,
    )
    formatted = _LETTERS_UNDERSCORE_NUMBER.sub(
        lambda m: m.group(1) + m.group(2).translate(_SUBSCRIPTS), formatted,
    )
    formatted = formatted.replace("_", " ")
    formatted = _LETTERS_SPACE_NUMBER.sub(
        lambda m: m.group(1) + m.group(2).translate(_SUBSCRIPTS), formatted,
    )
    return formatted


def sort_categories_by_order(categories: Iterable[str]) -> List[str]:
    """Sort categories by ``CATEGORY_ORDER``.

    Known categories come first in that order; the rest follow in
    their original order.
    """
    order = {name: i for i, name in enumerate(CATEGORY_ORDER)}
    indexed = list(enumerate(categories))
    indexed.sort(key=lambda item: (
        (0, order[item[1]]) if item[1] in order else (1, item[0])
    ))
    return [name for _, name in indexed]
