"""Free-text quantity fields ("500 SqFt", "20 LF", "12 boxes").

Inspectors type estimated quantities as free text. The sample forms drive a
unit select plus a numeric input, so the text is split into a structured
``Quantity`` on load and joined back on save.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum


class QuantityUnit(StrEnum):
    """Units offered by the quantity select."""

    SQFT = "sqft"
    LF = "lf"
    QTY = "qty"
    OTHER = "other"


@dataclass(frozen=True)
class Quantity:
    """A (value, unit) pair; ``value`` stays a string to keep user input exact."""

    value: str = ""
    unit: QuantityUnit = QuantityUnit.SQFT
    other_unit_label: str = ""


UNIT_LABELS: dict[QuantityUnit, str] = {
    QuantityUnit.SQFT: "SqFt",
    QuantityUnit.LF: "LF",
    QuantityUnit.QTY: "Qty",
}

# Lower-cased, whitespace-collapsed tokens recognized for each unit
_TOKEN_UNITS: dict[str, QuantityUnit] = {
    "sq ft": QuantityUnit.SQFT,
    "sqft": QuantityUnit.SQFT,
    "sf": QuantityUnit.SQFT,
    "lf": QuantityUnit.LF,
    "linear ft": QuantityUnit.LF,
    "linear feet": QuantityUnit.LF,
    "qty": QuantityUnit.QTY,
}

_QUANTITY_RE = re.compile(r"^([+-]?\d+(?:\.\d+)?)\s*(.*)$", re.DOTALL)

# Choices for the unit-of-measure select in the inventory editor
UOM_CHOICES = ("SqFt", "LF", "Qty", "Other")


def parse_quantity(raw: str | None) -> Quantity:
    """
    Split a free-text quantity into value and unit.

    Text without a leading number is kept whole as the value (unit sqft)
    rather than discarded.

    Examples:
        >>> parse_quantity("500 SqFt")
        Quantity(value='500', unit=<QuantityUnit.SQFT: 'sqft'>, other_unit_label='')
        >>> parse_quantity("12 boxes").other_unit_label
        'boxes'
    """
    text = (raw or "").strip()
    if not text:
        return Quantity()

    match = _QUANTITY_RE.match(text)
    if match is None:
        return Quantity(value=raw or "")

    value, token = match.group(1), match.group(2).strip()
    if not token:
        return Quantity(value=value)

    unit = _TOKEN_UNITS.get(" ".join(token.lower().split()))
    if unit is None:
        return Quantity(value=value, unit=QuantityUnit.OTHER, other_unit_label=token)
    return Quantity(value=value, unit=unit)


def format_quantity(
    value: str,
    unit: QuantityUnit | str,
    other_unit_label: str = "",
) -> str | None:
    """Join a value and unit back into display text.

    Returns None when ``value`` is blank (no quantity set).
    """
    value = value.strip()
    if not value:
        return None

    unit = QuantityUnit(unit)
    label = UNIT_LABELS.get(unit) or (other_unit_label or "").strip()
    return f"{value} {label}" if label else value


def quantity_to_text(quantity: Quantity) -> str | None:
    """``format_quantity`` for a parsed Quantity."""
    return format_quantity(quantity.value, quantity.unit, quantity.other_unit_label)


def unit_choice(uom: str | None) -> tuple[str, str]:
    """Split a stored unit of measure into (select choice, other text).

    ``"LF"`` -> ``("LF", "")``; ``"boxes"`` -> ``("Other", "boxes")``;
    blank -> ``("", "")``.
    """
    raw = (uom or "").strip()
    if not raw:
        return "", ""
    if raw in UOM_CHOICES:
        return raw, ""
    return "Other", raw


def unit_from_choice(choice: str, other: str = "") -> str | None:
    """Inverse of ``unit_choice``; None when nothing was selected."""
    raw = other.strip() if choice == "Other" else choice.strip()
    return raw or None
