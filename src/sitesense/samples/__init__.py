"""Parsing and derivation helpers for sample and inventory entry.

Modules:
  - quantity: free-text quantity <-> (value, unit) for the unit select
  - lab_results: mg/kg -> percent by weight for paint/metals samples
"""

from sitesense.samples.lab_results import (
    PaintSampleResult,
    format_percent_by_weight,
    mg_kg_to_percent,
)
from sitesense.samples.quantity import (
    Quantity,
    QuantityUnit,
    format_quantity,
    parse_quantity,
    quantity_to_text,
    unit_choice,
    unit_from_choice,
)

__all__ = [
    "PaintSampleResult",
    "Quantity",
    "QuantityUnit",
    "format_percent_by_weight",
    "format_quantity",
    "mg_kg_to_percent",
    "parse_quantity",
    "quantity_to_text",
    "unit_choice",
    "unit_from_choice",
]
