"""Lab-result unit derivation for paint/metals samples.

Labs report lead and cadmium in mg/kg; reports also show percent by
weight. 1% by weight is 10,000 mg/kg.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from sitesense.schemas import finite_or_none

MG_KG_PER_PERCENT = 10_000


def mg_kg_to_percent(result: Any) -> float | None:
    """Convert a mg/kg result (number or numeric string) to percent by weight.

    Blank, non-numeric and non-finite results give None.
    """
    if isinstance(result, str):
        result = result.strip()
        if not result:
            return None
    mg_kg = finite_or_none(result)
    if mg_kg is None:
        return None
    return mg_kg / MG_KG_PER_PERCENT


def format_percent_by_weight(result: Any, places: int = 4) -> str:
    """Percent by weight as fixed-point text, or ``""`` if not computable."""
    percent = mg_kg_to_percent(result)
    if percent is None:
        return ""
    return f"{percent:.{places}f}"


class PaintSampleResult(BaseModel):
    """Metals results for one paint chip sample, as entered (mg/kg)."""

    model_config = {"str_strip_whitespace": True}

    lead_mg_kg: str | None = None
    cadmium_mg_kg: str | None = None

    @property
    def lead_percent(self) -> float | None:
        return mg_kg_to_percent(self.lead_mg_kg)

    @property
    def cadmium_percent(self) -> float | None:
        return mg_kg_to_percent(self.cadmium_mg_kg)
