"""Tabular views of a ``PricingResult`` for display."""
from __future__ import annotations

import pandas as pd

from quickprice.models import PricingResult


def rates_frame(result: PricingResult) -> pd.DataFrame:
    """Rate options inside the band with the par tier flagged."""
    cols = ["Rate", "Base Price", "Final Price", "Par"]
    if not result.rates:
        return pd.DataFrame(columns=cols)
    par = result.par_rate.rate if result.par_rate else None
    return pd.DataFrame(
        [
            {
                "Rate": r.rate,
                "Base Price": r.base_price,
                "Final Price": r.final_price,
                "Par": r.rate == par,
            }
            for r in result.rates
        ],
        columns=cols,
    )


def adjustments_frame(result: PricingResult) -> pd.DataFrame:
    cols = ["Adjustment", "Selection", "Value"]
    out = pd.DataFrame(
        [{"Adjustment": a.label, "Selection": a.key, "Value": a.value} for a in result.adjustments],
        columns=cols,
    )
    if not out.empty:
        total = pd.DataFrame([{"Adjustment": "Total LLPA", "Selection": "", "Value": out["Value"].sum()}])
        out = pd.concat([out, total], ignore_index=True)
        out["Value"] = out["Value"].round(3)
    return out


def summary(result: PricingResult) -> dict:
    """Headline values for a quote; never includes the margin holdback."""
    return {
        "Program": result.program_name or "",
        "LTV": f"{result.ltv:.2f}%" if result.ltv is not None else "N/A",
        "LTV Bucket": result.ltv_bucket or "",
        "Total LLPA": f"{result.llpa_total:+.3f}" if result.llpa_total is not None else "",
        "Par Rate": f"{result.par_rate.rate:.3f}%" if result.par_rate else "N/A",
        "Options": len(result.rates),
        "Status": result.error.message if result.error else "Priced",
    }
