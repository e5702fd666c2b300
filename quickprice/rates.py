from __future__ import annotations

from typing import List, NamedTuple, Optional, Tuple

from quickprice.models import Program, RateOption
from quickprice.presets import PAR_PRICE, PRICE_BAND


class RateSelection(NamedTuple):
    rates: List[RateOption]
    par_rate: Optional[RateOption]
    all_rates: List[RateOption]


def final_price(price: float, llpa_total: float, margin_holdback: float) -> float:
    return round(price + llpa_total + margin_holdback, 3)


def par_rate(rates: List[RateOption], par: float = PAR_PRICE) -> Optional[RateOption]:
    """Tier priced closest to ``par``; the lowest rate wins a tie."""
    best = None
    for option in rates:
        if best is None or abs(option.final_price - par) < abs(best.final_price - par):
            best = option
    return best


def select_rates(
    program: Program,
    ltv_bucket: str,
    llpa_total: float,
    band: Tuple[float, float] = PRICE_BAND,
) -> RateSelection:
    """Price every base-rate tier and keep the ones inside ``band``.

    Base pricing is the same for every ``ltv_bucket`` on current sheets.
    The margin holdback is baked into ``final_price`` but never into
    ``llpa_total``. Tiers are walked from the lowest rate up; once a tier
    reaches the top of the band no higher rate is kept.
    """
    low, high = band
    all_rates = [
        RateOption(
            rate=tier.rate,
            base_price=tier.price,
            final_price=final_price(tier.price, llpa_total, program.margin_holdback),
        )
        for tier in sorted(program.base_rates, key=lambda t: t.rate)
    ]
    rates: List[RateOption] = []
    for option in all_rates:
        if low <= option.final_price <= high:
            rates.append(option)
        if option.final_price >= high:
            break
    return RateSelection(rates, par_rate(rates), all_rates)
