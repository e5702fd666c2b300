from quickprice.models import Program, RateOption, RateTier
from quickprice.rates import final_price, par_rate, select_rates


def _program(pairs, margin=-1.625):
    return Program(
        id="t",
        name="T",
        margin_holdback=margin,
        base_rates=[RateTier(rate=r, price=p) for r, p in pairs],
    )


def test_final_price_example():
    assert final_price(99.0, -0.25, -1.625) == 97.125


def test_tier_below_band_excluded():
    sel = select_rates(_program([(6.0, 99.0)]), "≤50.00", -0.25)
    assert sel.rates == []
    assert sel.par_rate is None
    assert sel.all_rates[0].final_price == 97.125


def test_band_bounds_inclusive():
    sel = select_rates(_program([(6.0, 100.625), (6.25, 102.625)]), "≤50.00", 0.0)
    assert [o.final_price for o in sel.rates] == [99.0, 101.0]


def test_stops_after_upper_bound():
    pairs = [(6.0, 101.0), (6.25, 103.0), (6.5, 101.5)]
    sel = select_rates(_program(pairs), "≤50.00", 0.0)
    # 6.25 finals at 103.0 - 1.625 = 101.375; 6.5 (99.875) comes after it
    assert [o.rate for o in sel.rates] == [6.0]
    assert len(sel.all_rates) == 3


def test_tiers_sorted_by_rate():
    sel = select_rates(_program([(6.5, 101.5), (6.25, 101.0)]), "≤50.00", 0.0)
    assert [o.rate for o in sel.all_rates] == [6.25, 6.5]


def test_par_closest_to_100():
    sel = select_rates(_program([(6.0, 100.9), (6.25, 101.7), (6.5, 102.4)]), "≤50.00", 0.0)
    assert sel.par_rate.rate == 6.25


def test_par_tie_goes_to_lower_rate():
    options = [
        RateOption(rate=6.0, base_price=0, final_price=99.75),
        RateOption(rate=6.25, base_price=0, final_price=100.25),
    ]
    assert par_rate(options).rate == 6.0


def test_empty_band():
    sel = select_rates(_program([(6.0, 90.0), (7.0, 110.0)]), "≤50.00", 0.0)
    assert sel.rates == []
    assert sel.par_rate is None
