from quickprice.buckets import (
    LTV_NOT_APPLICABLE,
    LTV_OUT_OF_BOUNDS,
    bucket_labels,
    calculate_ltv,
    credit_score_bucket,
    dscr_ratio_bucket,
    dscr_ratio_value,
    loan_amount_bucket,
    ltv_bucket,
    ltv_bucket_for_ltv,
    option_key,
)
from quickprice.models import LoanScenario
from quickprice.presets import LTV_BUCKETS


def test_credit_score_numeric_and_labels():
    assert credit_score_bucket(790) == "≥780"
    assert credit_score_bucket(780) == "≥780"
    assert credit_score_bucket(725) == "720-739"
    assert credit_score_bucket(600) == "<620"
    assert credit_score_bucket("780+") == "≥780"
    assert credit_score_bucket(">=780") == "≥780"
    assert credit_score_bucket("700-719") == "700-719"


def test_credit_score_missing():
    assert credit_score_bucket(None) == "<620"
    assert credit_score_bucket(None, "Foreign National") == "FN-NoScore"
    assert credit_score_bucket("n/a", "Foreign National") == "FN-NoScore"


def test_loan_amount_bands():
    assert loan_amount_bucket(49999) == "<$50K"
    assert loan_amount_bucket(50000) == "$50K-$74K"
    assert loan_amount_bucket(560000) == "$500K-$999K"
    assert loan_amount_bucket(1000000) == "$1M-$1.49M"
    assert loan_amount_bucket(5000000) == "$4.5M-$5M"
    assert loan_amount_bucket(5000001) == ">$5M"


def test_ltv_example():
    assert calculate_ltv(560000, 800000) == 70.0
    assert ltv_bucket(560000, 800000) == "65.01-70.00"


def test_bucket_edges():
    assert ltv_bucket_for_ltv(50.0) == "≤50.00"
    assert ltv_bucket_for_ltv(50.001) == "50.01-55.00"
    assert ltv_bucket_for_ltv(90.0) == "85.01-90.00"
    assert ltv_bucket_for_ltv(90.01) == LTV_OUT_OF_BOUNDS
    assert ltv_bucket_for_ltv(0.0) == "≤50.00"


def test_buckets_partition_ltv_range():
    labels = bucket_labels()
    assert labels == LTV_BUCKETS
    seen = {ltv_bucket_for_ltv(x / 10) for x in range(0, 901)}
    assert seen == set(LTV_BUCKETS)


def test_custom_breaks():
    assert ltv_bucket_for_ltv(62, [60, 80]) == "60.01-80.00"
    assert ltv_bucket_for_ltv(81, [80, 60]) == LTV_OUT_OF_BOUNDS


def test_zero_value_is_not_applicable():
    assert calculate_ltv(100000, 0) is None
    assert ltv_bucket(100000, 0) == LTV_NOT_APPLICABLE
    assert ltv_bucket(100000, None) == LTV_NOT_APPLICABLE


def test_above_ladder_out_of_bounds():
    assert ltv_bucket(950000, 1000000) == LTV_OUT_OF_BOUNDS


def test_dscr_parsing():
    assert dscr_ratio_value("0.900") == 0.9
    assert dscr_ratio_value("≥1.25") == 1.25
    assert dscr_ratio_value(None) == 0.0
    assert dscr_ratio_bucket("≥1.25") == "≥1.250"
    assert dscr_ratio_bucket(1.2) == "1.150-1.249"
    assert dscr_ratio_bucket("0.900") == "0.750-0.999"
    assert dscr_ratio_bucket(0.3) == "≤0.499"
    assert dscr_ratio_bucket(None) == "1.000-1.149"


def test_option_keys():
    s = LoanScenario(occupancy="Investment", escrow_waiver=True, loan_purpose="Cash-Out")
    assert option_key("occupancy", s) == "investor"
    assert option_key("escrow_waiver", s) == "yes"
    assert option_key("loan_purpose", s) == "cash-out"
    assert option_key("credit_event", s) == "≥48m-none"
    assert option_key("state", s) == "CA"
    assert option_key("unknown", s) == ""
