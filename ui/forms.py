from typing import get_args

import streamlit as st

from quickprice.buckets import CREDIT_SCORE_BANDS, DSCR_BANDS, DSCR_FLOOR
from quickprice.models import (
    Citizenship,
    CreditEvent,
    DocType,
    DtiBucket,
    LienType,
    LoanProduct,
    LoanPurpose,
    LoanScenario,
    LockTerm,
    MortgageHistory,
    Occupancy,
    PrepayFee,
    PrepayPeriod,
    PropertyType,
)
from quickprice.rules import allowed_states

CREDIT_SCORE_OPTIONS = [band for _, band in CREDIT_SCORE_BANDS]
DSCR_OPTIONS = [band for _, band in DSCR_BANDS] + [DSCR_FLOOR]


def _choice(label, literal, current, **kwargs):
    options = list(get_args(literal))
    index = options.index(current) if current in options else 0
    return st.selectbox(label, options, index=index, **kwargs)


def render_scenario_form() -> dict:
    """Sidebar inputs; returns the raw field values for ``LoanScenario``."""
    st.session_state.setdefault("scenario", LoanScenario().model_dump())
    s = st.session_state.scenario
    sb = st.sidebar

    with sb.expander("Borrower", expanded=True):
        s["citizenship"] = _choice("Citizenship", Citizenship, s["citizenship"])
        s["occupancy"] = _choice("Occupancy", Occupancy, s["occupancy"])
        s["fthb"] = st.checkbox("First Time Home Buyer", value=s["fthb"])
        s["credit_score"] = st.selectbox(
            "Credit Score",
            CREDIT_SCORE_OPTIONS,
            index=CREDIT_SCORE_OPTIONS.index(s["credit_score"])
            if s["credit_score"] in CREDIT_SCORE_OPTIONS
            else 3,
        )
        s["adverse_credit"] = st.checkbox("Adverse Credit", value=s["adverse_credit"])
        if s["adverse_credit"]:
            s["credit_event"] = _choice("Credit Event (FC/BK/SS/DIL)", CreditEvent, s["credit_event"])
            s["mortgage_history"] = _choice("Mortgage History", MortgageHistory, s["mortgage_history"])
        s["doc_type"] = _choice("Income Doc Type", DocType, s["doc_type"])

    with sb.expander("Loan", expanded=True):
        s["lien_type"] = _choice("Lien", LienType, s["lien_type"])
        s["purchase_price"] = st.number_input(
            "Purchase Price / Value", min_value=0.0, value=float(s["purchase_price"]), step=5000.0
        )
        s["loan_amount"] = st.number_input(
            "Loan Amount", min_value=0.0, value=float(s["loan_amount"]), step=5000.0
        )
        s["loan_purpose"] = _choice("Loan Purpose", LoanPurpose, s["loan_purpose"])
        s["loan_product"] = _choice("Loan Product", LoanProduct, s["loan_product"])
        s["property_type"] = _choice("Property Type", PropertyType, s["property_type"])
        s["dti"] = _choice("DTI", DtiBucket, s["dti"])
        s["escrow_waiver"] = st.checkbox("Waive Escrow", value=s["escrow_waiver"])
        states = allowed_states(s["doc_type"])
        s["state"] = st.selectbox(
            "State", states, index=states.index(s["state"]) if s["state"] in states else 0
        )
        s["lock_term"] = _choice("Lock Term", LockTerm, s["lock_term"])

    if s["occupancy"] == "Investment" or s["doc_type"] == "DSCR":
        with sb.expander("Investor", expanded=True):
            s["prepay_period"] = _choice("Prepay Period", PrepayPeriod, s["prepay_period"])
            s["prepay_fee"] = _choice("Prepay Fee", PrepayFee, s["prepay_fee"])
            s["dscr_ratio"] = st.selectbox(
                "DSCR Ratio",
                DSCR_OPTIONS,
                index=DSCR_OPTIONS.index(s["dscr_ratio"]) if s["dscr_ratio"] in DSCR_OPTIONS else 0,
            )
            s["short_term_rental"] = st.checkbox("Short Term Rental", value=s["short_term_rental"])
    return s
