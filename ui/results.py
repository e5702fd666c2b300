import streamlit as st

from quickprice.models import PricingResult
from quickprice.report import adjustments_frame, rates_frame, summary
from quickprice.rules import has_blocking


def render_issues(result: PricingResult):
    """Pricing error first, then program-setting findings, then trigger changes."""
    issues = ([result.error] if result.error else []) + list(result.warnings)
    for r in issues:
        if r.severity == "critical":
            st.error(r.message)
        elif r.severity == "warn":
            st.warning(f"[{r.code}] {r.message}")
        else:
            st.info(f"[{r.code}] {r.message}")
    for c in result.changes:
        st.info(f"{c.field.replace('_', ' ').title()} set to {c.new_value} ({c.rule})")
    return issues


def render_results(result: PricingResult):
    head = summary(result)
    cols = st.columns(4)
    cols[0].metric("Program", head["Program"] or "-")
    cols[1].metric("LTV", head["LTV"])
    cols[2].metric("Total LLPA", head["Total LLPA"] or "-")
    cols[3].metric("Par Rate", head["Par Rate"])
    st.caption(f"LTV Bucket: {head['LTV Bucket'] or 'N/A'}")

    issues = render_issues(result)

    if not has_blocking(issues):
        st.subheader("Rates")
        if result.rates:
            st.dataframe(rates_frame(result), hide_index=True)
        else:
            st.info("No rates available in the 99-101 price range for this scenario.")

    if result.adjustments:
        st.subheader("Adjustments")
        st.dataframe(adjustments_frame(result), hide_index=True)

    if result.skipped:
        with st.expander("Skipped adjustments"):
            for s in result.skipped:
                st.caption(f"{s.category}: {s.reason}")
