import logging
import os

import streamlit as st

from quickprice.engine import calculate_rates
from quickprice.models import LoanScenario
from quickprice.presets import DISCLAIMER
from quickprice.state import active_programs, load_programs
from ui.forms import render_scenario_form
from ui.results import render_results

logging.basicConfig(
    level=os.environ.get("QUICKPRICE_LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def init_state():
    if "programs" not in st.session_state:
        st.session_state.programs = load_programs()


def render_rate_sheets():
    with st.expander("Active rate sheets"):
        for p in active_programs(st.session_state.programs):
            st.caption(f"{p.name} ({p.program_type} tier {p.tier}): {len(p.base_rates)} rate tiers")


st.set_page_config(page_title="QuickPrice", layout="wide")
init_state()

st.title("QUICKPRICE NON-QM & DSCR PRICER")
st.caption("Program selection • LLPA breakdown • Par rate • Rate options inside the price band")

fields = render_scenario_form()
result = calculate_rates(LoanScenario(**fields), st.session_state.programs)
st.session_state.result = result

render_results(result)
render_rate_sheets()
st.caption(DISCLAIMER)
