import logging

import streamlit as st
from dotenv import load_dotenv

from config.settings import load_settings
from mortgage.ui import render_mortgage

# ---------------------------------------------
# Load environment variables (.env)
# ---------------------------------------------
load_dotenv()
settings = load_settings()

logging.basicConfig(level=settings.log_level, filename=settings.log_file)

st.set_page_config(page_title="Home Buyer Calculator", layout="wide")

st.title("Home Buyer Calculator")
st.caption(
    "The true monthly and lifetime cost of a mortgage: principal & interest plus PMI, "
    "taxes, insurance, maintenance, HOA and the return your cash could earn elsewhere."
)

if "mortgage_badge" not in st.session_state:
    st.session_state["mortgage_badge"] = "Monthly: —"

with st.expander(
        f"Mortgage & Cost Breakdown  •  {st.session_state['mortgage_badge']}",
        expanded=True,
):
    render_mortgage(cost_of_capital_default=settings.cost_of_capital_rate)
