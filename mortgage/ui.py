import logging

import matplotlib.pyplot as plt
import streamlit as st

from .calculations import compute, monthly_pi_payment, schedule_frame, payoff_date
from .errors import CalculationError, InvalidInput
from .export import ANALYSIS_FILENAME, SPREADSHEET_FILENAME, analysis_csv, spreadsheet_csv
from .form import MortgageForm
from .models import FixedAmount, InputParameters, Percentage
from .summary import summarize

logger = logging.getLogger(__name__)

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

DEFAULT_HOUSE_VALUE = 400000.0


def _form_default(text: str) -> float:
    return float(text) if text else 0.0


def _basis_input(label: str, key: str, default_value: float, default_is_percent: bool, units: list[str]):
    """Value + unit selector pair; returns (value, is_percent)."""
    mortgage_inputs = st.session_state["mortgage_inputs"]
    cols = st.columns([0.75, 0.25], gap="small")
    with cols[0]:
        st.caption(label)
        value = st.number_input(
            label,
            min_value=0.0,
            value=float(mortgage_inputs.get(f"{key}_value", default_value)),
            step=0.05 if default_is_percent else 50.0,
            label_visibility="collapsed",
        )
    with cols[1]:
        st.caption("Unit")
        is_percent_default = mortgage_inputs.get(f"{key}_is_percent", default_is_percent)
        unit = st.selectbox(
            f"{label} unit",
            units,
            index=0 if is_percent_default else 1,
            label_visibility="collapsed",
        )
    is_percent = unit == units[0]
    mortgage_inputs[f"{key}_value"] = value
    mortgage_inputs[f"{key}_is_percent"] = is_percent
    return value, is_percent


def _basis(value: float, is_percent: bool):
    return Percentage(value) if is_percent else FixedAmount(value)


def _collect_errors(label: str, value: float, is_percent: bool) -> list[str]:
    errors = []
    if value < 0:
        errors.append(f"{label} cannot be negative.")
    elif is_percent and value > 100:
        errors.append(f"{label} percentage cannot exceed 100%.")
    return errors


def render_inputs(cost_of_capital_default: float | None) -> InputParameters | None:
    """Render the input panel; returns parameters once the inputs are valid."""
    defaults = MortgageForm()
    mortgage_inputs = st.session_state["mortgage_inputs"]

    st.subheader("House Purchase Essentials:")

    with st.expander("ℹ️ About this section", expanded=False):
        st.markdown("""
**House Value** – The purchase price. Appreciation is applied to it month by month.

**Down Payment** – As **%** of the house value or a fixed **$** amount. The loan amount is the house value minus the down payment.

**PMI** – Charged while your equity share (house value minus loan balance, divided by house value) is below 20%. Once it stops it never comes back.
""")

    house_value = st.number_input(
        "House Value ($)",
        min_value=0.0,
        value=float(mortgage_inputs.get("house_value", DEFAULT_HOUSE_VALUE)),
        step=1000.0,
        format="%.2f",
    )
    mortgage_inputs["house_value"] = house_value

    dp_value, dp_is_percent = _basis_input(
        "Down Payment", "down_payment", _form_default(defaults.down_payment_percent), True, ["%", "$"]
    )

    purchase_errors = _collect_errors("Down payment", dp_value, dp_is_percent)
    if house_value <= 0:
        purchase_errors.append("House value must be greater than zero.")

    if purchase_errors:
        st.error("\n".join([f"• {err}" for err in purchase_errors]))
    else:
        st.success("✓ House purchase inputs valid")

    st.markdown("#### Loan Terms")

    term_years = st.number_input(
        "Loan Term (years)",
        min_value=1,
        value=int(mortgage_inputs.get("term_years", int(defaults.loan_term))),
        step=1,
    )
    interest_rate = st.number_input(
        "Interest Rate (%)",
        min_value=0.0,
        value=float(mortgage_inputs.get("interest_rate", _form_default(defaults.interest_rate))),
        step=0.01,
        format="%.2f",
    )
    extra_principal = st.number_input(
        "Extra Principal ($/month)",
        min_value=0.0,
        value=float(mortgage_inputs.get("extra_principal", _form_default(defaults.extra_principal))),
        step=50.0,
    )
    appreciation = st.number_input(
        "House Appreciation (%/year)",
        value=float(mortgage_inputs.get("appreciation", _form_default(defaults.house_appreciation))),
        step=0.25,
        format="%.2f",
        help="May be negative.",
    )
    mortgage_inputs.update({
        "term_years": int(term_years),
        "interest_rate": interest_rate,
        "extra_principal": extra_principal,
        "appreciation": appreciation,
    })

    loan_errors = []
    if interest_rate > 100:
        loan_errors.append("Interest rate cannot exceed 100%.")
    if loan_errors:
        st.error("\n".join([f"• {err}" for err in loan_errors]))
    else:
        st.success("✓ Loan terms valid")

    st.markdown("### Annual Tax & Cost")

    with st.expander("ℹ️ About taxes & costs", expanded=False):
        st.markdown("""
**Property Tax, Insurance, Maintenance** – Annual figures. As **%** they are charged against the appreciated house value each month; as **$/year** they stay fixed.

**PMI** – As **%** of the original loan amount per year, or a fixed **$/year**.

**HOA Fee** – Monthly.

All annual costs are divided by 12 and added to the monthly payment.
""")

    tax_value, tax_is_percent = _basis_input(
        "Property Tax", "property_tax", _form_default(defaults.property_tax_percent), True, ["%", "$/year"]
    )
    ins_value, ins_is_percent = _basis_input(
        "Home Insurance", "insurance", _form_default(defaults.insurance_percent), True, ["%", "$/year"]
    )
    maint_value, maint_is_percent = _basis_input(
        "Maintenance", "maintenance", _form_default(defaults.maintenance_percent), True, ["%", "$/year"]
    )
    pmi_value, pmi_is_percent = _basis_input(
        "PMI", "pmi", _form_default(defaults.pmi_percent), True, ["%", "$/year"]
    )
    hoa_monthly = st.number_input(
        "HOA Fee ($/month)",
        min_value=0.0,
        value=float(mortgage_inputs.get("hoa_monthly", _form_default(defaults.hoa_fee))),
        step=10.0,
    )
    mortgage_inputs["hoa_monthly"] = hoa_monthly

    coc_default = cost_of_capital_default if cost_of_capital_default is not None else interest_rate
    coc_rate = st.number_input(
        "Alternative Investment Return (%/year)",
        min_value=0.0,
        value=float(mortgage_inputs.get("cost_of_capital_rate", coc_default)),
        step=0.25,
        format="%.2f",
        help="Return your down payment and principal could earn elsewhere (cost of capital).",
    )
    mortgage_inputs["cost_of_capital_rate"] = coc_rate

    tax_cost_errors = (
        _collect_errors("Property tax", tax_value, tax_is_percent)
        + _collect_errors("Insurance", ins_value, ins_is_percent)
        + _collect_errors("Maintenance", maint_value, maint_is_percent)
        + _collect_errors("PMI", pmi_value, pmi_is_percent)
    )
    if tax_cost_errors:
        st.error("\n".join([f"• {err}" for err in tax_cost_errors]))
    else:
        st.success("✓ Tax & cost inputs valid")

    if purchase_errors or loan_errors or tax_cost_errors:
        return None

    try:
        return InputParameters(
            house_value=house_value,
            down_payment=_basis(dp_value, dp_is_percent),
            hoa_fee_monthly=hoa_monthly,
            interest_rate_annual=interest_rate,
            property_tax=_basis(tax_value, tax_is_percent),
            insurance=_basis(ins_value, ins_is_percent),
            maintenance=_basis(maint_value, maint_is_percent),
            pmi=_basis(pmi_value, pmi_is_percent),
            appreciation_rate_annual=appreciation,
            term_years=int(term_years),
            extra_principal_monthly=extra_principal,
            cost_of_capital_rate_annual=coc_rate,
        )
    except InvalidInput as exc:
        st.error("\n".join([f"• {err}" for err in exc.errors]))
        return None


def _render_chart(df) -> None:
    years = df["month"] / 12.0

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(years, df["remaining_balance"], label="Remaining Balance", linewidth=2)
    ax.plot(years, df["house_value"], label="House Value", linewidth=2)
    ax.plot(years, df["equity"], label="Equity", linewidth=2, linestyle="--")
    ax.plot(years, (df["actual_payment"] - df["principal"] - df["extra_principal"]
                    + df["cost_of_capital"]).cumsum(), label="Cumulative Waste Cost", linewidth=2)

    ax.set_title("Mortgage Amortization Over Time")
    ax.set_xlabel("Year")
    ax.set_ylabel("Dollars")
    ax.grid(True, linestyle="--", alpha=0.6)
    ax.legend()

    st.pyplot(fig)
    plt.close(fig)


def render_results(params: InputParameters) -> None:
    try:
        records = compute(params)
        summary = summarize(params, records)
    except CalculationError as exc:
        logger.warning("Calculation failed: %s", exc)
        st.error(f"**Cannot calculate:** {exc}")
        return

    pi = monthly_pi_payment(params.loan_amount, params.interest_rate_annual, params.term_years)
    first = records[0]
    st.session_state["mortgage_badge"] = f"Monthly: ${first.actual_payment:,.0f}"

    st.markdown(
        f"""
        <div style="
            padding: 14px;
            border-radius: 6px;
            background: #2e7d32;
            color: white;
            font-size: 22px;
            font-weight: 700;
        ">
            First Month Payment: ${first.actual_payment:,.2f}  |  P&I: ${pi:,.2f}
        </div>
        """,
        unsafe_allow_html=True
    )

    st.markdown("### Summary")

    sd_cols = st.columns([0.6, 0.4])
    with sd_cols[0]:
        start_month_name = st.selectbox("Start Date (month)", MONTHS, index=0)
    with sd_cols[1]:
        start_year = st.number_input("Start Date (year)", min_value=1900, max_value=2200, value=2026, step=1)
    payoff = payoff_date(int(start_year), MONTHS.index(start_month_name) + 1, summary.months_to_payoff)

    c1, c2 = st.columns(2)
    with c1:
        st.metric("Loan Amount", f"${params.loan_amount:,.2f}")
        st.metric("Down Payment", f"${params.down_payment_amount:,.2f}")
        st.metric("Total Interest", f"${summary.total_interest_paid:,.2f}")
        st.metric("Total Principal", f"${summary.total_principal_paid:,.2f}")
        st.metric("Total PMI", f"${summary.total_pmi_paid:,.2f}")
        st.metric("Months to Payoff", f"{summary.months_to_payoff}", help=f"Paid off {payoff}")
        st.metric("Effective Interest Rate", f"{summary.effective_interest_rate:.2%}")
    with c2:
        st.metric("Taxes + Insurance", f"${summary.total_taxes_paid + summary.total_insurance_paid:,.2f}")
        st.metric("Maintenance + HOA", f"${summary.total_maintenance_paid + summary.total_hoa_paid:,.2f}")
        st.metric(
            "Cost of Capital",
            f"${summary.total_cost_of_capital:,.2f}",
            help="Return forgone on the down payment and principal paid so far",
        )
        st.metric(
            "Waste Cost",
            f"${summary.waste_cost:,.2f}",
            help="Interest, PMI, taxes, insurance, maintenance, HOA and cost of capital",
        )
        st.metric("Final House Value", f"${summary.final_house_value:,.2f}")
        st.metric("Final Equity", f"${summary.final_equity:,.2f}")

    df = schedule_frame(records)
    _render_chart(df)

    st.markdown("### Month-by-Month Spreadsheet")
    st.dataframe(df, width="stretch", hide_index=True)

    dl_cols = st.columns(2)
    with dl_cols[0]:
        st.download_button(
            "Download Spreadsheet CSV",
            data=spreadsheet_csv(records),
            file_name=SPREADSHEET_FILENAME,
            mime="text/csv",
        )
    with dl_cols[1]:
        st.download_button(
            "Download Analysis CSV",
            data=analysis_csv(params, summary),
            file_name=ANALYSIS_FILENAME,
            mime="text/csv",
        )


def render_mortgage(cost_of_capital_default: float | None = None):
    if "mortgage_inputs" not in st.session_state:
        st.session_state["mortgage_inputs"] = {}
    if "mortgage_badge" not in st.session_state:
        st.session_state["mortgage_badge"] = "Monthly: —"
    if "chart_visible" not in st.session_state:
        st.session_state["chart_visible"] = False

    left, right = st.columns([1.05, 1.25], gap="large")

    with left:
        params = render_inputs(cost_of_capital_default)

        error_placeholder = st.empty()
        if params is None:
            error_placeholder.error("**Cannot calculate:** Fix the errors above before proceeding.")
        else:
            error_placeholder.success("✓ Ready to calculate")

        with st.form("calculate_form"):
            calculate = st.form_submit_button("Calculate", type="primary", disabled=params is None)

        if calculate:
            st.session_state["chart_visible"] = True

    with right:
        # Inputs rerun the script on every edit; results follow once Calculate was pressed.
        if st.session_state["chart_visible"] and params is not None:
            render_results(params)
        else:
            st.info("Enter your numbers and press Calculate.")
