"""taxtiers: step-by-step federal tax estimate with three strategy tiers."""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the repo root is on sys.path so `from app.components...` imports work
# when Streamlit Cloud runs `streamlit run app/Home.py`.
_root = str(Path(__file__).resolve().parent.parent)
if _root not in sys.path:
    sys.path.insert(0, _root)

import streamlit as st

st.set_page_config(
    page_title="taxtiers",
    page_icon="🧾",
    layout="centered",
)

from app.components.charts import (
    impact_chart,
    income_sweep_chart,
    savings_chart,
    tier_comparison_chart,
)
from app.components.format import fmt_big, fmt_money, fmt_people
from app.components.forms import employment_form, filing_status_form, income_form
from app.components.theme import register_theme
from app.components.wizard import STEPS, WizardState, can_proceed
from taxtiers.analytics.sweep import income_grid, income_sweep
from taxtiers.config.defaults import TEMPLATES, default_input
from taxtiers.config.schema import FilingInput
from taxtiers.core.coerce import filing_input_from_form
from taxtiers.core.estimator import TaxEstimator
from taxtiers.taxes.brackets import bracket_breakdown

register_theme()


@st.cache_resource
def get_estimator() -> TaxEstimator:
    return TaxEstimator()


def _update(**fields: object) -> None:
    filing: FilingInput = st.session_state["filing"]
    st.session_state["filing"] = filing_input_from_form({**filing.model_dump(), **fields})


def _math_row(label: str, value: str) -> None:
    col1, col2 = st.columns([3, 1])
    col1.write(label)
    col2.write(value)


if "filing" not in st.session_state:
    st.session_state["filing"] = default_input()
if "wizard" not in st.session_state:
    st.session_state["wizard"] = WizardState()

wizard: WizardState = st.session_state["wizard"]
filing: FilingInput = st.session_state["filing"]

st.title("What Do You Actually Owe?")
st.progress((wizard.current_step + 1) / len(STEPS))

if wizard.step_name == "filing":
    with st.expander("Start from a template"):
        for name, template in TEMPLATES.items():
            if st.button(name):
                st.session_state["filing"] = template()
                # Drop widget state so the form picks up the template values
                for field_name in FilingInput.model_fields:
                    st.session_state.pop(field_name, None)
                st.rerun()
    _update(filing_status=filing_status_form(filing))

elif wizard.step_name == "employment":
    _update(employment_type=employment_form(filing))

elif wizard.step_name == "income":
    _update(**income_form(filing))

else:
    estimator = get_estimator()
    result = estimator.estimate(filing)
    current = result.current
    paying_label = "estimated payments" if filing.employment_type == "self" else "withholding"
    per_label = "paycheck" if filing.employment_type == "w2" else "quarter"

    st.subheader("Right now")
    col1, col2 = st.columns(2)
    col1.metric("It's probable you owe", f"{fmt_money(current.actual_tax)}/yr")
    col2.metric(f"You're likely paying in {paying_label}", f"{fmt_money(result.withholding.estimated)}/yr")
    if result.withholding.overpayment_notable:
        st.warning(f"~{fmt_money(result.withholding.overpayment)}/year overpaid")

    if st.button("Hide the math" if wizard.is_expanded("current") else "Show the math"):
        st.session_state["wizard"] = wizard.toggle("current")
        st.rerun()
    if wizard.is_expanded("current"):
        _math_row("Gross income", fmt_money(filing.annual_income))
        if filing.pre_tax_contributions > 0:
            _math_row("− Pre-tax contributions", "−" + fmt_money(filing.pre_tax_contributions))
        _math_row("− Standard deduction", "−" + fmt_money(current.standard_deduction))
        if current.se_deduction > 0:
            _math_row("− SE tax deduction (half of SE tax)", "−" + fmt_money(current.se_deduction))
        _math_row("= Taxable income", fmt_money(current.taxable_income))
        brackets = estimator.config.brackets_for(filing.filing_status)
        for piece in bracket_breakdown(current.taxable_income, brackets):
            _math_row(
                f"   {piece.bracket.rate:.0%} on {fmt_money(piece.taxed_amount)}",
                fmt_money(piece.tax),
            )
        _math_row("Federal income tax (from brackets)", fmt_money(current.tax_before_credits))
        if current.total_credits > 0:
            _math_row("− Tax credits", "−" + fmt_money(current.total_credits))
        _math_row("= Federal tax you actually owe", fmt_money(current.actual_tax))
        _math_row(
            f"Estimated annual {paying_label}",
            fmt_money(result.withholding.estimated),
        )

    st.plotly_chart(tier_comparison_chart(result), use_container_width=True)

    st.subheader("1. Optimize within the system")
    opt = result.optimize
    st.metric("Kept per year", fmt_money(opt.savings), f"{fmt_money(opt.savings_per_period)}/{per_label}")
    if st.button("Hide the math" if wizard.is_expanded("optimize") else "How is this calculated?"):
        st.session_state["wizard"] = wizard.toggle("optimize")
        st.rerun()
    if wizard.is_expanded("optimize"):
        if result.withholding.overpayment_notable:
            _math_row("Stop overpaying: refund", fmt_money(result.withholding.overpayment))
        _math_row("You currently contribute", fmt_money(filing.pre_tax_contributions) + "/yr")
        _math_row("You could contribute up to", fmt_money(opt.max_pre_tax) + "/yr")
        if opt.additional_pre_tax > 0:
            _math_row("= Additional pre-tax savings", fmt_money(opt.additional_pre_tax))
        _math_row("Tax reduction from more pre-tax", fmt_money(opt.tax_reduction))

    st.subheader("2. Legal but aggressive")
    red = result.redirect
    st.metric("Kept per year", fmt_money(red.savings))
    st.write(
        f"Tax bill drops to **{fmt_money(red.tax)}/year** after redirecting "
        f"{fmt_money(red.charitable_deduction)} ({fmt_money(red.charitable_deduction / 12)}/month) "
        "to qualified charities."
    )

    st.subheader("3. Withhold payment")
    hold = result.withhold
    st.metric(f"Withheld per {per_label}", fmt_money(hold.savings_per_period))
    if hold.risk is not None:
        st.error(
            f"Penalty risk up to {fmt_money(hold.risk.total)} on top of "
            f"{fmt_money(current.actual_tax)} owed (worst case {fmt_money(hold.risk.worst_case)})."
        )
        if st.button("Hide risks" if wizard.is_expanded("risks") else "Show risks"):
            st.session_state["wizard"] = wizard.toggle("risks")
            st.rerun()
        if wizard.is_expanded("risks"):
            _math_row("False exemption certificate penalty", fmt_money(hold.risk.false_exemption_penalty))
            _math_row("Underpayment penalty (~8%)", fmt_money(hold.risk.underpayment_penalty))
            _math_row("Total max penalty", fmt_money(hold.risk.total))

    st.plotly_chart(savings_chart(result), use_container_width=True)

    sweep = income_sweep(estimator, filing, income_grid(max(2 * filing.annual_income, 50_000)))
    st.plotly_chart(income_sweep_chart(sweep, filing.annual_income), use_container_width=True)

    st.subheader("What happens when many people act together")
    tabs = st.tabs([tier.label for tier in result.impact])
    for tab, tier in zip(tabs, result.impact):
        with tab:
            st.caption(tier.description)
            for row in tier.rows:
                st.write(
                    f"**{row.fraction:.0%} ({fmt_people(row.people)})**: "
                    f"{fmt_big(row.annual)}/yr, {fmt_big(row.biweekly)} every two weeks"
                )
            st.plotly_chart(impact_chart(tier), use_container_width=True)

    st.caption(
        "An educational estimate for one tax year, not tax or legal advice. "
        "Child credits are not phased out by income and penalties are simplified."
    )

col_back, col_next = st.columns(2)
with col_back:
    if wizard.current_step > 0 and st.button("← Back"):
        st.session_state["wizard"] = wizard.back()
        st.rerun()
with col_next:
    if wizard.step_name == "results":
        if st.button("Start over"):
            st.session_state["filing"] = default_input()
            st.session_state["wizard"] = WizardState()
            st.rerun()
    elif st.button("Next →", disabled=not can_proceed(wizard, st.session_state["filing"])):
        st.session_state["wizard"] = wizard.next()
        st.rerun()
