"""Reusable form components for the Streamlit wizard."""

from __future__ import annotations

import streamlit as st

from taxtiers.config.schema import EMPLOYMENT_TYPES, FILING_STATUSES, FilingInput

FILING_LABELS = {
    "single": "Single",
    "married_jointly": "Married filing jointly",
    "head_of_household": "Head of household",
}

EMPLOYMENT_LABELS = {
    "w2": "W-2 employee",
    "self": "Self-employed / 1099",
    "both": "Both",
}


def filing_status_form(filing: FilingInput) -> str:
    """Radio for filing status; returns the chosen key."""
    return st.radio(
        "Filing status",
        FILING_STATUSES,
        index=FILING_STATUSES.index(filing.filing_status),
        format_func=FILING_LABELS.__getitem__,
        key="filing_status",
    )


def employment_form(filing: FilingInput) -> str:
    """Radio for employment type; returns the chosen key."""
    return st.radio(
        "How do you earn your income?",
        EMPLOYMENT_TYPES,
        index=EMPLOYMENT_TYPES.index(filing.employment_type),
        format_func=EMPLOYMENT_LABELS.__getitem__,
        key="employment_type",
    )


def income_form(filing: FilingInput) -> dict[str, object]:
    """Income, dependents, pre-tax and optional withholding fields.

    Returns raw values; coercion happens when the caller builds a
    :class:`FilingInput` from them.
    """
    annual_income = st.number_input(
        "Gross annual income ($)",
        min_value=0.0,
        value=filing.annual_income,
        step=1_000.0,
        key="annual_income",
    )
    col1, col2 = st.columns(2)
    with col1:
        children = st.number_input(
            "Children under 17",
            min_value=0,
            max_value=20,
            value=filing.children_under_17,
            key="children_under_17",
        )
    with col2:
        others = st.number_input(
            "Other dependents",
            min_value=0,
            max_value=20,
            value=filing.other_dependents,
            key="other_dependents",
        )
    pre_tax = st.number_input(
        "Annual pre-tax contributions (401k, HSA, ...)",
        min_value=0.0,
        value=filing.pre_tax_contributions,
        step=500.0,
        key="pre_tax_contributions",
    )

    use_advanced = st.checkbox(
        "I know what I actually pay in", value=filing.use_advanced, key="use_advanced"
    )
    custom = filing.custom_withholding
    if use_advanced:
        per = "paycheck (biweekly)" if filing.employment_type == "w2" else "quarterly payment"
        custom = st.number_input(
            f"Federal income tax per {per} ($)",
            min_value=0.0,
            value=filing.custom_withholding,
            step=50.0,
            key="custom_withholding",
        )
    return {
        "annual_income": annual_income,
        "children_under_17": children,
        "other_dependents": others,
        "pre_tax_contributions": pre_tax,
        "use_advanced": use_advanced,
        "custom_withholding": custom,
    }
