"""Default inputs, quick-start filer templates and tax-year configuration."""

from __future__ import annotations

from taxtiers.config.schema import FilingInput, TaxYearConfig
from taxtiers.taxes.us_federal import DEFAULT_TAX_YEAR, load_tax_year


def default_tax_year() -> TaxYearConfig:
    """Tables for the default (latest shipped) tax year."""
    return load_tax_year(DEFAULT_TAX_YEAR)


def default_input() -> FilingInput:
    """Blank wizard state: single W-2 filer with no income entered."""
    return FilingInput()


# --- Quick Start Templates ---


def single_w2_input() -> FilingInput:
    """Single W-2 employee earning near the median wage."""
    return FilingInput(
        filing_status="single",
        employment_type="w2",
        annual_income=65_000,
    )


def family_w2_input() -> FilingInput:
    """Married couple, W-2 wages, two young children."""
    return FilingInput(
        filing_status="married_jointly",
        employment_type="w2",
        annual_income=120_000,
        pre_tax_contributions=6_000,
        children_under_17=2,
    )


def freelancer_input() -> FilingInput:
    """Self-employed single filer making quarterly estimated payments."""
    return FilingInput(
        filing_status="single",
        employment_type="self",
        annual_income=100_000,
        custom_withholding=4_000,
        use_advanced=True,
    )


def side_gig_input() -> FilingInput:
    """Head of household with a W-2 job and self-employment income."""
    return FilingInput(
        filing_status="head_of_household",
        employment_type="both",
        annual_income=85_000,
        pre_tax_contributions=3_000,
        children_under_17=1,
        other_dependents=1,
    )


TEMPLATES = {
    "Single W-2": single_w2_input,
    "Family": family_w2_input,
    "Freelancer": freelancer_input,
    "Side Gig": side_gig_input,
}
