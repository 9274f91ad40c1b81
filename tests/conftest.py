"""Shared test fixtures."""

from __future__ import annotations

import pytest

from taxtiers.config.schema import FilingInput, TaxYearConfig
from taxtiers.core.estimator import TaxEstimator
from taxtiers.taxes.us_federal import load_tax_year


@pytest.fixture(scope="session")
def tax_year() -> TaxYearConfig:
    """2024 tables, loaded once."""
    return load_tax_year(2024)


@pytest.fixture
def estimator(tax_year: TaxYearConfig) -> TaxEstimator:
    return TaxEstimator(tax_year)


@pytest.fixture
def single_w2() -> FilingInput:
    """Single W-2 filer at $65k with nothing else entered."""
    return FilingInput(filing_status="single", employment_type="w2", annual_income=65_000)
