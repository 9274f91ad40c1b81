"""Pydantic v2 models for filer input and tax-year configuration."""

from __future__ import annotations

import math
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

FilingStatus = Literal["single", "married_jointly", "head_of_household"]
EmploymentType = Literal["w2", "self", "both"]

FILING_STATUSES: tuple[str, ...] = get_args(FilingStatus)
EMPLOYMENT_TYPES: tuple[str, ...] = get_args(EmploymentType)

DEFAULT_FILING_STATUS: FilingStatus = "single"
DEFAULT_EMPLOYMENT_TYPE: EmploymentType = "w2"

_TRUTHY = {"1", "true", "yes", "on", "y"}


def coerce_amount(value: Any) -> float:
    """Coerce a raw form value to a non-negative finite float.

    Anything that does not parse as a finite number (None, "", "abc", NaN,
    inf, integers too large for a float) becomes 0. Thousands separators, a
    leading ``$`` and surrounding whitespace are tolerated. Negative values
    clamp to 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "").lstrip("$")
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(result) or result < 0:
        return 0.0
    return result


def coerce_count(value: Any) -> int:
    """Coerce a raw form value to a non-negative int, truncating fractions."""
    return int(coerce_amount(value))


def coerce_flag(value: Any) -> bool:
    """Coerce checkbox-like values (``"on"``, ``"true"``, 1) to bool."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


class FilingInput(BaseModel):
    """A filer's answers to the wizard, coerced at the boundary.

    Malformed numbers become 0 and unknown enum values fall back to the
    defaults, so constructing this model never raises for bad form data.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    filing_status: FilingStatus = DEFAULT_FILING_STATUS
    employment_type: EmploymentType = DEFAULT_EMPLOYMENT_TYPE
    annual_income: float = Field(default=0.0, ge=0, description="Gross annual income")
    pre_tax_contributions: float = Field(
        default=0.0, ge=0, description="Annual pre-tax contributions (401k, HSA, ...)"
    )
    children_under_17: int = Field(default=0, ge=0)
    other_dependents: int = Field(default=0, ge=0)
    custom_withholding: float = Field(
        default=0.0,
        ge=0,
        description="Observed withholding per paycheck, or estimated payment per quarter",
    )
    use_advanced: bool = Field(default=False, description="Use custom_withholding if set")

    @field_validator("filing_status", mode="before")
    @classmethod
    def _coerce_filing_status(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip().lower() in FILING_STATUSES:
            return value.strip().lower()
        return DEFAULT_FILING_STATUS

    @field_validator("employment_type", mode="before")
    @classmethod
    def _coerce_employment_type(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip().lower() in EMPLOYMENT_TYPES:
            return value.strip().lower()
        return DEFAULT_EMPLOYMENT_TYPE

    @field_validator(
        "annual_income", "pre_tax_contributions", "custom_withholding", mode="before"
    )
    @classmethod
    def _coerce_amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("children_under_17", "other_dependents", mode="before")
    @classmethod
    def _coerce_counts(cls, value: Any) -> int:
        return coerce_count(value)

    @field_validator("use_advanced", mode="before")
    @classmethod
    def _coerce_use_advanced(cls, value: Any) -> bool:
        return coerce_flag(value)

    @property
    def has_w2_wages(self) -> bool:
        return self.employment_type in ("w2", "both")

    @property
    def has_se_income(self) -> bool:
        return self.employment_type in ("self", "both")


class Bracket(BaseModel):
    """One tier of a progressive bracket table."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float = Field(ge=0)
    max: float | None = Field(default=None, description="Upper bound; None means unbounded")
    rate: float = Field(ge=0, le=1)

    @property
    def upper(self) -> float:
        return math.inf if self.max is None else self.max


class ContributionCap(BaseModel):
    """Maximum pre-tax contribution: the lesser of a share of income and a flat cap."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pct: float = Field(ge=0, le=1)
    flat_cap: float = Field(ge=0)

    def limit(self, income: float) -> float:
        return min(income * self.pct, self.flat_cap)


class ImpactConstants(BaseModel):
    """Fixed national figures behind the collective impact projections."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    workforce: float = Field(gt=0, description="US workforce size")
    annual_withholding: float = Field(ge=0, description="Total federal income tax withheld")
    median_income: float = Field(ge=0)
    optimize_pct: float = Field(ge=0, le=1, description="Share of median income kept by optimizing")
    redirect_pct: float = Field(ge=0, le=1, description="Share of median income redirected")
    population_fractions: tuple[float, ...] = Field(min_length=1)

    @field_validator("population_fractions")
    @classmethod
    def _validate_fractions(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        for fraction in value:
            if not 0 < fraction <= 1:
                raise ValueError(f"population fraction must be in (0, 1], got {fraction}")
        return value


class TaxYearConfig(BaseModel):
    """Static tables and constants for one tax year."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_year: int = Field(ge=1913)
    brackets_by_status: dict[str, tuple[Bracket, ...]]
    standard_deduction_by_status: dict[str, float]
    child_credit_per_child: float = Field(default=2000, ge=0)
    other_dependent_credit: float = Field(default=500, ge=0)
    se_tax_rate: float = Field(default=0.153, ge=0, le=1)
    se_net_income_factor: float = Field(default=0.9235, ge=0, le=1)
    se_deductible_fraction: float = Field(default=0.5, ge=0, le=1)
    pre_tax_cap_w2: ContributionCap = ContributionCap(pct=0.20, flat_cap=27150)
    pre_tax_cap_se: ContributionCap = ContributionCap(pct=0.25, flat_cap=70150)
    charitable_pct: float = Field(default=0.10, ge=0, le=1)
    underpayment_penalty_rate: float = Field(default=0.08, ge=0)
    false_exemption_penalty: float = Field(default=500, ge=0)
    default_withholding_multiplier: float = Field(default=1.15, ge=0)
    paychecks_per_year: int = Field(default=26, ge=1)
    quarters_per_year: int = Field(default=4, ge=1)
    overpayment_notice_threshold: float = Field(default=100, ge=0)
    impact: ImpactConstants

    @model_validator(mode="after")
    def _validate_tables(self) -> TaxYearConfig:
        for status in FILING_STATUSES:
            if status not in self.brackets_by_status:
                raise ValueError(f"missing brackets for filing status '{status}'")
            if status not in self.standard_deduction_by_status:
                raise ValueError(f"missing standard deduction for filing status '{status}'")
        for status, brackets in self.brackets_by_status.items():
            if not brackets:
                raise ValueError(f"bracket table for '{status}' is empty")
            if brackets[0].min != 0:
                raise ValueError(f"bracket table for '{status}' must start at 0")
            for lower, upper in zip(brackets, brackets[1:]):
                if lower.max is None:
                    raise ValueError(f"only the last '{status}' bracket may be unbounded")
                if upper.min != lower.max:
                    raise ValueError(
                        f"'{status}' brackets must be contiguous: "
                        f"{lower.max} followed by {upper.min}"
                    )
                if lower.max <= lower.min:
                    raise ValueError(f"'{status}' bracket bounds must increase")
            if brackets[-1].max is not None:
                raise ValueError(f"last '{status}' bracket must be unbounded")
        return self

    def brackets_for(self, filing_status: str) -> tuple[Bracket, ...]:
        """Bracket table for a status, falling back to single."""
        return self.brackets_by_status.get(
            filing_status, self.brackets_by_status[DEFAULT_FILING_STATUS]
        )

    def standard_deduction_for(self, filing_status: str) -> float:
        """Standard deduction for a status, falling back to single."""
        return self.standard_deduction_by_status.get(
            filing_status, self.standard_deduction_by_status[DEFAULT_FILING_STATUS]
        )
