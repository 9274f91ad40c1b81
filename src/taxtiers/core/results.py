"""Result records produced by the estimator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from taxtiers.config.schema import FilingInput

ScenarioKind = Literal["optimize", "redirect", "withhold"]


@dataclass(frozen=True)
class CurrentTax:
    """Baseline liability under the filer's actual choices."""

    standard_deduction: float
    se_net_income: float
    se_tax: float
    se_deduction: float
    taxable_income: float
    tax_before_credits: float
    child_credit: float
    other_dependent_credit: float
    total_credits: float
    actual_tax: float
    marginal_rate: float
    effective_rate: float  # actual_tax / gross income, 0 when income is 0


@dataclass(frozen=True)
class WithholdingEstimate:
    """What the filer is likely paying in during the year."""

    estimated: float
    overpayment: float
    source: Literal["custom", "default"]
    overpayment_notable: bool


@dataclass(frozen=True)
class Baseline:
    """Current liability plus withholding; the reference every tier is measured against."""

    current: CurrentTax
    withholding: WithholdingEstimate


@dataclass(frozen=True)
class RiskEstimate:
    """Penalty exposure for withholding the full tax from remittance."""

    underpayment_penalty: float
    false_exemption_penalty: float
    total: float
    worst_case: float  # tax owed plus total penalties


@dataclass(frozen=True)
class Scenario:
    """One strategy tier recomputed from the baseline."""

    kind: ScenarioKind
    tax: float
    savings: float
    savings_per_period: float
    max_pre_tax: float = 0.0
    additional_pre_tax: float = 0.0
    charitable_deduction: float = 0.0
    taxable_income: float = 0.0
    tax_before_credits: float = 0.0
    tax_reduction: float = 0.0
    risk: RiskEstimate | None = None


@dataclass(frozen=True)
class ImpactRow:
    """Aggregate projection for one population slice."""

    fraction: float
    people: float
    annual: float
    biweekly: float


@dataclass(frozen=True)
class ImpactTier:
    """Collective projection for one strategy tier."""

    kind: str
    label: str
    description: str
    per_capita: float
    rows: tuple[ImpactRow, ...]


@dataclass(frozen=True)
class DerivedResult:
    """Everything derived from one :class:`FilingInput`."""

    input: FilingInput
    tax_year: int
    current: CurrentTax
    withholding: WithholdingEstimate
    optimize: Scenario
    redirect: Scenario
    withhold: Scenario
    impact: tuple[ImpactTier, ...] = field(default=(), repr=False)

    @property
    def scenarios(self) -> tuple[Scenario, Scenario, Scenario]:
        return (self.optimize, self.redirect, self.withhold)
