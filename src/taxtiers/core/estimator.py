"""Tax estimator: baseline liability, three strategy tiers and collective impact."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Literal

import numpy as np

from taxtiers.config.schema import FilingInput, TaxYearConfig
from taxtiers.core.results import (
    Baseline,
    CurrentTax,
    DerivedResult,
    ImpactRow,
    ImpactTier,
    RiskEstimate,
    Scenario,
    ScenarioKind,
    WithholdingEstimate,
)
from taxtiers.taxes.brackets import calc_bracket_tax, marginal_rate
from taxtiers.taxes.us_federal import load_tax_year

logger = logging.getLogger(__name__)

IMPACT_LABELS: dict[ScenarioKind, tuple[str, str]] = {
    "optimize": (
        "Optimize",
        "Money kept from overpaying, staying with workers instead of the Treasury",
    ),
    "redirect": (
        "Redirect",
        "Money redirected from the government to communities and causes",
    ),
    "withhold": (
        "Withhold",
        "Total federal income tax withheld from the Treasury",
    ),
}


class TaxEstimator:
    """Pure derivations over one tax year's tables.

    The estimator holds only its immutable configuration; every method is a
    function of its arguments, so repeated calls with the same input return
    equal results.
    """

    def __init__(self, config: TaxYearConfig | None = None) -> None:
        self._config = config if config is not None else load_tax_year()

    @property
    def config(self) -> TaxYearConfig:
        return self._config

    def per_period(self, amount: float, employment_type: str) -> float:
        """Split an annual amount per paycheck (W-2 only) or per quarter."""
        if employment_type == "w2":
            return amount / self._config.paychecks_per_year
        return amount / self._config.quarters_per_year

    def _tax_after_credits(
        self, taxable_income: float, filing: FilingInput, credits: float
    ) -> tuple[float, float]:
        brackets = self._config.brackets_for(filing.filing_status)
        before = calc_bracket_tax(taxable_income, brackets)
        return before, max(0.0, before - credits)

    def derive_current_tax(self, filing: FilingInput) -> CurrentTax:
        """Taxable income, bracket tax, credits and tax owed as the filer stands."""
        cfg = self._config
        income = filing.annual_income

        if filing.has_se_income:
            se_net_income = income * cfg.se_net_income_factor
            se_tax = se_net_income * cfg.se_tax_rate
            se_deduction = se_tax * cfg.se_deductible_fraction
        else:
            se_net_income = se_tax = se_deduction = 0.0

        std_ded = cfg.standard_deduction_for(filing.filing_status)
        taxable = max(0.0, income - filing.pre_tax_contributions - std_ded - se_deduction)

        # No phase-out of either credit by income
        child_credit = filing.children_under_17 * cfg.child_credit_per_child
        other_credit = filing.other_dependents * cfg.other_dependent_credit
        total_credits = child_credit + other_credit

        before, actual = self._tax_after_credits(taxable, filing, total_credits)
        return CurrentTax(
            standard_deduction=std_ded,
            se_net_income=se_net_income,
            se_tax=se_tax,
            se_deduction=se_deduction,
            taxable_income=taxable,
            tax_before_credits=before,
            child_credit=child_credit,
            other_dependent_credit=other_credit,
            total_credits=total_credits,
            actual_tax=actual,
            marginal_rate=marginal_rate(taxable, cfg.brackets_for(filing.filing_status)),
            effective_rate=actual / income if income > 0 else 0.0,
        )

    def derive_withholding_estimate(
        self, filing: FilingInput, actual_tax: float
    ) -> WithholdingEstimate:
        """Annual withholding or estimated payments, and the overpayment it implies.

        A custom figure is a per-paycheck amount for W-2 filers and a
        per-quarter payment for everyone else. Without one, withholding is
        assumed to run at the default multiple of the tax owed.
        """
        cfg = self._config
        if filing.use_advanced and filing.custom_withholding > 0:
            if filing.employment_type == "w2":
                periods = cfg.paychecks_per_year
            else:
                periods = cfg.quarters_per_year
            estimated = filing.custom_withholding * periods
            source: Literal["custom", "default"] = "custom"
        else:
            estimated = actual_tax * cfg.default_withholding_multiplier
            source = "default"
        overpayment = max(0.0, estimated - actual_tax)
        return WithholdingEstimate(
            estimated=estimated,
            overpayment=overpayment,
            source=source,
            overpayment_notable=overpayment > cfg.overpayment_notice_threshold,
        )

    def derive_baseline(self, filing: FilingInput) -> Baseline:
        current = self.derive_current_tax(filing)
        return Baseline(
            current=current,
            withholding=self.derive_withholding_estimate(filing, current.actual_tax),
        )

    def max_pre_tax(self, filing: FilingInput) -> float:
        """Largest pre-tax contribution allowed for the filer's employment type."""
        cfg = self._config
        income = filing.annual_income
        w2_limit = cfg.pre_tax_cap_w2.limit(income)
        se_limit = cfg.pre_tax_cap_se.limit(income)
        if filing.employment_type == "self":
            return se_limit
        if filing.employment_type == "w2":
            return w2_limit
        return max(w2_limit, se_limit)

    def _legal_scenario(
        self,
        kind: ScenarioKind,
        filing: FilingInput,
        baseline: Baseline,
        charitable: float,
    ) -> Scenario:
        current = baseline.current
        max_pre_tax = self.max_pre_tax(filing)
        taxable = max(
            0.0,
            filing.annual_income
            - max_pre_tax
            - current.standard_deduction
            - charitable
            - current.se_deduction,
        )
        before, tax = self._tax_after_credits(taxable, filing, current.total_credits)
        reduction = current.actual_tax - tax
        savings = reduction + baseline.withholding.overpayment
        return Scenario(
            kind=kind,
            tax=tax,
            savings=savings,
            savings_per_period=self.per_period(savings, filing.employment_type),
            max_pre_tax=max_pre_tax,
            additional_pre_tax=max(0.0, max_pre_tax - filing.pre_tax_contributions),
            charitable_deduction=charitable,
            taxable_income=taxable,
            tax_before_credits=before,
            tax_reduction=reduction,
        )

    def derive_optimize_scenario(self, filing: FilingInput, baseline: Baseline) -> Scenario:
        """Tier 1: stop overpaying and contribute the pre-tax maximum."""
        return self._legal_scenario("optimize", filing, baseline, charitable=0.0)

    def derive_redirect_scenario(self, filing: FilingInput, baseline: Baseline) -> Scenario:
        """Tier 2: tier 1 plus a charitable deduction of a fixed share of income."""
        charitable = filing.annual_income * self._config.charitable_pct
        return self._legal_scenario("redirect", filing, baseline, charitable=charitable)

    def derive_withhold_scenario(self, filing: FilingInput, baseline: Baseline) -> Scenario:
        """Tier 3: withhold the whole estimated payment and accrue penalty risk.

        Tax owed is unchanged. The flat false-exemption penalty only applies
        when the filer has W-2 wages, since only they file a W-4.
        """
        cfg = self._config
        actual_tax = baseline.current.actual_tax
        withheld = baseline.withholding.estimated
        underpayment = actual_tax * cfg.underpayment_penalty_rate
        false_exemption = cfg.false_exemption_penalty if filing.has_w2_wages else 0.0
        total = underpayment + false_exemption
        return Scenario(
            kind="withhold",
            tax=actual_tax,
            savings=withheld,
            savings_per_period=self.per_period(withheld, filing.employment_type),
            taxable_income=baseline.current.taxable_income,
            tax_before_credits=baseline.current.tax_before_credits,
            risk=RiskEstimate(
                underpayment_penalty=underpayment,
                false_exemption_penalty=false_exemption,
                total=total,
                worst_case=actual_tax + total,
            ),
        )

    def per_capita_averages(self) -> dict[ScenarioKind, float]:
        """Average annual amount per person for each tier, from fixed national figures."""
        impact = self._config.impact
        return {
            "optimize": impact.median_income * impact.optimize_pct,
            "redirect": impact.median_income * impact.redirect_pct,
            "withhold": impact.annual_withholding / impact.workforce,
        }

    def derive_collective_impact(
        self,
        per_capita: Mapping[str, float] | None = None,
        population_fractions: Sequence[float] | None = None,
    ) -> tuple[ImpactTier, ...]:
        """Project per-person averages across slices of the workforce.

        Independent of any filer input. Keys outside the three tiers are
        labelled with the key itself.
        """
        impact = self._config.impact
        averages = dict(per_capita) if per_capita is not None else self.per_capita_averages()
        if population_fractions is None:
            population_fractions = impact.population_fractions
        fractions = np.asarray(population_fractions, dtype=float)
        kinds = list(averages)
        people = impact.workforce * fractions
        # (n_tiers, n_slices)
        annual = np.outer([averages[k] for k in kinds], people)

        tiers = []
        for i, kind in enumerate(kinds):
            label, description = IMPACT_LABELS.get(kind, (kind, ""))
            rows = tuple(
                ImpactRow(
                    fraction=float(fractions[j]),
                    people=float(people[j]),
                    annual=float(annual[i, j]),
                    biweekly=float(annual[i, j]) / self._config.paychecks_per_year,
                )
                for j in range(len(fractions))
            )
            tiers.append(
                ImpactTier(
                    kind=kind,
                    label=label,
                    description=description,
                    per_capita=float(averages[kind]),
                    rows=rows,
                )
            )
        return tuple(tiers)

    def estimate(self, filing: FilingInput) -> DerivedResult:
        """Run every derivation for ``filing`` and return one complete record."""
        baseline = self.derive_baseline(filing)
        result = DerivedResult(
            input=filing,
            tax_year=self._config.tax_year,
            current=baseline.current,
            withholding=baseline.withholding,
            optimize=self.derive_optimize_scenario(filing, baseline),
            redirect=self.derive_redirect_scenario(filing, baseline),
            withhold=self.derive_withhold_scenario(filing, baseline),
            impact=self.derive_collective_impact(),
        )
        logger.debug(
            "Estimated %s/%s income=%.2f: tax=%.2f withheld=%.2f",
            filing.filing_status,
            filing.employment_type,
            filing.annual_income,
            result.current.actual_tax,
            result.withholding.estimated,
        )
        return result
