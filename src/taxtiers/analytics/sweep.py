"""Income sweep: tier taxes across a range of incomes, holding everything else fixed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from taxtiers.config.schema import FilingInput
from taxtiers.core.estimator import TaxEstimator
from taxtiers.taxes.brackets import calc_bracket_tax_vectorized


@dataclass(frozen=True)
class IncomeSweep:
    """Tax under each tier for every income in ``incomes``."""

    incomes: NDArray[np.floating[Any]]
    current_tax: NDArray[np.floating[Any]]
    optimize_tax: NDArray[np.floating[Any]]
    redirect_tax: NDArray[np.floating[Any]]
    withholding: NDArray[np.floating[Any]]


def income_grid(max_income: float, n_points: int = 101) -> NDArray[np.floating[Any]]:
    """Evenly spaced incomes from 0 to ``max_income`` inclusive."""
    if n_points < 2:
        raise ValueError(f"n_points must be at least 2, got {n_points}")
    return np.linspace(0.0, max(max_income, 0.0), n_points)


def income_sweep(
    estimator: TaxEstimator,
    filing: FilingInput,
    incomes: NDArray[np.floating[Any]],
) -> IncomeSweep:
    """Vectorized counterpart of :meth:`TaxEstimator.estimate` over many incomes.

    Every field of ``filing`` except ``annual_income`` is held fixed.

    Args:
        estimator: Estimator whose tables are used.
        filing: Template input; its income is ignored.
        incomes: (n,) gross incomes, negative values clamp to 0.

    Returns:
        IncomeSweep with (n,) arrays.
    """
    cfg = estimator.config
    inc = np.maximum(np.asarray(incomes, dtype=float), 0.0)
    brackets = cfg.brackets_for(filing.filing_status)
    std_ded = cfg.standard_deduction_for(filing.filing_status)
    credits = (
        filing.children_under_17 * cfg.child_credit_per_child
        + filing.other_dependents * cfg.other_dependent_credit
    )

    if filing.has_se_income:
        se_deduction = (
            inc * cfg.se_net_income_factor * cfg.se_tax_rate * cfg.se_deductible_fraction
        )
    else:
        se_deduction = np.zeros_like(inc)

    def _tax(deductions: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        taxable = np.maximum(inc - deductions - std_ded - se_deduction, 0.0)
        result: NDArray[np.floating[Any]] = np.maximum(
            calc_bracket_tax_vectorized(taxable, brackets) - credits, 0.0
        )
        return result

    w2_cap = np.minimum(inc * cfg.pre_tax_cap_w2.pct, cfg.pre_tax_cap_w2.flat_cap)
    se_cap = np.minimum(inc * cfg.pre_tax_cap_se.pct, cfg.pre_tax_cap_se.flat_cap)
    if filing.employment_type == "w2":
        max_pre_tax = w2_cap
    elif filing.employment_type == "self":
        max_pre_tax = se_cap
    else:
        max_pre_tax = np.maximum(w2_cap, se_cap)

    current_tax = _tax(np.full_like(inc, filing.pre_tax_contributions))
    if filing.use_advanced and filing.custom_withholding > 0:
        periods = (
            cfg.paychecks_per_year if filing.employment_type == "w2" else cfg.quarters_per_year
        )
        withholding = np.full_like(inc, filing.custom_withholding * periods)
    else:
        withholding = current_tax * cfg.default_withholding_multiplier

    return IncomeSweep(
        incomes=inc,
        current_tax=current_tax,
        optimize_tax=_tax(max_pre_tax),
        redirect_tax=_tax(max_pre_tax + inc * cfg.charitable_pct),
        withholding=withholding,
    )
