"""Progressive bracket arithmetic."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from taxtiers.config.schema import Bracket


@dataclass(frozen=True)
class BracketSlice:
    """The part of an income that falls inside one bracket."""

    bracket: Bracket
    taxed_amount: float
    tax: float


def calc_bracket_tax(income: float, brackets: Sequence[Bracket]) -> float:
    """Compute progressive tax on ``income``.

    Each bracket whose lower bound is below ``income`` contributes
    ``rate * (min(income, upper) - lower)``. Non-positive income yields 0.
    """
    if income <= 0:
        return 0.0
    tax = 0.0
    for bracket in brackets:
        if bracket.min >= income:
            break
        tax += (min(income, bracket.upper) - bracket.min) * bracket.rate
    return tax


def calc_bracket_tax_vectorized(
    incomes: NDArray[np.floating[Any]],
    brackets: Sequence[Bracket],
) -> NDArray[np.floating[Any]]:
    """Vectorized progressive bracket computation across many incomes."""
    tax: NDArray[np.floating[Any]] = np.zeros_like(incomes, dtype=float)
    for bracket in brackets:
        taxable_in_bracket = np.minimum(incomes, bracket.upper) - bracket.min
        tax += np.maximum(taxable_in_bracket, 0.0) * bracket.rate
    return tax


def bracket_breakdown(income: float, brackets: Sequence[Bracket]) -> list[BracketSlice]:
    """Per-bracket slices of the tax on ``income``, lowest tier first.

    Only brackets that actually tax some income are returned.
    """
    slices: list[BracketSlice] = []
    for bracket in brackets:
        if bracket.min >= income:
            break
        amount = min(income, bracket.upper) - bracket.min
        slices.append(BracketSlice(bracket=bracket, taxed_amount=amount, tax=amount * bracket.rate))
    return slices


def marginal_rate(income: float, brackets: Sequence[Bracket]) -> float:
    """Return the marginal rate that applies to the next dollar of ``income``."""
    for bracket in brackets:
        if income < bracket.upper:
            return bracket.rate
    # Unreachable for a well-formed table; return top rate
    return brackets[-1].rate
