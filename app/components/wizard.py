"""Wizard step state, kept apart from the tax computation."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from taxtiers.config.schema import FilingInput

STEPS: tuple[str, ...] = ("filing", "employment", "income", "results")


@dataclass(frozen=True)
class WizardState:
    """Current step and which result panels are expanded."""

    current_step: int = 0
    expanded_panels: frozenset[str] = field(default_factory=frozenset)

    @property
    def step_name(self) -> str:
        return STEPS[self.current_step]

    def next(self) -> WizardState:
        return replace(self, current_step=min(self.current_step + 1, len(STEPS) - 1))

    def back(self) -> WizardState:
        return replace(self, current_step=max(self.current_step - 1, 0))

    def toggle(self, panel: str) -> WizardState:
        return replace(self, expanded_panels=self.expanded_panels ^ {panel})

    def is_expanded(self, panel: str) -> bool:
        return panel in self.expanded_panels


def can_proceed(state: WizardState, filing: FilingInput) -> bool:
    """Whether the current step has enough input to move on.

    Filing status and employment type always have a value after coercion,
    so only the income step can block.
    """
    if state.step_name == "income":
        return filing.annual_income > 0
    return True
