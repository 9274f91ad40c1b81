"""Tests for wizard step state."""

from __future__ import annotations

from app.components.wizard import STEPS, WizardState, can_proceed
from taxtiers.config.schema import FilingInput


class TestWizardState:
    def test_starts_at_filing(self) -> None:
        assert WizardState().step_name == "filing"

    def test_next_clamps_at_results(self) -> None:
        state = WizardState()
        for _ in range(10):
            state = state.next()
        assert state.step_name == "results"
        assert state.current_step == len(STEPS) - 1

    def test_back_clamps_at_start(self) -> None:
        assert WizardState().back().current_step == 0

    def test_toggle_panels(self) -> None:
        state = WizardState().toggle("current").toggle("risks")
        assert state.is_expanded("current")
        assert state.is_expanded("risks")
        state = state.toggle("current")
        assert not state.is_expanded("current")
        assert state.is_expanded("risks")

    def test_immutable_transitions(self) -> None:
        state = WizardState()
        state.next()
        assert state.current_step == 0


class TestCanProceed:
    def test_income_step_needs_income(self) -> None:
        state = WizardState(current_step=STEPS.index("income"))
        assert not can_proceed(state, FilingInput())
        assert can_proceed(state, FilingInput(annual_income=1))

    def test_other_steps_always_proceed(self) -> None:
        for name in ("filing", "employment", "results"):
            assert can_proceed(WizardState(current_step=STEPS.index(name)), FilingInput())
