"""Tests for the tax estimator derivations."""

from __future__ import annotations

import itertools

import pytest

from taxtiers.config.schema import EMPLOYMENT_TYPES, FILING_STATUSES, FilingInput
from taxtiers.core.estimator import TaxEstimator


class TestCurrentTax:
    def test_single_w2_65k(self, estimator: TaxEstimator, single_w2: FilingInput) -> None:
        current = estimator.derive_current_tax(single_w2)
        assert current.taxable_income == pytest.approx(50_400)
        assert current.tax_before_credits == pytest.approx(6_141)
        assert current.total_credits == 0
        assert current.actual_tax == pytest.approx(6_141)
        assert current.se_tax == 0
        assert current.marginal_rate == 0.22
        assert current.effective_rate == pytest.approx(6_141 / 65_000)

    def test_two_children(self, estimator: TaxEstimator, single_w2: FilingInput) -> None:
        filing = single_w2.model_copy(update={"children_under_17": 2})
        current = estimator.derive_current_tax(filing)
        assert current.child_credit == 4_000
        assert current.actual_tax == pytest.approx(2_141)

    def test_other_dependents(self, estimator: TaxEstimator, single_w2: FilingInput) -> None:
        filing = single_w2.model_copy(update={"children_under_17": 1, "other_dependents": 3})
        current = estimator.derive_current_tax(filing)
        assert current.total_credits == 3_500
        assert current.actual_tax == pytest.approx(6_141 - 3_500)

    def test_credits_floor_at_zero(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(annual_income=30_000, children_under_17=5)
        assert estimator.derive_current_tax(filing).actual_tax == 0.0

    def test_self_employed_100k(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(employment_type="self", annual_income=100_000)
        current = estimator.derive_current_tax(filing)
        assert current.se_net_income == pytest.approx(92_350)
        assert current.se_tax == pytest.approx(14_129.55)
        assert current.se_deduction == pytest.approx(7_064.775)
        assert current.taxable_income == pytest.approx(78_335.225)
        assert current.tax_before_credits == pytest.approx(5_426 + 31_185.225 * 0.22)

    def test_both_gets_se_deduction(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(employment_type="both", annual_income=100_000)
        assert estimator.derive_current_tax(filing).se_deduction == pytest.approx(7_064.775)

    def test_pre_tax_reduces_taxable(self, estimator: TaxEstimator, single_w2: FilingInput) -> None:
        filing = single_w2.model_copy(update={"pre_tax_contributions": 5_000})
        assert estimator.derive_current_tax(filing).taxable_income == pytest.approx(45_400)

    def test_married_uses_own_table(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(filing_status="married_jointly", annual_income=100_000)
        assert estimator.derive_current_tax(filing).actual_tax == pytest.approx(8_032)

    def test_zero_income(self, estimator: TaxEstimator) -> None:
        current = estimator.derive_current_tax(FilingInput())
        assert current.taxable_income == 0
        assert current.actual_tax == 0
        assert current.effective_rate == 0

    def test_unknown_status_falls_back_to_single(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(filing_status="widowed", annual_income=65_000)
        assert estimator.derive_current_tax(filing).actual_tax == pytest.approx(6_141)


class TestWithholding:
    def test_default_multiplier(self, estimator: TaxEstimator) -> None:
        estimate = estimator.derive_withholding_estimate(FilingInput(), 6_141)
        assert estimate.source == "default"
        assert estimate.estimated == pytest.approx(7_062.15)
        assert estimate.overpayment == pytest.approx(921.15)
        assert estimate.overpayment_notable

    def test_custom_biweekly_for_w2(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(custom_withholding=300, use_advanced=True)
        estimate = estimator.derive_withholding_estimate(filing, 6_141)
        assert estimate.source == "custom"
        assert estimate.estimated == pytest.approx(7_800)
        assert estimate.overpayment == pytest.approx(1_659)

    def test_custom_quarterly_for_self(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(employment_type="self", custom_withholding=4_000, use_advanced=True)
        assert estimator.derive_withholding_estimate(filing, 0).estimated == pytest.approx(16_000)

    def test_custom_quarterly_for_both(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(employment_type="both", custom_withholding=1_000, use_advanced=True)
        assert estimator.derive_withholding_estimate(filing, 0).estimated == pytest.approx(4_000)

    def test_custom_ignored_without_flag(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(custom_withholding=300)
        estimate = estimator.derive_withholding_estimate(filing, 1_000)
        assert estimate.source == "default"
        assert estimate.estimated == pytest.approx(1_150)

    def test_underpaying_has_no_overpayment(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(custom_withholding=100, use_advanced=True)
        estimate = estimator.derive_withholding_estimate(filing, 6_141)
        assert estimate.overpayment == 0.0
        assert not estimate.overpayment_notable

    def test_small_overpayment_not_notable(self, estimator: TaxEstimator) -> None:
        estimate = estimator.derive_withholding_estimate(FilingInput(), 500)
        assert estimate.overpayment == pytest.approx(75)
        assert not estimate.overpayment_notable


class TestOptimizeScenario:
    def test_single_w2_65k(self, estimator: TaxEstimator, single_w2: FilingInput) -> None:
        baseline = estimator.derive_baseline(single_w2)
        scenario = estimator.derive_optimize_scenario(single_w2, baseline)
        assert scenario.kind == "optimize"
        assert scenario.max_pre_tax == pytest.approx(13_000)
        assert scenario.additional_pre_tax == pytest.approx(13_000)
        assert scenario.taxable_income == pytest.approx(37_400)
        assert scenario.tax == pytest.approx(4_256)
        assert scenario.tax_reduction == pytest.approx(1_885)
        assert scenario.savings == pytest.approx(2_806.15)
        assert scenario.savings_per_period == pytest.approx(2_806.15 / 26)

    def test_w2_flat_cap(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(annual_income=500_000)
        assert estimator.max_pre_tax(filing) == 27_150

    def test_self_employed_cap(self, estimator: TaxEstimator) -> None:
        assert estimator.max_pre_tax(FilingInput(employment_type="self", annual_income=100_000)) == (
            pytest.approx(25_000)
        )
        assert estimator.max_pre_tax(FilingInput(employment_type="self", annual_income=1e6)) == 70_150

    def test_both_takes_larger_cap(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(employment_type="both", annual_income=85_000)
        assert estimator.max_pre_tax(filing) == pytest.approx(21_250)

    def test_self_employed_100k(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(employment_type="self", annual_income=100_000)
        scenario = estimator.derive_optimize_scenario(filing, estimator.derive_baseline(filing))
        assert scenario.taxable_income == pytest.approx(53_335.225)
        assert scenario.tax == pytest.approx(5_426 + 6_185.225 * 0.22)
        # Quarterly for self-employed
        assert scenario.savings_per_period == pytest.approx(scenario.savings / 4)

    def test_contribution_already_at_max(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(annual_income=65_000, pre_tax_contributions=13_000)
        baseline = estimator.derive_baseline(filing)
        scenario = estimator.derive_optimize_scenario(filing, baseline)
        assert scenario.additional_pre_tax == 0
        assert scenario.tax_reduction == pytest.approx(0)
        assert scenario.savings == pytest.approx(baseline.withholding.overpayment)

    def test_contribution_above_max_replaced(self, estimator: TaxEstimator) -> None:
        """The scenario uses the maximum in place of the filer's figure, even if lower."""
        filing = FilingInput(annual_income=65_000, pre_tax_contributions=20_000)
        baseline = estimator.derive_baseline(filing)
        scenario = estimator.derive_optimize_scenario(filing, baseline)
        assert scenario.tax > baseline.current.actual_tax
        assert scenario.tax_reduction < 0


class TestRedirectScenario:
    def test_single_w2_65k(self, estimator: TaxEstimator, single_w2: FilingInput) -> None:
        baseline = estimator.derive_baseline(single_w2)
        scenario = estimator.derive_redirect_scenario(single_w2, baseline)
        assert scenario.charitable_deduction == pytest.approx(6_500)
        assert scenario.taxable_income == pytest.approx(30_900)
        assert scenario.tax == pytest.approx(3_476)
        assert scenario.savings == pytest.approx(2_665 + 921.15)


class TestWithholdScenario:
    def test_w2_risk(self, estimator: TaxEstimator, single_w2: FilingInput) -> None:
        baseline = estimator.derive_baseline(single_w2)
        scenario = estimator.derive_withhold_scenario(single_w2, baseline)
        assert scenario.tax == pytest.approx(6_141)
        assert scenario.savings == pytest.approx(7_062.15)
        assert scenario.savings_per_period == pytest.approx(7_062.15 / 26)
        assert scenario.risk is not None
        assert scenario.risk.underpayment_penalty == pytest.approx(491.28)
        assert scenario.risk.false_exemption_penalty == 500
        assert scenario.risk.total == pytest.approx(991.28)
        assert scenario.risk.worst_case == pytest.approx(6_141 + 991.28)

    def test_self_employed_has_no_exemption_penalty(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(employment_type="self", annual_income=100_000)
        scenario = estimator.derive_withhold_scenario(filing, estimator.derive_baseline(filing))
        assert scenario.risk is not None
        assert scenario.risk.false_exemption_penalty == 0
        assert scenario.risk.total == pytest.approx(scenario.tax * 0.08)

    def test_both_has_exemption_penalty(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(employment_type="both", annual_income=100_000)
        scenario = estimator.derive_withhold_scenario(filing, estimator.derive_baseline(filing))
        assert scenario.risk is not None
        assert scenario.risk.false_exemption_penalty == 500

    def test_withholds_custom_amount(self, estimator: TaxEstimator) -> None:
        filing = FilingInput(annual_income=65_000, custom_withholding=300, use_advanced=True)
        scenario = estimator.derive_withhold_scenario(filing, estimator.derive_baseline(filing))
        assert scenario.savings == pytest.approx(7_800)
        assert scenario.savings_per_period == pytest.approx(300)


class TestEstimate:
    def test_complete_record(self, estimator: TaxEstimator, single_w2: FilingInput) -> None:
        result = estimator.estimate(single_w2)
        assert result.tax_year == 2024
        assert result.input == single_w2
        assert [s.kind for s in result.scenarios] == ["optimize", "redirect", "withhold"]
        assert len(result.impact) == 3

    def test_idempotent(self, estimator: TaxEstimator, single_w2: FilingInput) -> None:
        assert estimator.estimate(single_w2) == estimator.estimate(single_w2)

    def test_fresh_estimators_agree(self, single_w2: FilingInput) -> None:
        assert TaxEstimator().estimate(single_w2) == TaxEstimator().estimate(single_w2)

    def test_zero_income_is_valid(self, estimator: TaxEstimator) -> None:
        result = estimator.estimate(FilingInput())
        assert result.current.actual_tax == 0
        assert result.optimize.savings == 0
        assert result.withhold.risk is not None
        assert result.withhold.risk.total == 500

    @pytest.mark.parametrize(
        ("status", "employment"), list(itertools.product(FILING_STATUSES, EMPLOYMENT_TYPES))
    )
    def test_tiers_ordered(self, estimator: TaxEstimator, status: str, employment: str) -> None:
        """Each tier adds deductions, so tax never rises from baseline to redirect."""
        for income in (0, 15_000, 40_000, 65_000, 120_000, 300_000, 800_000):
            for kids in (0, 2):
                filing = FilingInput(
                    filing_status=status,
                    employment_type=employment,
                    annual_income=income,
                    children_under_17=kids,
                )
                result = estimator.estimate(filing)
                assert result.redirect.tax <= result.optimize.tax + 1e-9
                assert result.optimize.tax <= result.current.actual_tax + 1e-9
                assert result.optimize.savings >= -1e-9
                assert result.redirect.savings >= result.optimize.savings - 1e-9

    def test_logs_debug_summary(
        self,
        estimator: TaxEstimator,
        single_w2: FilingInput,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        import logging

        with caplog.at_level(logging.DEBUG, logger="taxtiers.core.estimator"):
            estimator.estimate(single_w2)
        assert "single/w2" in caplog.text


class TestPerPeriod:
    def test_w2_biweekly(self, estimator: TaxEstimator) -> None:
        assert estimator.per_period(2_600, "w2") == pytest.approx(100)

    @pytest.mark.parametrize("employment", ["self", "both"])
    def test_others_quarterly(self, estimator: TaxEstimator, employment: str) -> None:
        assert estimator.per_period(2_600, employment) == pytest.approx(650)
