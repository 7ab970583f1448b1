"""
Tests for the side-by-side scenario comparison.
"""

import pytest

from dealcalc.calculations import calculate_all
from dealcalc.models import CalculatorScenario, IncomeInputs, PurchaseCostsInputs
from dealcalc.services.comparison import COMPARISON_METRICS, compare_scenarios


def _scenario(scenario_id, inputs, as_of):
    return CalculatorScenario(
        id=scenario_id,
        name=scenario_id.title(),
        inputs=inputs,
        outputs=calculate_all(inputs, as_of=as_of),
    )


def _metric(comparison, key):
    return next(m for m in comparison.metrics if m.key == key)


class TestCompareScenarios:
    """Test ranking and thresholds across scenarios."""

    def test_requires_two(self, rental_inputs, as_of):
        with pytest.raises(ValueError):
            compare_scenarios([_scenario("a", rental_inputs, as_of)])

    def test_every_metric_reported(self, rental_inputs, as_of):
        comparison = compare_scenarios(
            [_scenario("a", rental_inputs, as_of), _scenario("b", rental_inputs, as_of)]
        )
        assert [m.key for m in comparison.metrics] == [m.key for m in COMPARISON_METRICS]
        assert [s.id for s in comparison.scenarios] == ["a", "b"]

    def test_ties_keep_original_order(self, rental_inputs, as_of):
        comparison = compare_scenarios(
            [
                _scenario("b", rental_inputs, as_of),
                _scenario("a", rental_inputs, as_of),
                _scenario("c", rental_inputs, as_of),
            ]
        )
        for metric in comparison.metrics:
            assert metric.ranking == ["b", "a", "c"]
            assert metric.best_scenario_ids == ["b", "a", "c"]

    def test_higher_cashflow_ranks_first(self, rental_inputs, as_of):
        richer = rental_inputs.model_copy(update={"income": IncomeInputs(monthly_rent=2600)})
        comparison = compare_scenarios(
            [_scenario("base", rental_inputs, as_of), _scenario("richer", richer, as_of)]
        )
        cashflow = _metric(comparison, "monthlyCashflow")
        assert cashflow.higher_is_better
        assert cashflow.ranking == ["richer", "base"]
        assert cashflow.best_scenario_ids == ["richer"]

    def test_lower_entry_fee_ranks_first(self, rental_inputs, as_of):
        pricier = rental_inputs.model_copy(
            update={
                "purchase_costs": PurchaseCostsInputs(purchase_price=150000, closing_costs=30000)
            }
        )
        comparison = compare_scenarios(
            [_scenario("pricier", pricier, as_of), _scenario("base", rental_inputs, as_of)]
        )
        entry_fee = _metric(comparison, "totalEntryFee")
        assert not entry_fee.higher_is_better
        assert entry_fee.ranking == ["base", "pricier"]
        assert entry_fee.passes_threshold == [False, True]

    def test_checklist_summary(self, rental_inputs, as_of):
        broke = rental_inputs.model_copy(update={"income": IncomeInputs(monthly_rent=0)})
        comparison = compare_scenarios(
            [_scenario("base", rental_inputs, as_of), _scenario("broke", broke, as_of)]
        )
        base, broke_summary = comparison.scenarios
        assert base.cashflow_over400
        assert not broke_summary.cashflow_over400
        assert _metric(comparison, "monthlyCashflow").passes_threshold == [True, False]
        assert _metric(comparison, "flipProfit").passes_threshold == [None, None]

    def test_wire_names(self, rental_inputs, as_of):
        comparison = compare_scenarios(
            [_scenario("a", rental_inputs, as_of), _scenario("b", rental_inputs, as_of)]
        )
        data = comparison.model_dump(by_alias=True)
        assert "bestScenarioIds" in data["metrics"][0]
        assert "dealDecision" in data["scenarios"][0]
