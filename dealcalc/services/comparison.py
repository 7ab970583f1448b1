"""
Side-by-side scenario comparison.

Reads outputs that were already computed and ranks them per metric. No
calculation happens here.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel

from dealcalc.models.outputs import CalculatorOutputs, DealDecision
from dealcalc.models.records import CalculatorScenario
from dealcalc.models.types import WIRE_MODEL_CONFIG


@dataclass(frozen=True)
class ComparisonMetric:
    """A compared output and the direction in which it improves."""

    key: str
    label: str
    group: str
    higher_is_better: bool
    extract: Callable[[CalculatorOutputs], float]
    threshold: Optional[float] = None


COMPARISON_METRICS = (
    ComparisonMetric("mao", "MAO", "acquisition", False,
                     lambda o: o.quick_stats.mao),
    ComparisonMetric("totalEntryFee", "Entry Fee", "acquisition", False,
                     lambda o: o.quick_stats.total_entry_fee, threshold=25000),
    ComparisonMetric("fundingGap", "Funding Gap", "acquisition", False,
                     lambda o: o.quick_stats.funding_gap),
    ComparisonMetric("monthlyCashflow", "Monthly Cashflow", "hold", True,
                     lambda o: o.quick_stats.monthly_cashflow, threshold=400),
    ComparisonMetric("cashOnCashHold", "Cash on Cash", "hold", True,
                     lambda o: o.quick_stats.cash_on_cash_hold),
    ComparisonMetric("totalMonthlyExpenses", "Total Expenses", "hold", False,
                     lambda o: o.totals.total_monthly_expenses),
    ComparisonMetric("wrapCashflow", "Wrap Cashflow", "wrap", True,
                     lambda o: o.quick_stats.wrap_cashflow),
    ComparisonMetric("cashOnCashWrap", "Cash on Cash", "wrap", True,
                     lambda o: o.quick_stats.cash_on_cash_wrap),
    ComparisonMetric("wrapPrincipal", "Wrap Principal", "wrap", False,
                     lambda o: o.loan_calcs.wrap_principal),
    ComparisonMetric("buyerMonthlyPITI", "Buyer PITI", "wrap", False,
                     lambda o: o.loan_calcs.buyer_monthly_piti),
    ComparisonMetric("flipProfit", "Flip Profit", "flip", True,
                     lambda o: o.quick_stats.flip_profit),
    ComparisonMetric("cashOnCashFlip", "Cash on Cash", "flip", True,
                     lambda o: o.quick_stats.cash_on_cash_flip),
)


class MetricComparison(BaseModel):
    model_config = WIRE_MODEL_CONFIG

    key: str
    label: str
    group: str
    higher_is_better: bool
    values: List[float]
    passes_threshold: List[Optional[bool]]
    ranking: List[str]
    best_scenario_ids: List[str]


class ScenarioSummary(BaseModel):
    model_config = WIRE_MODEL_CONFIG

    id: str
    name: str
    deal_decision: DealDecision
    entry_fee_under25k: bool
    cashflow_over400: bool
    ltv_under75: bool
    equity_over15k: bool


class ScenarioComparison(BaseModel):
    model_config = WIRE_MODEL_CONFIG

    scenarios: List[ScenarioSummary]
    metrics: List[MetricComparison]


def _passes(metric: ComparisonMetric, value: float) -> Optional[bool]:
    if metric.threshold is None:
        return None
    if metric.higher_is_better:
        return value >= metric.threshold
    return value <= metric.threshold


def compare_metric(
    metric: ComparisonMetric, scenarios: Sequence[CalculatorScenario]
) -> MetricComparison:
    """
    Rank scenarios on one metric.

    The ranking is a stable sort, so tied scenarios keep their original order.
    """
    values = [metric.extract(s.outputs) for s in scenarios]
    order = sorted(
        range(len(scenarios)),
        key=lambda i: values[i],
        reverse=metric.higher_is_better,
    )
    best_value = values[order[0]]

    return MetricComparison(
        key=metric.key,
        label=metric.label,
        group=metric.group,
        higher_is_better=metric.higher_is_better,
        values=values,
        passes_threshold=[_passes(metric, v) for v in values],
        ranking=[scenarios[i].id for i in order],
        best_scenario_ids=[s.id for s, v in zip(scenarios, values) if v == best_value],
    )


def compare_scenarios(scenarios: Sequence[CalculatorScenario]) -> ScenarioComparison:
    """
    Build the comparison view for two or more scenarios.

    Raises:
        ValueError: If fewer than two scenarios are given
    """
    if len(scenarios) < 2:
        raise ValueError("Comparison requires at least 2 scenarios")

    summaries = [
        ScenarioSummary(
            id=s.id,
            name=s.name,
            deal_decision=s.outputs.deal_checklist.deal_decision,
            entry_fee_under25k=s.outputs.deal_checklist.entry_fee_under25k,
            cashflow_over400=s.outputs.deal_checklist.cashflow_over400,
            ltv_under75=s.outputs.deal_checklist.ltv_under75,
            equity_over15k=s.outputs.deal_checklist.equity_over15k,
        )
        for s in scenarios
    ]

    return ScenarioComparison(
        scenarios=summaries,
        metrics=[compare_metric(m, scenarios) for m in COMPARISON_METRICS],
    )
