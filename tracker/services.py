from typing import Any, Callable, Dict, Sequence

from tracker.domain import Snapshot
from tracker.logging_setup import get_logger
from tracker.summary import (
    BUDGET_CALCULATORS,
    BUDGET_DEFAULTS,
    DASHBOARD_CALCULATORS,
    DASHBOARD_DEFAULTS,
    SAVINGS_CALCULATORS,
    SAVINGS_DEFAULTS,
    DashboardSummary,
)

logger = get_logger(__name__)

Calculator = Callable[[Snapshot, Any, Dict[str, Any]], Dict[str, Any]]


class ReportService:
    """Facade running a view's calculators over a store snapshot.

    calculators: sequence of functions taking (snapshot, today, acc) -> dict (partial results)
    defaults: value for every result key, kept when the calculator producing it fails
    """

    def __init__(self, name: str, calculators: Sequence[Calculator], defaults: Dict[str, Any]):
        self.name = name
        self.calculators = calculators
        self.defaults = defaults

    def run(self, snapshot: Snapshot, today) -> Dict[str, Any]:
        """Run calculators in order and return the report with intermediate steps."""
        report = {
            "report": self.name,
            "steps": [],
            "errors": [],
            "result": {},
        }

        acc = dict(self.defaults)
        for calc in self.calculators:
            calc_name = getattr(calc, "__name__", str(calc))
            try:
                out = calc(snapshot, today, acc)
            except Exception as e:
                logger.exception("Calculator %s failed in %s report", calc_name, self.name)
                report["errors"].append({"calculator": calc_name, "message": f"calculator_error: {e}"})
                continue
            report["steps"].append({"calculator": calc_name, "output": out})
            if isinstance(out, dict):
                acc.update(out)

        report["result"] = acc
        return report


def dashboard_service() -> ReportService:
    return ReportService("dashboard", DASHBOARD_CALCULATORS, DASHBOARD_DEFAULTS)


def budget_service() -> ReportService:
    return ReportService("budgets", BUDGET_CALCULATORS, BUDGET_DEFAULTS)


def savings_service() -> ReportService:
    return ReportService("savings", SAVINGS_CALCULATORS, SAVINGS_DEFAULTS)


def dashboard_view(snapshot: Snapshot, today) -> DashboardSummary:
    return DashboardSummary(**dashboard_service().run(snapshot, today)["result"])
