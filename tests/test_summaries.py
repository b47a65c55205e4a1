"""Tests for the pure summary queries."""

import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from expense_ledger.models.ledger import (
    BudgetStatus,
    GroupBy,
    SavingsGoal,
    Summary,
)
from expense_ledger.queries import (
    ANNUAL_PALETTE,
    MONTHLY_PALETTE,
    annual_summary,
    available_years,
    budget_progress,
    budget_status,
    chart_data,
    expenses_in_month,
    goal_progress,
    month_label,
    month_total,
    monthly_summary,
    total_saved,
)
from tests.conftest import make_expense


@pytest.fixture
def march_expenses():
    return [
        make_expense(50, "Gastos Necesarios", datetime(2024, 3, 5),
                     sub_category="Alimentos/Supermercado"),
        make_expense(30, "Gastos Necesarios", datetime(2024, 3, 20),
                     sub_category="Ropa"),
        make_expense(20, "Ahorros", datetime(2024, 4, 1),
                     sub_category="Inversiones"),
    ]


class TestMonthlySummary:
    """Tests for monthly_summary."""

    def test_groups_by_main_category(self, march_expenses):
        summary = monthly_summary(march_expenses, 2024, 3, GroupBy.MAIN_CATEGORY)
        assert summary.groups == {"Gastos Necesarios": Decimal("80")}
        assert summary.total == Decimal("80")

    def test_groups_by_subcategory(self, march_expenses):
        summary = monthly_summary(march_expenses, 2024, 3, "subCategory")
        assert summary.groups == {
            "Alimentos/Supermercado": Decimal("50"),
            "Ropa": Decimal("30"),
        }
        assert summary.total == Decimal("80")

    def test_skips_expenses_without_group_key(self, march_expenses):
        march_expenses.append(make_expense(99, "Gastos Fijos", datetime(2024, 3, 9)))
        summary = monthly_summary(march_expenses, 2024, 3, GroupBy.SUB_CATEGORY)
        assert "" not in summary.groups
        assert summary.total == Decimal("80")

    def test_same_month_other_year_is_excluded(self, march_expenses):
        march_expenses.append(make_expense(5, "Ahorros", datetime(2023, 3, 9)))
        summary = monthly_summary(march_expenses, 2024, 3)
        assert summary.total == Decimal("80")

    def test_empty_month(self, march_expenses):
        assert monthly_summary(march_expenses, 2024, 1) == Summary()

    def test_is_deterministic(self, march_expenses):
        first = monthly_summary(march_expenses, 2024, 3)
        second = monthly_summary(march_expenses, 2024, 3)
        assert first == second

    def test_rejects_invalid_month(self, march_expenses):
        with pytest.raises(ValueError):
            monthly_summary(march_expenses, 2024, 13)
        with pytest.raises(ValueError):
            monthly_summary(march_expenses, 2024, 0)

    def test_aware_dates_are_converted_to_local_time(self):
        moment = datetime(2024, 3, 15, 12, 0, tzinfo=timezone(timedelta(hours=-5)))
        expenses = [make_expense(10, "Ahorros", moment)]
        local = moment.astimezone()
        assert len(expenses_in_month(expenses, local.year, local.month)) == 1


class TestAnnualSummary:

    def test_groups_by_main_category_for_the_year(self, march_expenses):
        march_expenses.append(make_expense(7, "Ahorros", datetime(2023, 12, 31)))
        summary = annual_summary(march_expenses, 2024)
        assert summary.groups == {
            "Gastos Necesarios": Decimal("80"),
            "Ahorros": Decimal("20"),
        }
        assert summary.total == Decimal("100")


class TestAvailableYears:

    def test_descending_and_unique(self, march_expenses):
        march_expenses.append(make_expense(7, "Ahorros", datetime(2022, 6, 1)))
        march_expenses.append(make_expense(7, "Ahorros", datetime(2023, 6, 1)))
        assert available_years(march_expenses) == [2024, 2023, 2022]

    def test_falls_back_to_current_year(self):
        assert available_years([], today=date(2026, 10, 19)) == [2026]
        assert available_years([]) == [date.today().year]


class TestChartData:
    """Tests for chart_data projection."""

    def test_filters_non_positive_and_assigns_colors_in_order(self):
        groups = {
            "Gastos Fijos": Decimal("10"),
            "Vacío": Decimal("0"),
            "Ahorros": Decimal("5"),
        }
        slices = chart_data(groups)
        assert [s.label for s in slices] == ["Gastos Fijos", "Ahorros"]
        assert [s.color_index for s in slices] == [0, 1]
        assert slices[1].color == MONTHLY_PALETTE[1]
        assert slices[1].value == Decimal("5")

    def test_colors_wrap_around_palette(self):
        palette = ("#000", "#fff")
        groups = {f"c{i}": Decimal(i + 1) for i in range(3)}
        slices = chart_data(groups, palette=palette)
        assert [s.color for s in slices] == ["#000", "#fff", "#000"]
        assert slices[2].color_index == 0

    def test_annual_palette(self):
        slices = chart_data({"Ahorros": Decimal("1")}, palette=ANNUAL_PALETTE)
        assert slices[0].color == "#673ab7"


class TestMonthHelpers:

    def test_month_label(self):
        assert month_label(2024, 3) == "Marzo 2024"
        assert month_label(2025, 12) == "Diciembre 2025"

    def test_month_total_counts_every_category(self, march_expenses):
        assert month_total(march_expenses, datetime(2024, 3, 31)) == Decimal("80")
        assert month_total(march_expenses, datetime(2024, 4, 2)) == Decimal("20")


class TestBudgetProgress:
    """Tests for budget_progress."""

    def test_case_insensitive_category_match(self):
        expenses = [make_expense(40, "ahorros", datetime(2024, 3, 10))]
        progress = budget_progress(
            "Ahorros", Decimal("100"), expenses, datetime(2024, 3, 15)
        )
        assert progress.spent == Decimal("40")
        assert progress.remaining == Decimal("60")
        assert progress.percentage == Decimal("40")
        assert progress.status == BudgetStatus.NORMAL

    def test_no_matching_expenses(self, march_expenses):
        progress = budget_progress(
            "gastos fijos", Decimal("300"), march_expenses, datetime(2024, 3, 15)
        )
        assert progress.spent == Decimal("0")
        assert progress.percentage == Decimal("0")
        assert progress.remaining == Decimal("300")

    def test_only_current_month_counts(self, march_expenses):
        progress = budget_progress(
            "gastos necesarios", Decimal("100"), march_expenses, datetime(2024, 4, 2)
        )
        assert progress.spent == Decimal("0")

    def test_overspend_gives_negative_remaining(self, march_expenses):
        progress = budget_progress(
            "gastos necesarios", Decimal("50"), march_expenses, datetime(2024, 3, 25)
        )
        assert progress.remaining == Decimal("-30")
        assert progress.percentage == Decimal("160")
        assert progress.status == BudgetStatus.OVER_BUDGET
        assert progress.is_over_budget

    def test_zero_amount_does_not_divide(self, march_expenses):
        progress = budget_progress(
            "gastos necesarios", Decimal("0"), march_expenses, datetime(2024, 3, 25)
        )
        assert progress.percentage == Decimal("0")

    @pytest.mark.parametrize("percentage, threshold, expected", [
        (Decimal("100"), 75, BudgetStatus.OVER_BUDGET),
        (Decimal("99.9"), 75, BudgetStatus.WARNING),
        (Decimal("75"), 75, BudgetStatus.WARNING),
        (Decimal("80"), 85, BudgetStatus.NORMAL),
        (Decimal("74.99"), 75, BudgetStatus.NORMAL),
    ])
    def test_budget_status_bands(self, percentage, threshold, expected):
        assert budget_status(percentage, threshold) == expected


class TestSavingsQueries:

    def test_goal_progress_is_unclamped(self):
        goal = SavingsGoal(
            name="Trip",
            target_amount=Decimal("100"),
            current_amount=Decimal("150"),
        )
        assert goal_progress(goal) == Decimal("150")

    def test_goal_progress_zero_target(self):
        goal = SavingsGoal(name="Legacy", target_amount=Decimal("0"))
        assert goal_progress(goal) == Decimal("0")

    def test_total_saved(self):
        goals = [
            SavingsGoal(name="a", target_amount=Decimal("10"), current_amount=Decimal("3")),
            SavingsGoal(name="b", target_amount=Decimal("10"), current_amount=Decimal("4.5")),
        ]
        assert total_saved(goals) == Decimal("7.5")
        assert total_saved([]) == Decimal("0")
