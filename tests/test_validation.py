"""Tests for ledger input validation."""

import pytest
from decimal import Decimal

from expense_ledger.catalog import CategoryCatalog
from expense_ledger.errors import ValidationError
from expense_ledger.validation import LedgerValidator, parse_amount


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize("value, expected", [
        (Decimal("50.00"), Decimal("50.00")),
        (40, Decimal("40")),
        (12.5, Decimal("12.5")),
        ("  7.25 ", Decimal("7.25")),
    ])
    def test_accepts_positive_numbers(self, value, expected):
        amount, issues = parse_amount(value)
        assert amount == expected
        assert issues == []

    @pytest.mark.parametrize("value", ["", "abc", None, True, float("nan"), "inf", [1]])
    def test_rejects_non_numbers(self, value):
        amount, issues = parse_amount(value)
        assert amount is None
        assert issues[0].issue_type == "invalid_format"

    @pytest.mark.parametrize("value", [0, "0", -1, Decimal("-0.01")])
    def test_rejects_non_positive(self, value):
        amount, issues = parse_amount(value)
        assert amount is None
        assert issues[0].issue_type == "invalid_value"

    def test_field_name_is_reported(self):
        _, issues = parse_amount("-3", field="target_amount")
        assert issues[0].field == "target_amount"
        assert issues[0].message == "Target amount must be greater than zero"


class TestExpenseValidation:
    """Tests for expense validation rules."""

    def setup_method(self):
        self.validator = LedgerValidator()

    def test_blank_description_falls_back_to_subcategory(self):
        fields = self.validator.validate_new_expense(
            "20", "   ", "gastos fijos", "servicios (agua)"
        )
        assert fields.description == "Servicios (Agua)"
        assert fields.main_category == "Gastos Fijos"
        assert fields.sub_category == "Servicios (Agua)"
        assert fields.amount == Decimal("20")

    def test_description_and_subcategory_both_blank(self):
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate_new_expense("20", "", "Ahorros", "")
        assert "description" in exc_info.value.fields

    def test_all_issues_are_reported_together(self):
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate_new_expense("-1", "x", "Ingresos", "")
        assert exc_info.value.fields == ["amount", "main_category"]

    def test_unknown_subcategory(self):
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate_new_expense("5", "x", "Ahorros", "Viajes")
        assert exc_info.value.issues[0].issue_type == "unknown_category"

    def test_new_expense_needs_subcategory_when_category_has_them(self):
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate_new_expense("5", "Coffee", "Gastos Ocasionales", "")
        assert exc_info.value.fields == ["sub_category"]

    def test_category_without_subcategories(self):
        validator = LedgerValidator(CategoryCatalog({"Varios": []}))
        fields = validator.validate_new_expense("5", "Coffee", "varios", "")
        assert fields.main_category == "Varios"
        assert fields.sub_category == ""

    def test_edit_requires_description(self):
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate_expense_edit("5", "", "Ahorros", "Inversiones")
        assert exc_info.value.fields == ["description"]

    def test_edit_allows_empty_subcategory(self):
        fields = self.validator.validate_expense_edit("5", "Bonos", "Ahorros", "")
        assert fields.sub_category == ""
        assert fields.description == "Bonos"


class TestOtherValidation:

    def setup_method(self):
        self.validator = LedgerValidator()

    def test_budget(self):
        assert self.validator.validate_budget(" ahorros ", "100") == (
            "Ahorros", Decimal("100")
        )

    def test_budget_rejects_blank_and_unknown(self):
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate_budget("", 0)
        assert exc_info.value.fields == ["category", "amount"]
        with pytest.raises(ValidationError):
            self.validator.validate_budget("Ingresos", 10)

    def test_goal(self):
        assert self.validator.validate_goal(" Trip ", 1000) == ("Trip", Decimal("1000"))
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate_goal("", "-5")
        assert exc_info.value.fields == ["name", "target_amount"]

    def test_contribution(self):
        assert self.validator.validate_contribution("250") == Decimal("250")
        with pytest.raises(ValidationError):
            self.validator.validate_contribution(0)

    def test_currency_symbol(self):
        assert self.validator.validate_currency_symbol(" € ") == "€"
        with pytest.raises(ValidationError):
            self.validator.validate_currency_symbol("  ")

    def test_error_message_joins_issues(self):
        with pytest.raises(ValidationError, match="Enter a name for the goal"):
            self.validator.validate_goal("", 10)
