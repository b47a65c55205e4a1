"""
Input Validation

DESIGN DECISION: Every mutating ledger operation validates its input
here before any storage access, so rejected input never leaves a
half-written collection behind.

All problems in one call are collected and reported together
(as ValidationIssue objects) rather than stopping at the first one.

IMPORTANT: Validation NEVER silently fixes issues. The only rewrites it
performs are documented normalisations: trimming whitespace, using the
catalog's canonical spelling of a category, and falling back to the
subcategory when an expense has no description.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, NamedTuple, Optional

from expense_ledger.catalog import DEFAULT_CATALOG, CategoryCatalog
from expense_ledger.errors import ValidationError
from expense_ledger.models.ledger import ValidationIssue


class ExpenseFields(NamedTuple):
    """Validated, normalised expense input."""
    amount: Decimal
    description: str
    main_category: str
    sub_category: str


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def parse_amount(
    value: Any,
    field: str = "amount",
) -> tuple[Optional[Decimal], list[ValidationIssue]]:
    """
    Parse a user-supplied amount into a positive Decimal.

    Accepts Decimal, int, float and numeric strings. Booleans, blanks,
    NaN/infinity and values <= 0 are rejected.

    Returns: (amount_or_None, list_of_issues)
    """
    amount: Optional[Decimal] = None

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)) and not isinstance(value, bool):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            amount = None

    if amount is None or not amount.is_finite():
        return None, [ValidationIssue(
            field=field,
            issue_type="invalid_format",
            message=f"{field.replace('_', ' ').capitalize()} must be a number",
            suggested_fix="Enter an amount such as 50.00",
        )]

    if amount <= 0:
        return None, [ValidationIssue(
            field=field,
            issue_type="invalid_value",
            message=f"{field.replace('_', ' ').capitalize()} must be greater than zero",
        )]

    return amount, []


class LedgerValidator:
    """Validates ledger input against the category catalog."""

    def __init__(self, catalog: Optional[CategoryCatalog] = None):
        self._catalog = catalog or DEFAULT_CATALOG

    @property
    def catalog(self) -> CategoryCatalog:
        return self._catalog

    def _check_categories(
        self,
        main_category: Any,
        sub_category: Any,
        require_subcategory: bool,
    ) -> tuple[str, str, list[ValidationIssue]]:
        issues = []
        main = _text(main_category)
        sub = _text(sub_category)

        canonical_main = self._catalog.resolve_primary(main) if main else None
        if canonical_main is None:
            issues.append(ValidationIssue(
                field="main_category",
                issue_type="missing" if not main else "unknown_category",
                message=(
                    "A main category is required" if not main
                    else f"Unknown main category: {main}"
                ),
                suggested_fix="Pick one of: " + ", ".join(self._catalog.primary_categories()),
            ))
            return main, sub, issues

        subcategories = self._catalog.subcategories_of(canonical_main)
        if sub:
            canonical_sub = self._catalog.resolve_subcategory(canonical_main, sub)
            if canonical_sub is None:
                issues.append(ValidationIssue(
                    field="sub_category",
                    issue_type="unknown_category",
                    message=f"{sub} is not a subcategory of {canonical_main}",
                    suggested_fix="Pick one of: " + ", ".join(subcategories),
                ))
            else:
                sub = canonical_sub
        elif require_subcategory and subcategories:
            issues.append(ValidationIssue(
                field="sub_category",
                issue_type="missing",
                message=f"A subcategory of {canonical_main} is required",
            ))

        return canonical_main, sub, issues

    def validate_new_expense(
        self,
        amount: Any,
        description: Any,
        main_category: Any,
        sub_category: Any,
    ) -> ExpenseFields:
        """
        Validate input for a new expense.

        A blank description is allowed when a subcategory is given;
        the subcategory then becomes the description.
        """
        parsed, issues = parse_amount(amount)

        desc = _text(description)
        sub = _text(sub_category)
        if not desc and not sub:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Enter a description or select a subcategory",
            ))

        main, sub, category_issues = self._check_categories(
            main_category, sub_category, require_subcategory=True
        )
        issues.extend(category_issues)

        if issues:
            raise ValidationError(issues)
        return ExpenseFields(parsed, desc or sub, main, sub)

    def validate_expense_edit(
        self,
        amount: Any,
        description: Any,
        main_category: Any,
        sub_category: Any,
    ) -> ExpenseFields:
        """Validate input for editing an expense; description is mandatory."""
        parsed, issues = parse_amount(amount)

        desc = _text(description)
        if not desc:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Enter a description",
            ))

        main, sub, category_issues = self._check_categories(
            main_category, sub_category, require_subcategory=False
        )
        issues.extend(category_issues)

        if issues:
            raise ValidationError(issues)
        return ExpenseFields(parsed, desc, main, sub)

    def validate_budget(self, category: Any, amount: Any) -> tuple[str, Decimal]:
        """
        Validate a budget entry.

        Returns: (canonical_category, amount)
        """
        issues = []
        name = _text(category)
        canonical = None
        if not name:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Select a category for the budget",
            ))
        else:
            canonical = self._catalog.resolve_primary(name)
            if canonical is None:
                issues.append(ValidationIssue(
                    field="category",
                    issue_type="unknown_category",
                    message=f"Unknown category: {name}",
                ))

        parsed, amount_issues = parse_amount(amount)
        issues.extend(amount_issues)

        if issues:
            raise ValidationError(issues)
        return canonical, parsed

    def validate_goal(self, name: Any, target_amount: Any) -> tuple[str, Decimal]:
        issues = []
        goal_name = _text(name)
        if not goal_name:
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Enter a name for the goal",
            ))

        parsed, amount_issues = parse_amount(target_amount, field="target_amount")
        issues.extend(amount_issues)

        if issues:
            raise ValidationError(issues)
        return goal_name, parsed

    def validate_contribution(self, amount: Any) -> Decimal:
        parsed, issues = parse_amount(amount)
        if issues:
            raise ValidationError(issues)
        return parsed

    def validate_currency_symbol(self, symbol: Any) -> str:
        value = _text(symbol)
        if not value:
            raise ValidationError([ValidationIssue(
                field="symbol",
                issue_type="missing",
                message="Currency symbol cannot be blank",
            )])
        return value
