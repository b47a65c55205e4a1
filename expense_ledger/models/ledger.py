"""
Core Data Models for Expense Ledger

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Be serializable for storage and logging

DESIGN DECISION: Persisted field names are camelCase so stored collections
keep the layout the mobile app wrote ("mainCategory", "targetAmount", ...).
Python code uses snake_case attributes; both spellings are accepted on input.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)
from pydantic.alias_generators import to_camel


COMBINED_LABEL_SEPARATOR = " - "
NO_SUBCATEGORY_LABEL = "Sin subcategoría"


def new_id() -> str:
    """Generate an opaque record identifier."""
    return uuid4().hex


def local_now() -> datetime:
    """Current time as an aware datetime in the device's local time zone."""
    return datetime.now().astimezone()


def to_local(moment: datetime) -> datetime:
    """
    Express a timestamp in device-local time.

    Aware datetimes are converted; naive ones are assumed to already be local.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone()


def combined_label(main_category: str, detail: str) -> str:
    """Build the "<main> - <detail>" label stored alongside each expense."""
    return f"{main_category}{COMBINED_LABEL_SEPARATOR}{detail}"


class LedgerModel(BaseModel):
    """Base for persisted ledger records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_storage_dict(self) -> dict[str, Any]:
        """JSON-compatible dict using the persisted (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# ENUMS
# =============================================================================

class GroupBy(str, Enum):
    """Which expense field a summary groups on."""
    MAIN_CATEGORY = "mainCategory"
    SUB_CATEGORY = "subCategory"


class BudgetStatus(str, Enum):
    """
    Caller-facing budget band.

    OVER_BUDGET at 100% or more, WARNING from the configured
    warning percentage, NORMAL below it.
    """
    NORMAL = "normal"
    WARNING = "warning"
    OVER_BUDGET = "over_budget"


# =============================================================================
# PERSISTED RECORDS
# =============================================================================

class Expense(LedgerModel):
    """
    A single recorded expense.

    Category names are plain text captured at creation time; they are
    not re-checked if the catalog later changes.
    """

    id: str = Field(
        default_factory=new_id,
        min_length=1,
        description="Opaque identifier, stable for the record's lifetime"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount in display currency units"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="What the money was spent on"
    )
    main_category: str = Field(
        default="",
        description="Primary category name"
    )
    sub_category: str = Field(
        default="",
        description="Subcategory name, empty if none"
    )
    category: str = Field(
        default="",
        description="Combined '<main> - <sub>' label"
    )
    date: datetime = Field(
        default_factory=local_now,
        description="When the expense was recorded"
    )

    @model_validator(mode='before')
    @classmethod
    def backfill_categories(cls, data: Any) -> Any:
        """Older records only carry the combined label; split it back out."""
        if not isinstance(data, dict):
            return data
        if data.get("mainCategory") or data.get("main_category"):
            return data
        label = data.get("category") or ""
        if COMBINED_LABEL_SEPARATOR not in label:
            return data

        main, _, sub = label.partition(COMBINED_LABEL_SEPARATOR)
        data = dict(data)
        data["mainCategory"] = main
        if not (data.get("subCategory") or data.get("sub_category")):
            data["subCategory"] = sub
        return data

    @model_validator(mode='after')
    def fill_combined_label(self) -> 'Expense':
        if not self.category and self.main_category:
            self.category = combined_label(self.main_category, self.sub_category)
        return self


class Contribution(LedgerModel):
    """Money added toward a savings goal."""

    amount: Decimal = Field(..., gt=0)
    date: datetime = Field(default_factory=local_now)


class SavingsGoal(LedgerModel):
    """
    A savings target with its contribution history.

    current_amount always equals the sum of contribution amounts;
    contributions are only ever appended.
    """

    id: str = Field(default_factory=new_id, min_length=1)
    name: str = Field(..., min_length=1)
    target_amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount the user wants to reach"
    )
    current_amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Amount saved so far"
    )
    contributions: list[Contribution] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=local_now)


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in user input."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'unknown_category')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


# =============================================================================
# DERIVED VIEWS
# =============================================================================

class Summary(BaseModel):
    """Totals per group plus the overall total of the included expenses."""

    groups: dict[str, Decimal] = Field(default_factory=dict)
    total: Decimal = Decimal("0")


class ChartSlice(BaseModel):
    """One slice of a pie chart projection."""

    label: str
    value: Decimal
    color_index: int = Field(ge=0)
    color: str


class BudgetProgress(BaseModel):
    """Spent / remaining / percentage of one budget for a calendar month."""

    category: str
    amount: Decimal
    spent: Decimal
    remaining: Decimal = Field(
        ...,
        description="Negative when the budget has been exceeded"
    )
    percentage: Decimal
    status: BudgetStatus

    @property
    def is_over_budget(self) -> bool:
        return self.remaining < 0


class DashboardOverview(BaseModel):
    """Figures shown on the home screen."""

    month_total: Decimal = Field(
        ...,
        description="Sum of all expenses in the current month"
    )
    total_saved: Decimal = Field(
        ...,
        description="Sum of current amounts across savings goals"
    )
    balance: Decimal = Field(
        ...,
        description="Simplified balance (no income tracked, so -month_total)"
    )
    recent_expenses: list[Expense] = Field(default_factory=list)
    budgets: list[BudgetProgress] = Field(default_factory=list)
