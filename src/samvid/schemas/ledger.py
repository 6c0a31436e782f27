"""Aggregate views over a transaction collection."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class LedgerSummary(BaseModel):
    """Dashboard totals computed from a list of transactions.

    All amounts are Decimal rupees.
    """

    model_config = ConfigDict(frozen=True)

    total_spent: Decimal = Field(default=Decimal("0.00"), description="Sum over non-income records")
    total_income: Decimal = Field(default=Decimal("0.00"), description="Sum over income records")
    opening_balance: Decimal = Field(default=Decimal("0.00"))
    balance: Decimal = Field(
        default=Decimal("0.00"), description="opening_balance + total_income - total_spent"
    )
    transactions_count: int = 0
    pending_count: int = 0
    by_category: dict[str, Decimal] = Field(default_factory=dict)
