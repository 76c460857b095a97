"""Pydantic schemas for the model's structured output.

The same classes are declared as the response schema of the request and used
to validate the response text, so the two sides of the contract cannot drift.
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from statementlens.models import ExtractionResult, Summary, Transaction


class TransactionSchema(BaseModel):
    """Pydantic schema for one transaction."""
    model_config = ConfigDict(strict=True)

    date: str = Field(description="Transaction date in YYYY-MM-DD format")
    description: str = Field(description="Human-readable payment information")
    outflow: float = Field(description="Amount debited in INR, 0 if none")
    inflow: float = Field(description="Amount credited in INR, 0 if none")
    balance: float = Field(description="Account balance after the transaction in INR")


class SummarySchema(BaseModel):
    """Pydantic schema for the grand totals."""
    model_config = ConfigDict(strict=True)

    total_spend: float = Field(description="Sum of all outflows in INR")
    total_received: float = Field(description="Sum of all inflows in INR")


class ExtractionResultSchema(BaseModel):
    """Pydantic schema for the whole model response."""
    model_config = ConfigDict(strict=True)

    transactions: List[TransactionSchema]
    summary: SummarySchema

    def to_result(self) -> ExtractionResult:
        """Convert to the immutable domain result, field for field."""
        return ExtractionResult(
            transactions=tuple(
                Transaction(
                    date=txn.date,
                    description=txn.description,
                    outflow=txn.outflow,
                    inflow=txn.inflow,
                    balance=txn.balance,
                )
                for txn in self.transactions
            ),
            summary=Summary(
                total_spend=self.summary.total_spend,
                total_received=self.summary.total_received,
            ),
        )
