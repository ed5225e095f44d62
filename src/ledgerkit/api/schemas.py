"""Request schemas (pydantic).

Fields are optional at this layer so that the domain services report missing
values with their own messages and in their own validation order. Unknown
fields are ignored, which is how ``code`` and ``type`` in an account update
are dropped.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    """Base model accepting camelCase keys from the wire."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class AccountCreateRequest(CamelModel):
    """Account creation request."""

    code: Optional[str] = Field(default=None, description="Unique account code")
    name: Optional[str] = Field(default=None, description="Display name")
    type: Optional[str] = Field(default=None, description="asset, liability, equity, revenue or expense")
    category: Optional[str] = Field(default=None, description="Free-form classification")
    parent_id: Optional[str] = Field(default=None, alias="parentId", description="Parent account ID")


class AccountUpdateRequest(CamelModel):
    """Account update request. Only name and category can change."""

    name: Optional[str] = Field(default=None, description="New display name")
    category: Optional[str] = Field(default=None, description="New classification")


class JournalLineRequest(CamelModel):
    """One journal line."""

    account_id: Optional[str] = Field(default=None, alias="accountId", description="Account ID")
    debit_amount: Optional[Decimal] = Field(default=None, alias="debitAmount", description="Debit amount")
    credit_amount: Optional[Decimal] = Field(default=None, alias="creditAmount", description="Credit amount")


class JournalEntryCreateRequest(CamelModel):
    """Journal entry creation request."""

    date: Optional[str] = Field(default=None, description="Entry date (YYYY-MM-DD)")
    description: Optional[str] = Field(default=None, description="Entry description")
    lines: Optional[list[JournalLineRequest]] = Field(default=None, description="At least two lines")

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "examples": [
                {
                    "date": "2024-01-15",
                    "description": "Cash sale",
                    "lines": [
                        {"accountId": "<cash account id>", "debitAmount": 10000, "creditAmount": 0},
                        {"accountId": "<sales account id>", "debitAmount": 0, "creditAmount": 10000},
                    ],
                }
            ]
        },
    )


class JournalEntryUpdateRequest(CamelModel):
    """Journal entry update request; omitted fields keep their values."""

    date: Optional[str] = Field(default=None, description="New entry date (YYYY-MM-DD)")
    description: Optional[str] = Field(default=None, description="New description")
    lines: Optional[list[JournalLineRequest]] = Field(default=None, description="Replacement lines")


class ClosePeriodRequest(CamelModel):
    """Close every entry dated on or before throughDate."""

    through_date: Optional[str] = Field(default=None, alias="throughDate", description="Last date of the closed period")


def lines_to_domain(lines: Optional[list[JournalLineRequest]]) -> Optional[list[dict]]:
    """Convert request lines to the mappings the journal service accepts."""
    if lines is None:
        return None
    return [line.model_dump() for line in lines]
