# expense_tracker/models/entries.py

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from expense_tracker.amounts import as_text, finite_number


class Entry(BaseModel):
    # Stored records are read leniently; unknown fields survive a rewrite.
    id: str = ""
    amount: Optional[float] = None
    raw_value: str = Field(default="", alias="rawValue")
    label: str = ""
    created_at: Optional[int] = Field(default=None, alias="createdAt")

    class Config:
        populate_by_name = True
        extra = "allow"

    @field_validator("id", "raw_value", "label", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return "" if v is None else as_text(v)

    @field_validator("amount", mode="before")
    @classmethod
    def finite_or_none(cls, v: Any) -> Optional[float]:
        return finite_number(v)

    @field_validator("created_at", mode="before")
    @classmethod
    def integral_timestamp(cls, v: Any) -> Optional[int]:
        number = finite_number(v)
        return int(number) if number is not None else None


class EntryCreate(BaseModel):
    # amount may be a number or free text.
    amount: Optional[Any] = None
    raw_value: Optional[Any] = Field(default=None, alias="rawValue")
    label: Optional[Any] = None
    id: Optional[Any] = None

    class Config:
        populate_by_name = True


class EntryListOut(BaseModel):
    entries: List[Entry]
    total: float




class EntryCreatedOut(BaseModel):
    entry: Entry
    total: float


class TotalOut(BaseModel):
    total: float


class MessageOut(BaseModel):
    message: str


class ErrorOut(BaseModel):
    error: str
