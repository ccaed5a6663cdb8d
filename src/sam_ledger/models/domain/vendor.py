"""Vendor and contract domain models."""

from datetime import date

from pydantic import BaseModel


class Vendor(BaseModel):
    """Software vendor."""

    id: str
    name: str


class Contract(BaseModel):
    """Purchase contract with a vendor, optionally backing a license pool."""

    id: str
    number: str
    vendor_id: str
    start_date: date | None = None
    end_date: date | None = None
    notes: str | None = None
