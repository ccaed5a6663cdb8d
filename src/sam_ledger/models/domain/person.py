"""Person domain model."""

from enum import StrEnum

from pydantic import BaseModel


class PersonStatus(StrEnum):
    """Person status enum."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Person(BaseModel):
    """License holder. ``email`` is unique, compared case-insensitively."""

    id: str
    email: str
    matricula: str | None = None
    display_name: str
    manager_upn: str | None = None
    department_id: str | None = None
    status: PersonStatus = PersonStatus.ACTIVE
