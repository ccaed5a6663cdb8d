"""Department and cost center domain models."""

from pydantic import BaseModel


class Department(BaseModel):
    """Organizational department."""

    id: str
    name: str
    directorate: str


class CostCenter(BaseModel):
    """Cost center an allocation can be charged to."""

    id: str
    code: str
    name: str | None = None
    department_id: str | None = None
