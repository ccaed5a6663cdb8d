"""Derived read views joining ledger entities.

Views are recomputed from the store on every call and hold copies of the
entities they join. Required references that do not resolve raise
``IntegrityError``; optional ones resolve to None.
"""

from typing import Any

from sam_ledger.database import LedgerStore
from sam_ledger.exceptions import IntegrityError
from sam_ledger.models.domain.allocation import LicenseAllocation
from sam_ledger.models.dto.details import (
    LicenseAllocationWithDetails,
    LicensePoolWithDetails,
    SoftwareProductWithDetails,
    SoftwareRequestWithDetails,
)
from sam_ledger.repositories.allocation_repository import AllocationRepository
from sam_ledger.repositories.base import BaseRepository
from sam_ledger.repositories.contract_repository import ContractRepository
from sam_ledger.repositories.cost_center_repository import CostCenterRepository
from sam_ledger.repositories.department_repository import DepartmentRepository
from sam_ledger.repositories.person_repository import PersonRepository
from sam_ledger.repositories.pool_repository import PoolRepository
from sam_ledger.repositories.product_repository import ProductRepository
from sam_ledger.repositories.request_repository import RequestRepository
from sam_ledger.repositories.vendor_repository import VendorRepository


def _index(repo: BaseRepository[Any]) -> dict[str, Any]:
    """Map id -> detached copy for every record of a repository."""
    return {item.id: item.model_copy(deep=True) for item in repo.get_all()}


class ViewService:
    """Builds the ``*WithDetails`` projections."""

    def __init__(self, store: LedgerStore) -> None:
        """Initialize service with the ledger store."""
        self.store = store
        self.vendor_repo = VendorRepository(store)
        self.contract_repo = ContractRepository(store)
        self.product_repo = ProductRepository(store)
        self.pool_repo = PoolRepository(store)
        self.department_repo = DepartmentRepository(store)
        self.cost_center_repo = CostCenterRepository(store)
        self.person_repo = PersonRepository(store)
        self.allocation_repo = AllocationRepository(store)
        self.request_repo = RequestRepository(store)

    def products_with_details(self) -> list[SoftwareProductWithDetails]:
        """Products joined with their vendor."""
        vendors = _index(self.vendor_repo)
        return [
            SoftwareProductWithDetails(
                **p.model_dump(),
                vendor=vendors.get(p.vendor_id) if p.vendor_id else None,
            )
            for p in self.product_repo.get_all()
        ]

    def pools_with_details(self) -> list[LicensePoolWithDetails]:
        """Pools joined with product (required) and contract (optional)."""
        products = {p.id: p for p in self.products_with_details()}
        contracts = _index(self.contract_repo)

        views = []
        for pool in self.pool_repo.get_all():
            product = products.get(pool.product_id)
            if product is None:
                raise IntegrityError("LicensePool", pool.id, "SoftwareProduct", pool.product_id)
            views.append(
                LicensePoolWithDetails(
                    **pool.model_dump(),
                    product=product,
                    contract=contracts.get(pool.contract_id) if pool.contract_id else None,
                )
            )
        return views

    def allocations_with_details(
        self,
        allocations: list[LicenseAllocation] | None = None,
    ) -> list[LicenseAllocationWithDetails]:
        """Allocations joined with pool, person, department and cost center.

        Args:
            allocations: Subset to project (all allocations if None)

        Returns:
            Projections in the order of the input allocations
        """
        if allocations is None:
            allocations = self.allocation_repo.get_all()
        pools = {p.id: p for p in self.pools_with_details()}
        people = _index(self.person_repo)
        departments = _index(self.department_repo)
        cost_centers = _index(self.cost_center_repo)

        views = []
        for alloc in allocations:
            pool = pools.get(alloc.pool_id)
            if pool is None:
                raise IntegrityError("LicenseAllocation", alloc.id, "LicensePool", alloc.pool_id)
            person = people.get(alloc.person_id)
            if person is None:
                raise IntegrityError("LicenseAllocation", alloc.id, "Person", alloc.person_id)
            views.append(
                LicenseAllocationWithDetails(
                    **alloc.model_dump(exclude={"pool_id", "person_id", "cost_center_id"}),
                    pool=pool,
                    person=person,
                    cost_center=cost_centers.get(alloc.cost_center_id) if alloc.cost_center_id else None,
                    department=departments.get(person.department_id) if person.department_id else None,
                )
            )
        return views

    def requests_with_details(self) -> list[SoftwareRequestWithDetails]:
        """Software requests joined with requester and product."""
        people = _index(self.person_repo)
        products = _index(self.product_repo)

        views = []
        for request in self.request_repo.get_all():
            requester = people.get(request.requester_id)
            if requester is None:
                raise IntegrityError("SoftwareRequest", request.id, "Person", request.requester_id)
            product = products.get(request.product_id)
            if product is None:
                raise IntegrityError("SoftwareRequest", request.id, "SoftwareProduct", request.product_id)
            views.append(
                SoftwareRequestWithDetails(**request.model_dump(), requester=requester, product=product)
            )
        return views
