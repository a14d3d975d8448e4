"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from checkout.domain.model.product import Product
from checkout.domain.repository.unit_of_work import UnitOfWork


class ProductRepository(ABC):

    @abstractmethod
    def get_for_update(self, uow: UnitOfWork, product_id: str) -> Product | None:
        """Load a product inside *uow*, or None if it does not exist.

        The read sees writes already made in the same unit of work, and
        no other unit of work can change the record until *uow* ends.
        """

    @abstractmethod
    def save(self, uow: UnitOfWork, product: Product) -> None:
        """Stage an updated product in *uow*."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return the committed state of a product, or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog (committed state)."""
