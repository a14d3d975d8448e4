"""Abstract repository for Order aggregate.

``add`` reports its outcome as a tagged result instead of raising, so the
commit step can tell the one recoverable failure (an order-number
collision) apart from everything else without inspecting messages.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union

from checkout.domain.model.order import Order
from checkout.domain.repository.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class Saved:
    order: Order


@dataclass(frozen=True)
class Retryable:
    """The write hit a uniqueness violation on the order number."""

    reason: str
    field: str = "order_number"


@dataclass(frozen=True)
class Fatal:
    reason: str
    field: str | None = None


SaveResult = Union[Saved, Retryable, Fatal]


class OrderRepository(ABC):

    @abstractmethod
    def add(self, uow: UnitOfWork, order: Order) -> SaveResult:
        """Stage a new order in *uow* and assign its storage id."""

    @abstractmethod
    def save(self, uow: UnitOfWork, order: Order) -> None:
        """Stage an update to an existing order in *uow*."""

    @abstractmethod
    def get_for_update(self, uow: UnitOfWork, order_id: int) -> Order | None:
        """Load an order inside *uow*, or None."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its storage ID, or None if not found."""

    @abstractmethod
    def get_by_number(self, order_number: str) -> Order | None:
        """Return an order by its order number, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order."""
