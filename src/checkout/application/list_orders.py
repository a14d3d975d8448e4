"""Application service: List Orders use case (query)."""

from __future__ import annotations

from checkout.application.dto import OrderDTO, to_order_dto
from checkout.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, status: str | None = None) -> list[OrderDTO]:
        """Return orders newest first, optionally filtered by status."""
        orders = sorted(
            self._order_repo.list_all(),
            key=lambda o: o.created_at,
            reverse=True,
        )
        if status is not None:
            orders = [o for o in orders if o.status.value == status]
        return [to_order_dto(o) for o in orders]
