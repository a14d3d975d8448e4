"""Application service: Show Order use case (query)."""

from __future__ import annotations

from checkout.application.dto import OrderDTO, to_order_dto
from checkout.domain.exceptions import EntityNotFoundError, ValidationError
from checkout.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        order_id: int | None = None,
        order_number: str | None = None,
    ) -> OrderDTO:
        """Look an order up by storage id or by order number."""
        if order_id is not None:
            order = self._order_repo.get_by_id(order_id)
            label = f"#{order_id}"
        elif order_number:
            order = self._order_repo.get_by_number(order_number)
            label = order_number
        else:
            raise ValidationError("An order id or order number is required")

        if order is None:
            raise EntityNotFoundError(f"Order {label} not found")
        return to_order_dto(order)
