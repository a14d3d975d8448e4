"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from checkout.domain.model.inventory_alert import (
    DEFAULT_LOW_STOCK_THRESHOLD,
)
from checkout.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    name: str
    price: str
    stock: int
    status: str  # in_stock | low_stock | out_of_stock


class ShowInventoryHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        self._product_repo = product_repo
        self._low_stock_threshold = low_stock_threshold

    def handle(self) -> list[InventoryLineDTO]:
        products = sorted(self._product_repo.list_all(), key=lambda p: p.name.lower())
        return [
            InventoryLineDTO(
                product_id=p.id,
                name=p.name,
                price=str(p.price),
                stock=p.stock,
                status=self._status_for(p.stock),
            )
            for p in products
        ]

    def _status_for(self, stock: int) -> str:
        if stock <= 0:
            return "out_of_stock"
        if stock <= self._low_stock_threshold:
            return "low_stock"
        return "in_stock"
