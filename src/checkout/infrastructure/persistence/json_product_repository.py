"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from checkout.domain.model.product import Product
from checkout.domain.model.value_objects import BASE_CURRENCY, Money
from checkout.domain.repository.product_repository import ProductRepository
from checkout.domain.repository.unit_of_work import UnitOfWork
from checkout.infrastructure.persistence.json_store import JsonStore, as_json_uow

_COLLECTION = "products"


class JsonProductRepository(ProductRepository):

    def __init__(self, store: JsonStore) -> None:
        self._store = store

    # --- ProductRepository interface ------------------------------------------

    def get_for_update(self, uow: UnitOfWork, product_id: str) -> Product | None:
        for raw in as_json_uow(uow).records(_COLLECTION):
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def save(self, uow: UnitOfWork, product: Product) -> None:
        records = as_json_uow(uow).records(_COLLECTION)
        for i, raw in enumerate(records):
            if raw["id"] == product.id:
                records[i] = self._to_raw(product)
                break
        else:
            records.append(self._to_raw(product))
        as_json_uow(uow).mark_dirty(_COLLECTION)

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._store.read(_COLLECTION):
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._store.read(_COLLECTION)]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "images": list(product.images),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), raw.get("currency", BASE_CURRENCY)),
            stock=raw.get("stock", 0),
            images=list(raw.get("images", [])),
        )
