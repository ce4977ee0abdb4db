from typing import List, Dict, Any, Optional

from fastapi import HTTPException

from models.product import ProductRequest
from services.json_store import JsonStore
from utils.ids import new_id, iso_now


def _product_fields(product: ProductRequest) -> Dict[str, Any]:
    fields = product.model_dump()
    fields["originalPrice"] = fields["originalPrice"] or None
    fields["features"] = fields["features"] or []
    return fields


class ProductService:
    def __init__(self, store: JsonStore):
        self.store = store

    def list_products(self) -> List[Dict[str, Any]]:
        return self.store.read()

    def create_product(self, product: ProductRequest) -> Dict[str, Any]:
        """
        Add a product to the top of the catalog

        Args:
            product: The submitted product fields

        Returns:
            The stored product

        Raises:
            HTTPException: 400 if title, description, imageUrl, price or link is missing
        """
        if not (product.title and product.description and product.imageUrl
                and product.price and product.link):
            raise HTTPException(status_code=400, detail="Dados incompletos")

        new_product = {"id": new_id(), **_product_fields(product), "createdAt": iso_now()}

        with self.store.lock:
            products = self.store.read()
            products.insert(0, new_product)
            self.store.write(products)

        return new_product

    def update_product(self, product_id: Optional[int], product: ProductRequest) -> Dict[str, Any]:
        """
        Replace every mutable field of a product. Fields left out of the
        request are removed from the stored record; id and createdAt are kept.
        """
        with self.store.lock:
            products = self.store.read()
            index = next((i for i, p in enumerate(products) if p.get("id") == product_id), -1)
            if index == -1:
                raise HTTPException(status_code=404, detail="Produto não encontrado")

            updated = dict(products[index])
            for field, value in _product_fields(product).items():
                if value is None and field != "originalPrice":
                    updated.pop(field, None)
                else:
                    updated[field] = value

            products[index] = updated
            self.store.write(products)

        return updated

    def delete_product(self, product_id: Optional[int]) -> None:
        with self.store.lock:
            products = self.store.read()
            remaining = [p for p in products if p.get("id") != product_id]
            if len(remaining) == len(products):
                raise HTTPException(status_code=404, detail="Produto não encontrado")
            self.store.write(remaining)
