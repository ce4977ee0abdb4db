import logging
from typing import List, Dict, Any, Optional

from fastapi import APIRouter, HTTPException

from dependencies import Products
from models.product import ProductRequest
from utils.ids import parse_id

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
def get_products(products: Products) -> List[Dict[str, Any]]:
    try:
        return products.list_products()
    except Exception as e:
        logger.exception("Error fetching products: %s", e)
        raise HTTPException(status_code=500, detail="Erro ao buscar produtos")


@router.post("", status_code=201)
def create_product(products: Products, product: ProductRequest) -> Dict[str, Any]:
    """Create a catalog product (admin)"""
    try:
        return products.create_product(product)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error creating product: %s", e)
        raise HTTPException(status_code=500, detail="Erro ao criar produto")


@router.put("/{product_id}")
def update_product(products: Products, product_id: str, product: Optional[ProductRequest] = None) -> Dict[str, Any]:
    """Replace a catalog product's fields (admin)"""
    product = product or ProductRequest()
    try:
        return products.update_product(parse_id(product_id), product)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error updating product: %s", e)
        raise HTTPException(status_code=500, detail="Erro ao atualizar produto")


@router.delete("/{product_id}")
def delete_product(products: Products, product_id: str) -> Dict[str, Any]:
    """Delete a catalog product (admin)"""
    try:
        products.delete_product(parse_id(product_id))
        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error deleting product: %s", e)
        raise HTTPException(status_code=500, detail="Erro ao deletar produto")
