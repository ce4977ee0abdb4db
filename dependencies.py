from typing import Annotated

from fastapi import Request, Depends

from services.gallery import GalleryService
from services.products import ProductService


async def get_gallery_service(request: Request) -> GalleryService:
    """Get gallery service from app state"""
    return request.app.state.gallery_service


async def get_product_service(request: Request) -> ProductService:
    """Get product service from app state"""
    return request.app.state.product_service


# Type annotations for dependency injection
Gallery = Annotated[GalleryService, Depends(get_gallery_service)]
Products = Annotated[ProductService, Depends(get_product_service)]
