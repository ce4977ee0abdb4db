from typing import Any, List, Optional

from pydantic import BaseModel


class ProductRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    imageUrl: Optional[str] = None
    # prices are passed through as sent: numbers or display strings
    price: Optional[Any] = None
    originalPrice: Optional[Any] = None
    link: Optional[str] = None
    features: Optional[List[str]] = None
