# proshop/models.py
from typing import Optional

from pydantic import BaseModel, Field


class ProductIn(BaseModel):
    name: str
    price: float = Field(0, ge=0)
    image: str = "/images/sample.jpg"
    brand: str = ""
    category: str = ""
    description: str = ""
    count_in_stock: int = Field(0, ge=0)


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    image: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    count_in_stock: Optional[int] = Field(None, ge=0)


class Product(ProductIn):
    id: str
    user: Optional[str] = None
    rating: float = Field(0, ge=0)
    num_reviews: int = Field(0, ge=0)


class UserPublic(BaseModel):
    id: str
    name: str
    email: str
    is_admin: bool = False


class User(UserPublic):
    password: str  # salted hash, see proshop.security
