from typing import Optional

from pydantic import EmailStr, Field

from schemas.base import RequestSchema


class CategoryCreate(RequestSchema):
    name: str = Field(min_length=1, max_length=120)
    description: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=255)


class CategoryUpdate(RequestSchema):
    NOT_NULL = ("name",)

    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    description: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=255)


class ProductCreate(RequestSchema):
    name: str = Field(min_length=1, max_length=160)
    description: Optional[str] = None
    category_id: Optional[int] = None
    price: Optional[str] = Field(default=None, max_length=60)
    specifications: Optional[str] = None
    featured: bool = False


class ProductUpdate(RequestSchema):
    NOT_NULL = ("name", "featured")

    name: Optional[str] = Field(default=None, min_length=1, max_length=160)
    description: Optional[str] = None
    category_id: Optional[int] = None
    price: Optional[str] = Field(default=None, max_length=60)
    specifications: Optional[str] = None
    featured: Optional[bool] = None


class ProductImageCreate(RequestSchema):
    product_id: int
    image_url: str = Field(max_length=255)
    is_main: bool = False
    order: int = 0


class ProductImageUpdate(RequestSchema):
    NOT_NULL = ("is_main", "order")

    is_main: Optional[bool] = None
    order: Optional[int] = None

class HeroImageCreate(RequestSchema):
    title: Optional[str] = Field(default=None, max_length=160)
    subtitle: Optional[str] = Field(default=None, max_length=255)
    image_url: str = Field(max_length=255)
    order: int = 0
    is_active: bool = False


class HeroImageUpdate(RequestSchema):
    NOT_NULL = ("image_url", "order", "is_active")

    title: Optional[str] = Field(default=None, max_length=160)
    subtitle: Optional[str] = Field(default=None, max_length=255)
    image_url: Optional[str] = Field(default=None, max_length=255)
    order: Optional[int] = None
    is_active: Optional[bool] = None


class ContactRequestCreate(RequestSchema):
    name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=30)
    company: Optional[str] = Field(default=None, max_length=160)
    message: str = Field(min_length=1)
    product_id: Optional[int] = None


class SettingUpsert(RequestSchema):
    key: str = Field(min_length=1, max_length=100)
    value: Optional[str] = None
