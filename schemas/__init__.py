from .base import RequestSchema, parse_body, format_validation_error
from .auth import LoginRequest, UserCreate, UserUpdate
from .catalog import (
    CategoryCreate,
    CategoryUpdate,
    ProductCreate,
    ProductUpdate,
    ProductImageCreate,
    ProductImageUpdate,
    HeroImageCreate,
    HeroImageUpdate,
    ContactRequestCreate,
    SettingUpsert,
)
