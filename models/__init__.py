from .db import db
from .user import User
from .session import Session
from .category import Category
from .product import Product, ProductImage
from .hero_image import HeroImage
from .contact_request import ContactRequest
from .setting import Setting
