"""
Storage facade used by the route handlers.

Every method takes and returns model instances (or plain values); field
dicts use the model attribute names (``category_id``, ``image_url``...).
Lookups that find nothing return ``None``, deletes return ``False``.
"""
from flask import current_app

from models.db import db
from models.user import User, ROLE_ADMIN
from models.session import Session
from models.category import Category
from models.product import Product, ProductImage
from models.hero_image import HeroImage
from models.contact_request import ContactRequest
from models.setting import Setting
from security.password import hash_password, verify_password


def _apply(row, fields: dict):
    for name, value in fields.items():
        setattr(row, name, value)
    return row


class Storage:
    # -------- users --------

    def get_user(self, user_id: int):
        return db.session.get(User, user_id)

    def get_user_by_username(self, username: str):
        return User.query.filter_by(username=username).first()

    def list_users(self):
        return User.query.order_by(User.id.asc()).all()

    def validate_user(self, username: str, password: str):
        """Returns the user when the credentials match, else None."""
        user = self.get_user_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user

    def create_user(self, username: str, password: str, role: str = ROLE_ADMIN) -> User:
        user = User(username=username, password_hash=hash_password(password), role=role)
        db.session.add(user)
        db.session.commit()
        return user

    def update_user(self, user_id: int, fields: dict):
        user = self.get_user(user_id)
        if not user:
            return None
        fields = dict(fields)
        password = fields.pop("password", None)
        if password:
            user.password_hash = hash_password(password)
        _apply(user, fields)
        db.session.commit()
        return user

    def delete_user(self, user_id: int) -> bool:
        user = self.get_user(user_id)
        if not user:
            return False
        Session.query.filter_by(user_id=user_id).delete()
        db.session.delete(user)
        db.session.commit()
        return True

    # -------- categories --------

    def get_categories(self):
        return Category.query.order_by(Category.id.asc()).all()

    def get_category(self, category_id: int):
        return db.session.get(Category, category_id)

    def create_category(self, fields: dict) -> Category:
        category = Category(**fields)
        db.session.add(category)
        db.session.commit()
        return category

    def update_category(self, category_id: int, fields: dict):
        category = self.get_category(category_id)
        if not category:
            return None
        _apply(category, fields)
        db.session.commit()
        return category

    def delete_category(self, category_id: int) -> bool:
        category = self.get_category(category_id)
        if not category:
            return False
        Product.query.filter_by(category_id=category_id).update({"category_id": None})
        db.session.delete(category)
        db.session.commit()
        return True

    # -------- products --------

    def get_products(self):
        return Product.query.order_by(Product.id.asc()).all()

    def get_products_by_category(self, category_id: int):
        return Product.query.filter_by(category_id=category_id).order_by(Product.id.asc()).all()

    def get_product(self, product_id: int):
        return db.session.get(Product, product_id)

    def create_product(self, fields: dict) -> Product:
        product = Product(**fields)
        db.session.add(product)
        db.session.commit()
        return product

    def update_product(self, product_id: int, fields: dict):
        product = self.get_product(product_id)
        if not product:
            return None
        _apply(product, fields)
        db.session.commit()
        return product

    def delete_product(self, product_id: int) -> bool:
        product = self.get_product(product_id)
        if not product:
            return False
        ProductImage.query.filter_by(product_id=product_id).delete()
        ContactRequest.query.filter_by(product_id=product_id).update({"product_id": None})
        db.session.delete(product)
        db.session.commit()
        return True

    # -------- product images --------

    def get_product_images(self, product_id: int):
        return (
            ProductImage.query
            .filter_by(product_id=product_id)
            .order_by(ProductImage.order.asc(), ProductImage.id.asc())
            .all()
        )

    def get_main_image(self, product_id: int):
        images = self.get_product_images(product_id)
        for image in images:
            if image.is_main:
                return image
        return images[0] if images else None

    def get_product_image(self, image_id: int):
        return db.session.get(ProductImage, image_id)

    def create_product_image(self, fields: dict) -> ProductImage:
        image = ProductImage(**fields)
        if image.is_main:
            # a product has at most one main image
            ProductImage.query.filter_by(product_id=image.product_id, is_main=True).update({"is_main": False})
        db.session.add(image)
        db.session.commit()
        return image

    def update_product_image(self, image_id: int, fields: dict):
        image = self.get_product_image(image_id)
        if not image:
            return None
        if fields.get("is_main"):
            (
                ProductImage.query
                .filter(ProductImage.product_id == image.product_id, ProductImage.id != image.id)
                .update({"is_main": False})
            )
        _apply(image, fields)
        db.session.commit()
        return image

    def delete_product_image(self, image_id: int) -> bool:
        image = self.get_product_image(image_id)
        if not image:
            return False
        db.session.delete(image)
        db.session.commit()
        return True

    # -------- hero images --------

    def get_hero_images(self):
        """Active banners only, in display order."""
        return (
            HeroImage.query
            .filter(HeroImage.is_active.is_(True))
            .order_by(HeroImage.order.asc(), HeroImage.id.asc())
            .all()
        )

    def get_all_hero_images(self):
        return HeroImage.query.order_by(HeroImage.order.asc(), HeroImage.id.asc()).all()

    def get_hero_image(self, hero_id: int):
        return db.session.get(HeroImage, hero_id)

    def create_hero_image(self, fields: dict) -> HeroImage:
        hero = HeroImage(**fields)
        db.session.add(hero)
        db.session.commit()
        return hero

    def update_hero_image(self, hero_id: int, fields: dict):
        hero = self.get_hero_image(hero_id)
        if not hero:
            return None
        _apply(hero, fields)
        db.session.commit()
        return hero

    def delete_hero_image(self, hero_id: int) -> bool:
        hero = self.get_hero_image(hero_id)
        if not hero:
            return False
        db.session.delete(hero)
        db.session.commit()
        return True

    # -------- contact requests --------

    def get_contact_requests(self):
        return (
            ContactRequest.query
            .order_by(ContactRequest.created_at.desc(), ContactRequest.id.desc())
            .all()
        )

    def create_contact_request(self, fields: dict) -> ContactRequest:
        row = ContactRequest(**fields)
        db.session.add(row)
        db.session.commit()
        return row

    def update_contact_request_status(self, request_id: int, status: str):
        row = db.session.get(ContactRequest, request_id)
        if not row:
            return None
        row.status = status
        db.session.commit()
        return row

    def delete_contact_request(self, request_id: int) -> bool:
        row = db.session.get(ContactRequest, request_id)
        if not row:
            return False
        db.session.delete(row)
        db.session.commit()
        return True

    # -------- settings --------

    def get_all_settings(self):
        return Setting.query.order_by(Setting.key.asc()).all()

    def get_setting(self, key: str):
        return Setting.query.filter_by(key=key).first()

    def upsert_setting(self, key: str, value) -> Setting:
        row = self.get_setting(key)
        if row is None:
            row = Setting(key=key)
            db.session.add(row)
        row.value = value
        db.session.commit()
        return row


def get_storage() -> Storage:
    return current_app.extensions["storage"]
