from models.db import db, utcnow, isoformat


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(160), nullable=False)
    description = db.Column(db.Text, nullable=True)
    # checked in the application; SQLite does not enforce it
    category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=True, index=True)
    price = db.Column(db.String(60), nullable=True)
    specifications = db.Column(db.Text, nullable=True)
    featured = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "categoryId": self.category_id,
            "price": self.price,
            "specifications": self.specifications,
            "featured": self.featured,
            "createdAt": isoformat(self.created_at),
        }


class ProductImage(db.Model):
    __tablename__ = "product_images"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False, index=True)
    image_url = db.Column(db.String(255), nullable=False)
    is_main = db.Column(db.Boolean, default=False, nullable=False)
    order = db.Column(db.Integer, default=0, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "productId": self.product_id,
            "imageUrl": self.image_url,
            "isMain": self.is_main,
            "order": self.order,
        }
