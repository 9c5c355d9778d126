from models.db import db


class HeroImage(db.Model):
    __tablename__ = "hero_images"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(160), nullable=True)
    subtitle = db.Column(db.String(255), nullable=True)
    image_url = db.Column(db.String(255), nullable=False)
    order = db.Column(db.Integer, default=0, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "subtitle": self.subtitle,
            "imageUrl": self.image_url,
            "order": self.order,
            "isActive": self.is_active,
        }
