from models.db import db


class Setting(db.Model):
    __tablename__ = "settings"

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(100), unique=True, nullable=False, index=True)
    value = db.Column(db.Text, nullable=True)

    def to_dict(self) -> dict:
        return {"id": self.id, "key": self.key, "value": self.value}
