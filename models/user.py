from models.db import db, utcnow, isoformat

ROLE_SUPER_ADMIN = "super_admin"
ROLE_ADMIN = "admin"
ROLES = (ROLE_SUPER_ADMIN, ROLE_ADMIN)


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_ADMIN)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    @property
    def is_super_admin(self) -> bool:
        return self.role == ROLE_SUPER_ADMIN

    def to_safe_dict(self) -> dict:
        """Public identity; never includes the password hash."""
        return {"id": self.id, "username": self.username, "role": self.role}

    def to_dict(self) -> dict:
        return {**self.to_safe_dict(), "createdAt": isoformat(self.created_at)}
