from flask import current_app
from loguru import logger

from models.storage import get_storage
from models.user import ROLE_SUPER_ADMIN


def seed_super_admin():
    """Creates the first super admin when there are no users yet (idempotent)."""
    storage = get_storage()
    if storage.list_users():
        return None

    username = current_app.config.get("SUPER_ADMIN_USERNAME")
    password = current_app.config.get("SUPER_ADMIN_PASSWORD")
    if not username or not password:
        logger.warning("seed: no users and SUPER_ADMIN_PASSWORD unset; nobody can log in")
        return None

    user = storage.create_user(username, password, role=ROLE_SUPER_ADMIN)
    logger.info("seed: created super admin user_id={} username={}", user.id, username)
    return user
