import click
from flask import Flask
from flask_migrate import Migrate
from loguru import logger

from config import Config
from routes import health_bp, auth_bp, catalog_bp, admin_bp, super_admin_bp, uploads_bp

from models import db
from models.storage import Storage, get_storage
from models.user import ROLES, ROLE_ADMIN
from security.bruteforce import LoginAttemptTracker
from utils.auth_context import load_current_user
from utils.errors import register_error_handlers
from utils.logging import setup_logging, configure_request_logging
from utils.seed import seed_super_admin


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    setup_logging(app.config.get("LOG_LEVEL"), app.config.get("LOG_FILE"))

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(super_admin_bp)
    app.register_blueprint(uploads_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    app.extensions["storage"] = Storage()
    app.extensions["login_attempts"] = LoginAttemptTracker(
        max_attempts=app.config.get("MAX_LOGIN_ATTEMPTS", 5),
        lockout_seconds=app.config.get("LOCKOUT_MINUTES", 15) * 60,
        retention_seconds=app.config.get("LOGIN_ATTEMPT_RETENTION_HOURS", 24) * 3600,
        max_records=app.config.get("LOGIN_ATTEMPT_MAX_RECORDS", 10000),
    )

    with app.app_context():
        if app.config.get("AUTO_CREATE_TABLES", True):
            db.create_all()
        seed_super_admin()

    register_error_handlers(app)
    configure_request_logging(app)

    @app.before_request
    def _load_user():
        load_current_user()

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        return resp

    register_cli(app)

    logger.info("app: started (db={})", app.config["SQLALCHEMY_DATABASE_URI"].split("://")[0])
    return app

#-------------------------


def register_cli(app):
    @app.cli.command("create-user")
    @click.argument("username")
    @click.option("--role", type=click.Choice(ROLES), default=ROLE_ADMIN, show_default=True)
    @click.password_option()
    def create_user(username, role, password):
        """Create an admin account."""
        storage = get_storage()
        if storage.get_user_by_username(username):
            raise click.ClickException(f"User {username} already exists")
        user = storage.create_user(username, password, role=role)
        click.echo(f"Created {user.username} ({user.role})")

    @app.cli.command("set-role")
    @click.argument("username")
    @click.argument("role", type=click.Choice(ROLES))
    def set_role(username, role):
        """Change the role of an existing account."""
        storage = get_storage()
        user = storage.get_user_by_username(username)
        if not user:
            raise click.ClickException("User not found")
        storage.update_user(user.id, {"role": role})
        click.echo(f"{user.username} is now {role}")

#-------------------------


if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5000)
