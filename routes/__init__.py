from .health import health_bp
from .auth import auth_bp
from .catalog import catalog_bp
from .admin import admin_bp
from .super_admin import super_admin_bp
from .uploads import uploads_bp
