from .home_routes import home_bp
from .settings_routes import settings_bp

def register_routes(app):
    app.register_blueprint(home_bp)
    app.register_blueprint(settings_bp)
