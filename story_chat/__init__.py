from __future__ import annotations

from flask import Flask

from .config import Config
from .extensions import csrf


def create_app(config_class: type[Config] = Config) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)

    register_extensions(app)
    register_blueprints(app)

    return app


def register_extensions(app: Flask) -> None:
    csrf.init_app(app)


def register_blueprints(app: Flask) -> None:
    from .chat import bp as chat_bp
    from .main import bp as main_bp

    app.register_blueprint(chat_bp)
    app.register_blueprint(main_bp)
