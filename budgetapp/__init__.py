from flask import Flask, jsonify
from .extensions import db, migrate, login_manager
from .config import Config
from .errors import register_error_handlers

from .blueprints.auth.routes import auth_bp
from .blueprints.profile.routes import profile_bp
from .blueprints.budgets.routes import budgets_bp
from .blueprints.tabs.routes import tabs_bp
from .blueprints.expenses.routes import expenses_bp
from .blueprints.dashboard.routes import dashboard_bp
from .blueprints.support.routes import support_bp


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # app.logger is the "budgetapp" logger, parent of every module logger
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    register_error_handlers(app)

    # Ensure tables exist for a smooth first run
    with app.app_context():
        db.create_all()

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(budgets_bp)
    app.register_blueprint(tabs_bp)
    app.register_blueprint(expenses_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(support_bp)

    @app.route("/")
    def root():
        return jsonify({"name": "budgetapp", "status": "ok"})

    return app
