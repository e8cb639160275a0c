from flask import Flask
from .extensions import db, migrate
from .config import Config
from .errors import register_error_handlers
from .logger import setup_logging
from .seed import register_commands, seed_categories

from .blueprints.categories.routes import expense_categories_bp, income_categories_bp
from .blueprints.transactions.routes import transactions_bp
from .blueprints.balances.routes import balances_bp
from .blueprints.reports.routes import reports_bp


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    log = setup_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Ensure tables exist for a smooth first run
    with app.app_context():
        db.create_all()
        if app.config.get("SEED_ON_STARTUP"):
            try:
                seed_categories(db.session)
            except Exception:
                # Do not block app startup if seeding fails
                db.session.rollback()
                log.exception("Seeding default categories failed")

    register_error_handlers(app)
    register_commands(app)

    # Register blueprints
    app.register_blueprint(expense_categories_bp)
    app.register_blueprint(income_categories_bp)
    app.register_blueprint(transactions_bp)
    app.register_blueprint(balances_bp)
    app.register_blueprint(reports_bp)

    log.debug("pocketledger app created (%s)", app.config["SQLALCHEMY_DATABASE_URI"])
    return app
