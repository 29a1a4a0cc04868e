from flask import Flask
from flask import render_template
from flask import request
from dotenv import load_dotenv
from .models import db
from .auth import current_role
from .nav_access import NavigationPolicy, NavigationError
from .routes import main
import os

_TRUTHY = {'1', 'true', 'yes', 'on'}


def create_app(test_config=None):
    load_dotenv()

    app = Flask(
        __name__,
        template_folder=os.path.join(os.path.dirname(__file__), "templates")
    )

    database_url = os.environ.get('DATABASE_URL')
    app.config['SQLALCHEMY_DATABASE_URI'] = database_url
    app.config['SQLALCHEMY_ENGINE_OPTIONS'] = {
        'pool_pre_ping': True,
    }
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev-secret-change-me')
    app.config['DEV_SIGN_IN'] = (os.environ.get('DEV_SIGN_IN') or '').strip().lower() in _TRUTHY
    app.config['NAV_LEGACY_ROLE_FALLBACK'] = (
        (os.environ.get('NAV_LEGACY_ROLE_FALLBACK') or '').strip().lower() in _TRUTHY
    )
    if test_config:
        app.config.update(test_config)

    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        raise RuntimeError("DATABASE_URL is required. Set a valid SQLAlchemy connection URL.")

    # Validated once; ConfigurationError here stops startup
    app.extensions['nav_policy'] = NavigationPolicy(
        legacy_role_fallback=bool(app.config['NAV_LEGACY_ROLE_FALLBACK'])
    )

    db.init_app(app)

    # No runtime DDL: run scripts/create_schema.py

    app.register_blueprint(main)

    @app.errorhandler(403)
    def forbidden(_e):
        return render_template('403.html'), 403

    # Template helper: nav -> NavigationState for the signed-in role and current path
    @app.context_processor
    def inject_nav():
        empty = dict(nav=None, portal_title=None, portal_subtitle=None)
        role = current_role()
        if not role:
            return empty
        policy = app.extensions['nav_policy']
        try:
            nav = policy.navigation_state(role, request.path)
            title, subtitle = policy.portal_header(nav.role)
        except NavigationError as e:
            app.logger.warning("Navigation unavailable for role %r on %s: %s", role, request.path, e)
            return empty
        return dict(nav=nav, portal_title=title, portal_subtitle=subtitle)

    return app
