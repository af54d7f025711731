"""scanroll - QR classroom attendance service, application factory."""
import logging
import os
from flask import Flask, current_app, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)

def create_app(config_name: str = None) -> Flask:
    """Application factory pattern."""
    app = Flask(__name__)

    # Load configuration
    from config import config_problems, get_config
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    problems = config_problems(app.config)
    if problems:
        raise RuntimeError("Invalid configuration: " + "; ".join(problems))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    # Configure CORS
    CORS(app, origins=app.config.get('CORS_ORIGINS', ["*"]))

    # Setup logging
    setup_logging(app)

    # Per-teacher attendance engine
    setup_attendance(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Add CLI commands
    register_commands(app)

    @app.route('/health')
    def health_check():
        return jsonify({
            'status': 'healthy',
            'service': 'scanroll',
            'version': '1.0.0'
        })

    return app

def attendance_registry():
    """TeacherContextRegistry of the current app."""
    return current_app.extensions['scanroll']['registry']

def auth_events():
    """AuthEvents of the current app."""
    return current_app.extensions['scanroll']['events']

def setup_attendance(app: Flask) -> None:
    """Create the auth event bus and the registry subscribed to it."""
    from scanroll.services.document_store import SQLAlchemyDocumentStore
    from scanroll.services.teacher_context import AuthEvents, TeacherContextRegistry
    from scanroll.utils.clock import resolve_timezone

    events = AuthEvents()
    registry = TeacherContextRegistry(
        store_factory=SQLAlchemyDocumentStore,
        events=events,
        tz=resolve_timezone(app.config.get('SCHOOL_TIMEZONE', 'UTC'))
    )
    app.extensions['scanroll'] = {'events': events, 'registry': registry}

def register_blueprints(app: Flask) -> None:
    """Register all application blueprints."""
    from scanroll.api.auth import auth_bp
    from scanroll.api.students import students_bp
    from scanroll.api.scan import scan_bp
    from scanroll.api.attendance import attendance_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(students_bp, url_prefix='/api/students')
    app.register_blueprint(scan_bp, url_prefix='/api/scan')
    app.register_blueprint(attendance_bp, url_prefix='/api/attendance')

def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from scanroll.utils.helpers import handle_error
    from scanroll.services.teacher_context import TeacherContextError
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HTTPException)
    def handle_exception(e):
        return handle_error(e, e.code)

    @app.errorhandler(TeacherContextError)
    def teacher_context_error(e):
        app.logger.exception("Attendance engine used without a teacher context")
        return handle_error("Internal server error", 500)

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return handle_error("Internal server error", 500)

    # JWT error handlers
    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({
            'error': True,
            'message': 'Token has expired',
            'status_code': 401
        }), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return jsonify({
            'error': True,
            'message': 'Invalid token',
            'status_code': 401
        }), 401

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return jsonify({
            'error': True,
            'message': 'Authorization token required',
            'status_code': 401
        }), 401

def setup_logging(app: Flask) -> None:
    """Setup application logging."""
    app.logger.setLevel(getattr(logging, app.config.get('LOG_LEVEL', 'INFO')))

    log_file = app.config.get('LOG_FILE')
    if log_file and not app.debug and not app.testing:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.info('scanroll startup')

def register_commands(app: Flask) -> None:
    """Register CLI commands."""
    import click

    @app.cli.command('init-db')
    @click.option('--drop', is_flag=True, help='Drop existing tables')
    def init_db(drop):
        """Initialize the database."""
        from scanroll import models  # noqa: F401

        if drop:
            db.drop_all()
            click.echo('Dropped all tables.')

        db.create_all()
        click.echo('Created all tables.')

    @app.cli.command('seed-demo')
    def seed_demo():
        """Create a demo teacher with a small roster."""
        from scanroll.services.seed_service import SeedService, DEMO_EMAIL, DEMO_PASSWORD

        SeedService.seed_all()
        click.echo(f'Demo teacher: {DEMO_EMAIL} / {DEMO_PASSWORD}')
