"""
Decoupled Portfolio API - Main Application Entry Point
Application Factory Pattern

This module initializes the Flask application with all necessary extensions,
configurations, and services. All actual route handling is delegated to blueprints.
"""

import os
import click
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from config import get_config
from extensions import db, login_manager
from utils.security import init_api_credentials, load_user_from_request
from utils.resources import register_resources
from utils.content import register_content_reader
from utils.menu import register_menu_provider

# Import all blueprints
from blueprints.api import api_bp


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    conf = get_config(config_name)
    app.config.from_object(conf)

    # Fix PostgreSQL URL if needed
    db_url = app.config.get('SQLALCHEMY_DATABASE_URI')
    if db_url and db_url.startswith("postgres://"):
        app.config['SQLALCHEMY_DATABASE_URI'] = db_url.replace(
            "postgres://", "postgresql://", 1)

    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    # Initialize extensions with app
    initialize_extensions(app)

    # Services shared by the blueprints
    register_resources(app)
    register_content_reader(app)
    register_menu_provider(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_commands(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'message': 'Portfolio API is running'}, 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.request_loader(load_user_from_request)
    init_api_credentials(app)

    # Create tables if they don't exist
    with app.app_context():
        try:
            from sqlalchemy import text
            import models  # noqa: F401
            db.create_all()
            # Verify connection
            db.session.execute(text('SELECT 1'))
            app.logger.info("Database initialized successfully")
        except Exception as e:
            app.logger.error(f"Database initialization failed: {str(e)}")


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(api_bp)


def register_error_handlers(app):
    """Register JSON error handlers"""

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({'status': e.code, 'message': e.description}), e.code

    @app.errorhandler(500)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}")
        return jsonify({'status': 500, 'message': 'An error occurred.'}), 500


def register_commands(app):
    """Register flask CLI commands"""

    @app.cli.command('import-content')
    @click.argument('json_file', type=click.Path(exists=True, dir_okay=False))
    def import_content_command(json_file):
        """Import files, nodes, aliases and menus from a JSON document."""
        from migrations.import_content import import_content_file
        counts = import_content_file(json_file)
        click.echo(', '.join(f"{name}: {count}" for name, count in counts.items()))


if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=5000,
        debug=(env == 'development')
    )
