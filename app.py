"""Exam Seating Arrangement Service - Main Flask Application."""
import logging
from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from config import Config
from models import db


def configure_logging(app):
    if getattr(app, '_logging_configured', False):
        return
    level = app.config.get('LOG_LEVEL', 'INFO')
    app.logger.setLevel(level)
    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter('[%(asctime)s] %(levelname)s in %(module)s: %(message)s'))
    app.logger.addHandler(console)
    # Engine modules log under utils.*; route them through the same handler
    utils_logger = logging.getLogger('utils')
    utils_logger.setLevel(level)
    if not utils_logger.handlers:
        utils_logger.addHandler(console)
    app._logging_configured = True


def create_app(config_class=Config, roster_source=None, teacher_source=None):
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app)

    db.init_app(app)

    # Optional directory overrides (tests, external services)
    if roster_source is not None:
        app.extensions['roster_source'] = roster_source
    if teacher_source is not None:
        app.extensions['teacher_source'] = teacher_source

    from routes.exam_seating import exam_seating_bp
    app.register_blueprint(exam_seating_bp, url_prefix='/exam-seating')

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(e):
        db.session.rollback()
        app.logger.exception('Database error')
        return jsonify({'success': False, 'error': 'Database error. Please try again.'}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'success': False, 'error': e.description}), e.code

    with app.app_context():
        db.create_all()

    return app


if __name__ == '__main__':
    create_app().run(debug=True, port=5000)
