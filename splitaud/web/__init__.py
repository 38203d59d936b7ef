"""Flask application factory for the splitaud planning API."""

from flask import Flask, jsonify


def create_app() -> Flask:
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = 16 * 1024 * 1024  # 16 MB of script text

    from splitaud.web.routes import bp
    app.register_blueprint(bp)

    @app.errorhandler(413)
    def request_entity_too_large(error):
        return jsonify({"error": "Script too large"}), 413

    return app
