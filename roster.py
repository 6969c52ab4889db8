from dotenv import load_dotenv
from flask import Flask

from models.context import build_context
from routes.admin import register_admin_routes
from routes.auth import register_auth_routes
from routes.data import register_data_routes


def create_app(context=None):
    """Build the Flask app. Tests pass their own context; otherwise one is built from the environment."""
    if context is None:
        load_dotenv()
        context = build_context()

    app = Flask(__name__)
    app.extensions['roster'] = context

    # Register route modules
    register_auth_routes(app, context)
    register_data_routes(app, context)
    register_admin_routes(app, context)
    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=True, port=app.extensions['roster'].settings.port)
