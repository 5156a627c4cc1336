"""
Development server:
    python -m api
Production runs create_app() under a WSGI server instead.
"""
import os

from . import create_app


def main():
    # APP_ENV picks the config class (see get_config())
    app = create_app()
    host = os.getenv("FLASK_RUN_HOST", "0.0.0.0")
    port = int(os.getenv("FLASK_RUN_PORT", "8000"))
    debug = os.getenv("FLASK_DEBUG", str(app.config["DEBUG"])).lower() in ("1", "true", "yes")
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    main()
