"""Entry point for running the ECB rate feed server."""

from __future__ import annotations

import os

from dotenv import load_dotenv

# config.py reads the environment at import time, so .env must be loaded first.
_ENV_FILE = os.path.join(os.path.abspath(os.path.dirname(__file__)), ".env")
if os.path.exists(_ENV_FILE):
    load_dotenv(_ENV_FILE)

from fxfeed import create_app  # noqa: E402

app = create_app(config_name=os.getenv("APP_ENV"))


def main() -> None:
    """Serve the application on every interface."""

    host = app.config.get("SERVER_HOST", "0.0.0.0")
    port = int(app.config.get("SERVER_PORT", 3000))
    debug = app.config.get("DEBUG", False)

    app.logger.info("Server running at http://localhost:%s/", port)
    app.run(host=host, port=port, debug=debug, threaded=True)


if __name__ == "__main__":
    main()
