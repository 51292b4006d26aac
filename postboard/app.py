"""Application assembly and the server command."""

from __future__ import annotations

import argparse
from typing import Sequence

from flask import Flask
from sqlalchemy.engine import Engine

from .contacts import DEFAULT_UPLOAD_DIR, create_contact_blueprint
from .db import establish_connection
from .posts import create_post_blueprint

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


def create_app(
    engine: Engine | None = None, upload_dir: str = DEFAULT_UPLOAD_DIR
) -> Flask:
    """Build the application with the post and contact routes."""
    if engine is None:
        engine = establish_connection()
    app = Flask(__name__)
    app.register_blueprint(create_post_blueprint(engine))
    app.register_blueprint(create_contact_blueprint(engine, upload_dir))
    return app


def main(argv: Sequence[str] | None = None) -> int:
    """Start the HTTP server."""
    parser = argparse.ArgumentParser(
        prog="postboard", description="Serve the posts and contacts API."
    )
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument(
        "--database-url",
        default=None,
        help="database URL; defaults to DATABASE_URL from the environment or .env",
    )
    parser.add_argument("--upload-dir", default=DEFAULT_UPLOAD_DIR)
    args = parser.parse_args(argv)

    engine = establish_connection(args.database_url)
    app = create_app(engine, args.upload_dir)
    print(f"Server running at http://{args.host}:{args.port}", flush=True)
    app.run(host=args.host, port=args.port)
    return 0