"""
Entry point for launching the Task Lingo web server.

The script selects a WSGI server (Flask, Gunicorn or Waitress) based on
command‑line flags **or** the ``TASK_LINGO_SERVER_TYPE`` environment variable.

Typical usage
---------------
>>> task-lingo --gunicorn      # production
>>> task-lingo --waitress      # production, Windows‑friendly
>>> task-lingo                 # development server (Flask)
"""

import argparse
import logging

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def _parse_args(constants) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Start Task Lingo with the chosen WSGI server"
    )
    parser.add_argument(
        "--gunicorn",
        action="store_true",
        help="Force using Gunicorn",
    )
    parser.add_argument(
        "--waitress",
        action="store_true",
        help="Force using Waitress (Windows‑friendly)",
    )
    parser.add_argument(
        "--host",
        default=constants.SERVER_HOST,
        help="Interface to bind to (default: %(default)s)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=constants.SERVER_PORT,
        help="Port number (default: %(default)s)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=constants.SERVER_WORKERS_COUNT,
        help="Number of worker processes (Gunicorn only)",
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=constants.SERVER_THREADS_COUNT,
        help="Number of threads (Gunicorn/Waitress)",
    )
    return parser.parse_args()


def main() -> None:
    """Load ``.env``, select the server backend and start it."""
    # Must run before the constants module reads the environment
    load_dotenv(override=False)

    from task_lingo_web import constants
    from task_lingo_web.server import run_server

    args = _parse_args(constants)

    if args.gunicorn:
        server_type = "gunicorn"
    elif args.waitress:
        server_type = "waitress"
    else:
        server_type = constants.SERVER_TYPE

    logger.info("Starting Task Lingo with %s", server_type)
    run_server(
        server_type,
        host=args.host,
        port=args.port,
        workers=args.workers,
        threads=args.threads,
        debug=constants.RUN_IN_DEBUG_MODE,
    )


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    main()
