"""
WSGI runners for the Task Lingo app.

``flask`` is the development server; ``gunicorn`` and ``waitress`` come with
the ``server`` extra and are imported only when chosen.
"""

import logging

from task_lingo_web.web import create_app

logger = logging.getLogger(__name__)


def run_flask_server(host: str, port: int, debug: bool = False, **_):
    config = {"LOG_LEVEL": "DEBUG"} if debug else None
    create_app(config).run(host=host, port=port, debug=debug)


def run_gunicorn_server(
    host: str,
    port: int,
    workers: int = 2,
    threads: int = 8,
    log_level: str = "info",
    **_,
):
    """
    Serve through Gunicorn's ``BaseApplication`` without a config file.

    The worker timeout is disabled: a translation waits on the provider for as
    long as the provider takes.
    """
    from gunicorn.app.base import BaseApplication

    options = {
        "bind": f"{host}:{port}",
        "workers": workers,
        "threads": threads,
        "timeout": 0,
        "loglevel": log_level,
        "accesslog": "-",
        "errorlog": "-",
    }

    class TaskLingoGunicorn(BaseApplication):
        def load_config(self):
            for key, value in options.items():
                if key in self.cfg.settings and value is not None:
                    self.cfg.set(key, value)

        def load(self):
            return create_app()

    TaskLingoGunicorn().run()


def run_waitress_server(host: str, port: int, threads: int = 4, **_):
    from waitress import serve

    logger.info("Waitress listening on %s:%s (%s threads)", host, port, threads)
    serve(create_app(), host=host, port=port, threads=threads)


SERVERS = {
    "flask": run_flask_server,
    "gunicorn": run_gunicorn_server,
    "waitress": run_waitress_server,
}


def run_server(server_type: str, **options) -> None:
    """Start the runner registered under ``server_type``."""
    try:
        runner = SERVERS[server_type]
    except KeyError:
        raise ValueError(
            f"Unknown server type {server_type!r}. Choose from: {', '.join(SERVERS)}"
        )
    runner(**options)
