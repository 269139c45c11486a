"""Gunicorn configuration file.

The app is preloaded in the master process (secrets and settings are read
once). Each worker must then drop the database connections it inherited
through fork and open its own.
"""
import os

bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.environ.get("GUNICORN_WORKERS", "2"))
preload_app = True
accesslog = "-"
errorlog = "-"


def post_fork(server, worker):
    """
    Called just after a worker has been forked.

    Connections pooled by the master are not safe to share across processes;
    dispose of them without closing the parent's sockets.
    """
    app = server.app.wsgi()
    engine = app.config.get("DB_ENGINE")
    if engine is None:
        worker.log.info("No database engine to reset in worker %s", worker.pid)
        return

    engine.dispose(close=False)
    worker.log.info("Database pool reset in worker %s", worker.pid)
