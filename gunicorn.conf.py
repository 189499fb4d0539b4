import os

from prometheus_flask_exporter.multiprocess import GunicornPrometheusMetrics

chdir = 'src'
wsgi_app = 'index:create_app()'
bind = f"0.0.0.0:{os.getenv('PORT', 8080)}"
# One worker keeps the list rate limiter shared by every request.
workers = 1
threads = int(os.getenv('GUNICORN_THREADS', 8))

# In-flight requests get this long to finish on SIGTERM/SIGINT.
graceful_timeout = 5
timeout = 30


def child_exit(server, worker):
    if os.getenv('PROMETHEUS_MULTIPROC_DIR'):
        GunicornPrometheusMetrics.mark_process_dead_on_child_exit(worker.pid)
