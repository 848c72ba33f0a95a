# gunicorn.conf.py
import os

wsgi_app = "pricing_table.main:create_app()"
bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"
workers = int(os.getenv("WEB_CONCURRENCY", "2"))  # schaalbaar via env
worker_class = "uvicorn.workers.UvicornWorker"
preload_app = False
timeout = 30
graceful_timeout = 30
keepalive = 5
accesslog = "-"
errorlog = "-"
loglevel = "info"
