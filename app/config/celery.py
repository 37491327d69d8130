"""
Celery configuration for the back office.

Celery runs the post-commit work that must never hold up a payment
transaction, such as payment notifications. Redis is both the message
broker and the result backend. Tasks are auto-discovered from all
installed Django apps.

Usage:
    celery -A config worker -l info
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()
