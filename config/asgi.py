"""
ASGI config for the Task service.

Served by uvicorn through `python manage.py serve`; any other ASGI server
can point at config.asgi:application.
"""
import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

from django.core.asgi import get_asgi_application

# Initialize Django at import time, not on the first request
application = get_asgi_application()
