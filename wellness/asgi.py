"""
ASGI config for the wellness project.

The API is plain request/response, so the ASGI entrypoint is Django's own
HTTP application without any protocol router.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "wellness.settings")

application = get_asgi_application()
