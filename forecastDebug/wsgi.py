"""WSGI config for forecastDebug.

This exposes the WSGI callable as a module-level variable named `application`.
The prediction debug handler is built here so a misconfigured collaborator
stops the server from booting.
"""

from __future__ import annotations

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "forecastDebug.settings")

application = get_wsgi_application()

from core.views import default_debug_view  # noqa: E402

default_debug_view()
