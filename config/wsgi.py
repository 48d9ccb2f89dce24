"""
WSGI config for the PlantOps project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings_production")

application = get_wsgi_application()
