"""WSGI config for the recipeflow project."""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'recipeflow.settings')

application = get_wsgi_application()
