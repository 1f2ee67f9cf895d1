"""
WSGI entry point for the product code API.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'prodcode_api.settings')

application = get_wsgi_application()
