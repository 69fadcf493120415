"""
WSGI config for CmsSite project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'CmsSite.settings')

application = get_wsgi_application()
