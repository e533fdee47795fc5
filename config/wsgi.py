# config/wsgi.py

"""
Entrada WSGI - atende apenas HTTP
As atualizações em tempo real do board (WebSocket) exigem config.asgi
"""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.production')

application = get_wsgi_application()
