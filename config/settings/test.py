# config/settings/test.py

from .base import *

# === TESTES ===

DEBUG = False

SECRET_KEY = 'django-insecure-test-key'

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'vaga-test-cache',
    }
}

CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer'
    }
}

STORAGES['staticfiles'] = {
    'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
}

# Hash rápido para criar usuários nos testes
PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

# Sem arquivo de log nos testes
LOGGING['handlers'] = {
    'null': {
        'class': 'logging.NullHandler',
    },
}
LOGGING['root']['handlers'] = ['null']
LOGGING['loggers'] = {
    'apps': {
        'handlers': ['null'],
        'level': 'DEBUG',
        'propagate': False,
    },
}

VAGA_BOARD_ORDEM_GAP = 100
