# config/settings/development.py

from .base import *

# === DESENVOLVIMENTO ===

DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '0.0.0.0']

# Debug Toolbar apenas se estiver instalada
try:
    import debug_toolbar  # noqa: F401

    INSTALLED_APPS += ['debug_toolbar']
    MIDDLEWARE = ['debug_toolbar.middleware.DebugToolbarMiddleware'] + MIDDLEWARE
    INTERNAL_IPS = ['127.0.0.1']
except ImportError:
    pass

# === BANCO DE DADOS ===

if env.bool('USE_SQLITE', default=False):
    print("🔄 Usando SQLite para desenvolvimento")
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }
else:
    DATABASES['default']['CONN_MAX_AGE'] = 60
    print(f"🐘 Usando PostgreSQL: {DATABASES['default']['NAME']}@{DATABASES['default'].get('HOST')}")

# === SEM REDIS OBRIGATÓRIO ===

# Um único processo (runserver/daphne): cache e channel layer em memória bastam
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'vaga-dev-cache',
    }
}

CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer'
    }
}

# Dispensa collectstatic
STORAGES['staticfiles'] = {
    'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
}

# === LOGGING ===

# Write-sets aplicados aparecem em DEBUG no console
LOGGING['handlers']['console']['level'] = 'DEBUG'
LOGGING['loggers']['apps']['level'] = 'DEBUG'

# === SHELL_PLUS ===

SHELL_PLUS_IMPORTS = [
    'from apps.board.posicoes import AlocadorPosicoes',
    'from apps.board.reconciliacao import MotorReconciliacao',
    'from apps.board.repositorio import RepositorioCandidaturas',
    'from apps.board.servicos import MovimentacaoService',
    'from apps.board.tipos import MoveIntent, parse_move_payload',
]

print("🚀 Configurações de DESENVOLVIMENTO carregadas")
