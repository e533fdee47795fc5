# config/settings/production.py

import logging

import dj_database_url
from .base import *

# === PRODUÇÃO ===

DEBUG = False

# Sem default: cada deploy declara seus hosts
ALLOWED_HOSTS = env.list('ALLOWED_HOSTS')

# HTMX e o drag-and-drop postam com o token CSRF vindo de outra origem em alguns deploys
CSRF_TRUSTED_ORIGINS = env.list('CSRF_TRUSTED_ORIGINS', default=[])

# === SEGURANÇA ===

SECURE_SSL_REDIRECT = env.bool('SECURE_SSL_REDIRECT', default=True)
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True

SECURE_HSTS_SECONDS = env.int('SECURE_HSTS_SECONDS', default=31536000)  # 1 ano
SECURE_HSTS_INCLUDE_SUBDOMAINS = True

X_FRAME_OPTIONS = 'DENY'

# === BANCO DE DADOS ===

# DATABASE_URL tem prioridade; sem ela, usa as variáveis DB_* de base.py com SSL
if env('DATABASE_URL', default=None):
    DATABASES['default'] = dj_database_url.parse(
        env('DATABASE_URL'),
        conn_max_age=600,
        conn_health_checks=True,
        ssl_require=env.bool('DB_SSL_REQUIRE', default=True),
    )
else:
    DATABASES['default'].update({
        'CONN_MAX_AGE': 600,
        'CONN_HEALTH_CHECKS': True,
        'OPTIONS': {'sslmode': 'require'},
    })

# === REDIS ===

# Cache, sessões e channel layer dividem o mesmo Redis
REDIS_URL = env('REDIS_URL', default=None)
if not REDIS_URL:
    raise ValueError("REDIS_URL é obrigatório em produção")

CACHES['default']['LOCATION'] = REDIS_URL
CACHES['default']['OPTIONS'].update({
    'SOCKET_CONNECT_TIMEOUT': 5,
    'SOCKET_TIMEOUT': 5,
})

CHANNEL_LAYERS['default']['CONFIG'] = {
    'hosts': [REDIS_URL],
    # Evento de movimento que não foi entregue em 10s já foi superado por outro
    'expiry': 10,
    'capacity': 1000,
    'group_expiry': 86400,
}

# === LOGGING ===

LOGGING['handlers']['file']['filename'] = env('LOG_FILE', default='/var/log/vaga-board/vaga_board.log')
LOGGING['loggers']['apps']['level'] = env('VAGA_BOARD_LOG_LEVEL', default='INFO')

# StorageError é logado como ERROR pelo repositório e vira evento no Sentry
if env('SENTRY_DSN', default=None):
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration

    sentry_sdk.init(
        dsn=env('SENTRY_DSN'),
        integrations=[
            DjangoIntegration(),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        traces_sample_rate=env.float('SENTRY_TRACES_SAMPLE_RATE', default=0.1),
        send_default_pii=False,
        environment=env('ENVIRONMENT', default='production'),
    )

# === PERFORMANCE ===

MIDDLEWARE = ['django.middleware.gzip.GZipMiddleware'] + MIDDLEWARE

# === VALIDAÇÕES ===

if SECRET_KEY.startswith('django-insecure'):
    raise ValueError("Defina SECRET_KEY para produção")

if not env('DATABASE_URL', default=None):
    for variavel in ['DB_NAME', 'DB_USER', 'DB_PASSWORD', 'DB_HOST']:
        if not env(variavel, default=None):
            raise ValueError(f"Variável de ambiente {variavel} é obrigatória em produção (ou use DATABASE_URL)")

print("🚀 Configurações de PRODUÇÃO carregadas")
