# config/urls.py

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.views.generic import RedirectView

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # Login/logout padrão do Django
    path('accounts/', include('django.contrib.auth.urls')),

    # Kanban
    path('board/', include('apps.board.urls')),

    path('', RedirectView.as_view(url='/admin/', permanent=False)),
]

if settings.DEBUG:
    # Debug Toolbar se disponível
    try:
        import debug_toolbar

        urlpatterns = [
            path('__debug__/', include(debug_toolbar.urls)),
        ] + urlpatterns
    except ImportError:
        pass

# Customizar títulos do admin
admin.site.site_header = 'Vaga Board Admin'
admin.site.site_title = 'Vaga Board'
admin.site.index_title = 'Administração do Sistema'
