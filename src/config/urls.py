"""
URL Configuration para o Diário de Bordo.

Estrutura:
- /admin/ - Django Admin
- /tickets/api/ - API de Tickets
- /health/ - Health check
"""

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Django Admin
    path('admin/', admin.site.urls),

    # Tickets App
    path('tickets/', include('src.adapters.django_app.tickets.urls')),

    # Health check
    path('health/', lambda r: __import__('django.http', fromlist=['JsonResponse']).JsonResponse({'status': 'ok'})),
]
