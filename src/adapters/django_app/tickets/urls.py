"""
URL patterns para o Diário de Bordo.

Endpoints API JSON:
- GET /tickets/api/ - Listar tickets
- POST /tickets/api/ - Registrar atendimento
- GET /tickets/api/estatisticas/ - Estatísticas
- GET /tickets/api/escalonados/ - Quadro de escalonamento
- POST /tickets/api/classificar/ - Classificação por IA
- POST /tickets/api/resumo/ - Resumo do atendimento
- PATCH /tickets/api/<id>/ - Atualizar ticket
- GET|POST /tickets/api/<id>/validacao/ - Encerramento
"""

from django.urls import path
from . import api_views

app_name = 'tickets'

urlpatterns = [
    # Listagem e criação
    path('api/', api_views.TicketAPIListView.as_view(), name='api_list'),

    # Rotas fixas antes do <pk> para não conflitar
    path('api/estatisticas/', api_views.TicketAPIEstatisticasView.as_view(), name='api_estatisticas'),
    path('api/escalonados/', api_views.TicketAPIEscalonadosView.as_view(), name='api_escalonados'),
    path('api/classificar/', api_views.TicketAPIClassificarView.as_view(), name='api_classificar'),
    path('api/resumo/', api_views.TicketAPIResumoView.as_view(), name='api_resumo'),

    # Atualização
    path('api/<str:pk>/', api_views.TicketAPIDetailView.as_view(), name='api_detail'),

    # Encerramento
    path('api/<str:pk>/validacao/', api_views.TicketAPIValidacaoView.as_view(), name='api_validacao'),
]
