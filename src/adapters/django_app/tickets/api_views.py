"""
API Views JSON para o Diário de Bordo.

RESTful API para o frontend de atendimento.

Endpoints:
- GET /tickets/api/ - Listar tickets (?q= busca)
- POST /tickets/api/ - Registrar atendimento
- GET /tickets/api/estatisticas/ - Números do dashboard
- GET /tickets/api/escalonados/ - Quadro de escalonamento
- POST /tickets/api/classificar/ - Sugestão da IA para o rascunho
- POST /tickets/api/resumo/ - Resumo do atendimento (texto para cópia)
- PATCH /tickets/api/<id>/ - Atualizar ticket parcial
- GET /tickets/api/<id>/validacao/ - Abrir formulário de encerramento
- POST /tickets/api/<id>/validacao/ - Confirmar encerramento (?preview=1 só pré-visualiza)

Formato:
- Entrada: JSON (chaves camelCase, como gravadas no armazenamento)
- Saída: JSON com estrutura {success, data/error, meta}
"""

import json
import logging
from typing import Any, Dict

from django.views import View
from django.http import JsonResponse, HttpRequest
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt

from src.core.tickets.dtos import CriarTicketInputDTO
from src.core.tickets.summaries import gerar_resumo_atendimento
from src.core.tickets.validation import edicoes_from_dict
from src.core.shared.exceptions import (
    ValidationError,
    EntityNotFoundError,
    BusinessRuleViolationError,
    StoreError,
    StoreConnectionError,
    StorePermissionError,
    SchemaError,
    DomainException,
)
from src.config.container import get_container

logger = logging.getLogger(__name__)

# Status HTTP por categoria de falha do armazenamento
STORE_ERROR_STATUS = {
    StoreConnectionError: 503,
    StorePermissionError: 403,
    SchemaError: 500,
}


# =============================================================================
# Helpers
# =============================================================================

def json_response(success: bool, data: Any = None, error: str = None,
                  status: int = 200, meta: Dict = None) -> JsonResponse:
    """
    Cria resposta JSON padronizada.

    Args:
        success: Se operação foi bem sucedida
        data: Dados da resposta
        error: Mensagem de erro (se aplicável)
        status: HTTP status code
        meta: Metadados adicionais

    Returns:
        JsonResponse formatada
    """
    response = {'success': success}

    if data is not None:
        response['data'] = data

    if error is not None:
        response['error'] = error

    if meta is not None:
        response['meta'] = meta

    return JsonResponse(response, status=status)


def parse_json_body(request: HttpRequest) -> Dict:
    """
    Parseia body JSON do request.

    Raises:
        ValueError: Se JSON inválido ou não for um objeto
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except json.JSONDecodeError as e:
        raise ValueError(f"JSON inválido: {e}")

    if not isinstance(data, dict):
        raise ValueError("JSON inválido: esperado um objeto")
    return data


def flag(request: HttpRequest, nome: str) -> bool:
    """Query param booleano (?preview=1)."""
    return request.GET.get(nome, '').lower() in ('1', 'true', 'yes')


# =============================================================================
# Base API View
# =============================================================================

@method_decorator(csrf_exempt, name='dispatch')
class BaseAPIView(View):
    """
    View base para APIs JSON.

    Fornece:
    - Parsing de JSON
    - Acesso ao container DI
    - Tratamento de erros padronizado
    """

    def get_container(self):
        """Retorna container de DI."""
        return get_container()

    def get_service(self, service_name: str):
        """Obtém service do container."""
        container = self.get_container()
        return getattr(container, service_name)()

    def parse_body(self, request: HttpRequest) -> Dict:
        """Parseia body JSON."""
        return parse_json_body(request)

    def handle_exception(self, e: Exception) -> JsonResponse:
        """
        Trata exceções e retorna resposta apropriada.

        Falhas do armazenamento levam a mensagem para o operador e o
        código da categoria em meta (ver STORE_ERROR_STATUS).
        """
        if isinstance(e, ValidationError):
            return json_response(
                success=False,
                error=str(e),
                status=400,
                meta={'field': getattr(e, 'field', None)}
            )

        if isinstance(e, EntityNotFoundError):
            return json_response(
                success=False,
                error=str(e),
                status=404
            )

        if isinstance(e, BusinessRuleViolationError):
            return json_response(
                success=False,
                error=str(e),
                status=422,
                meta={'rule': getattr(e, 'rule', None)}
            )

        if isinstance(e, StoreError):
            logger.error(f"Falha no armazenamento: {e}")
            return json_response(
                success=False,
                error=e.mensagem_usuario,
                status=STORE_ERROR_STATUS.get(type(e), 502),
                meta={'code': e.code, 'remote_code': e.remote_code}
            )

        if isinstance(e, DomainException):
            return json_response(
                success=False,
                error=str(e),
                status=400
            )

        if isinstance(e, ValueError):
            return json_response(
                success=False,
                error=str(e),
                status=400
            )

        # Erro inesperado
        logger.exception(f"Erro inesperado na API: {e}")
        return json_response(
            success=False,
            error="Erro interno do servidor",
            status=500
        )


# =============================================================================
# Ticket API Views
# =============================================================================

class TicketAPIListView(BaseAPIView):
    """
    API para listar e registrar atendimentos.

    GET /tickets/api/ - Lista tickets
    POST /tickets/api/ - Cria ticket
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        """
        Lista tickets, mais recentes primeiro.

        Query params:
        - q: Busca por cliente, ação do analista ou task
        """
        try:
            listar_service = self.get_service('listar_tickets_service')
            tickets = listar_service.execute(termo=request.GET.get('q', ''))

            return json_response(
                success=True,
                data=[t.to_dict() for t in tickets],
                meta={'total': len(tickets)}
            )

        except Exception as e:
            return self.handle_exception(e)

    def post(self, request: HttpRequest) -> JsonResponse:
        """
        Registra novo atendimento.

        Body JSON (camelCase):
        {
            "clientName", "analystName", "locationName",
            "taskTicket", "serviceRequest", "description": obrigatórios,
            "priority", "subjectCode", "status", checklist...: opcionais
        }

        Responde com a coleção relida do armazenamento.
        """
        try:
            data = self.parse_body(request)

            criar_service = self.get_service('criar_ticket_service')
            tickets = criar_service.execute(CriarTicketInputDTO.from_dict(data))

            logger.info(f"API: Ticket criado ({len(tickets)} no total)")

            return json_response(
                success=True,
                data=[t.to_dict() for t in tickets],
                status=201,
                meta={'total': len(tickets)}
            )

        except Exception as e:
            return self.handle_exception(e)


class TicketAPIDetailView(BaseAPIView):
    """
    API para um ticket específico.

    PATCH /tickets/api/<id>/ - Atualização parcial
    """

    def patch(self, request: HttpRequest, pk: str) -> JsonResponse:
        """
        Atualiza campos do ticket.

        Encerrar (status Resolvido) só pelo endpoint de validação.
        """
        try:
            data = self.parse_body(request)

            if not data:
                return json_response(
                    success=False,
                    error="Nenhum campo para atualização",
                    status=400
                )

            atualizar_service = self.get_service('atualizar_ticket_service')
            output = atualizar_service.execute(pk, data)

            return json_response(
                success=True,
                data=output.to_dict()
            )

        except Exception as e:
            return self.handle_exception(e)


class TicketAPIEstatisticasView(BaseAPIView):
    """
    API de estatísticas do dashboard.

    GET /tickets/api/estatisticas/
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            estatisticas_service = self.get_service('obter_estatisticas_service')
            stats = estatisticas_service.execute()

            return json_response(
                success=True,
                data=stats.to_dict()
            )

        except Exception as e:
            return self.handle_exception(e)


class TicketAPIEscalonadosView(BaseAPIView):
    """
    API do quadro de escalonamento.

    GET /tickets/api/escalonados/
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            escalonados_service = self.get_service('listar_escalonados_service')
            tickets = escalonados_service.execute()

            return json_response(
                success=True,
                data=[t.to_dict() for t in tickets],
                meta={'total': len(tickets)}
            )

        except Exception as e:
            return self.handle_exception(e)


class TicketAPIClassificarView(BaseAPIView):
    """
    API de classificação por IA.

    POST /tickets/api/classificar/

    Recebe o rascunho do formulário e devolve o rascunho com
    prioridade, assunto, ação e análise sugeridos. Falha da IA
    nunca vira erro: o resultado padrão é aplicado.
    """

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = self.parse_body(request)

            classificar_service = self.get_service('classificar_ticket_service')
            rascunho = classificar_service.execute(CriarTicketInputDTO.from_dict(data))

            return json_response(
                success=True,
                data=rascunho.to_row()
            )

        except Exception as e:
            return self.handle_exception(e)


class TicketAPIResumoView(BaseAPIView):
    """
    API do resumo do atendimento (texto para área de transferência).

    POST /tickets/api/resumo/
    """

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = self.parse_body(request)
            rascunho = CriarTicketInputDTO.from_dict(data)

            return json_response(
                success=True,
                data={'resumo': gerar_resumo_atendimento(rascunho)}
            )

        except Exception as e:
            return self.handle_exception(e)


class TicketAPIValidacaoView(BaseAPIView):
    """
    API do fluxo de encerramento.

    GET /tickets/api/<id>/validacao/ - Formulário pré-preenchido + resumo
    POST /tickets/api/<id>/validacao/ - Confirma o encerramento

    Body JSON do POST (formulário, camelCase):
    {
        "tag": "#VLDD#|#NLVDD#",
        "witnessName": "string (obrigatório)",
        "witnessId": "string (obrigatório)",
        "editedAnalystAction", "partReplaced", "partName",
        "cardTest", "sicValidation": opcionais
    }
    """

    def get(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            preparar_service = self.get_service('preparar_validacao_service')
            previa = preparar_service.execute(pk)

            return json_response(
                success=True,
                data=previa.to_dict()
            )

        except Exception as e:
            return self.handle_exception(e)

    def post(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            edicoes = edicoes_from_dict(self.parse_body(request))

            if flag(request, 'preview'):
                preparar_service = self.get_service('preparar_validacao_service')
                previa = preparar_service.execute(pk, edicoes)
                return json_response(
                    success=True,
                    data=previa.to_dict()
                )

            validar_service = self.get_service('validar_encerramento_service')
            output = validar_service.execute(pk, edicoes)

            logger.info(f"API: Ticket {pk} encerrado")

            return json_response(
                success=True,
                data=output.to_dict()
            )

        except Exception as e:
            return self.handle_exception(e)
