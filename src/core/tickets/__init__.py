"""
Domínio de Tickets - Diário de Bordo.

Este módulo contém toda a lógica de negócio relacionada aos
atendimentos técnicos, incluindo:
- Entidades (TicketEntity, TicketStatus, TicketPriority, SubjectCode)
- Estatísticas derivadas do dashboard
- Fluxo de escalonamento e validação (encerramento)
- Use Cases (CriarTicket, AtualizarTicket, ValidarEncerramento)
- DTOs (Input/Output Data Transfer Objects)
- Ports (armazenamento e classificação por IA)
- Estado da aplicação com atualização otimista

Características do Domínio:
- Estatísticas recalculadas a cada leitura, nunca armazenadas
- Encerramento apenas com testemunha do cliente
- IA opcional: sem chave, resultado padrão
"""

from .entities import TicketEntity, TicketStatus, TicketPriority, SubjectCode
from .dtos import (
    CriarTicketInputDTO,
    TicketOutputDTO,
    DashboardStatsDTO,
    ClassificacaoDTO,
    ValidacaoPreviaDTO,
)
from .ports import (
    TicketStore,
    InMemoryTicketStore,
    TicketClassifier,
    NullTicketClassifier,
)
from .validation import FormularioValidacao, SicValidation, ValidationTag
from .use_cases import (
    CriarTicketService,
    ListarTicketsService,
    AtualizarTicketService,
    ObterEstatisticasService,
    ListarEscalonadosService,
    ClassificarTicketService,
    PrepararValidacaoService,
    ValidarEncerramentoService,
)
from .state import DiarioDeBordoState

__all__ = [
    # Entities
    "TicketEntity",
    "TicketStatus",
    "TicketPriority",
    "SubjectCode",
    # DTOs
    "CriarTicketInputDTO",
    "TicketOutputDTO",
    "DashboardStatsDTO",
    "ClassificacaoDTO",
    "ValidacaoPreviaDTO",
    # Ports
    "TicketStore",
    "InMemoryTicketStore",
    "TicketClassifier",
    "NullTicketClassifier",
    # Validation
    "FormularioValidacao",
    "SicValidation",
    "ValidationTag",
    # Use Cases
    "CriarTicketService",
    "ListarTicketsService",
    "AtualizarTicketService",
    "ObterEstatisticasService",
    "ListarEscalonadosService",
    "ClassificarTicketService",
    "PrepararValidacaoService",
    "ValidarEncerramentoService",
    # State
    "DiarioDeBordoState",
]
