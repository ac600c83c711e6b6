"""
Estado da aplicação do Diário de Bordo.

DiarioDeBordoState é o dono da coleção de tickets em memória. As
visões (estatísticas, quadro de escalonamento, busca) são sempre
recalculadas a partir dela.

Atualizações são otimistas:
    with OptimisticUpdateUnitOfWork(state, ticket_id, patch):
        store.update(ticket_id, patch)
    # begin:    patch aplicado localmente
    # rollback: cópia anterior restaurada, coleção relida do armazenamento
"""

import copy
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from src.core.shared.exceptions import DomainException, StoreError
from src.core.shared.interfaces import UnitOfWork

from .dtos import CriarTicketInputDTO, DashboardStatsDTO, patch_from_row
from .entities import TicketEntity
from .ports import NullTicketClassifier, TicketClassifier, TicketStore
from .statistics import calcular_estatisticas, filtrar_tickets
from .summaries import gerar_resumo_validacao
from .use_cases import (
    ClassificarTicketService,
    buscar_ticket,
    entidade_from_input,
    validar_patch,
)
from .validation import (
    VALIDADO_POR_PADRAO,
    FormularioValidacao,
    checar_patch_manual,
    filtrar_escalonados,
)

logger = logging.getLogger(__name__)


class OptimisticUpdateUnitOfWork(UnitOfWork):
    """
    Atualização otimista de um ticket da coleção local.

    Não há transação remota. O rollback restaura a cópia tirada antes
    do patch e depois relê a coleção inteira; se a releitura também
    falhar, fica a cópia, nunca a mudança não gravada.
    """

    def __init__(self, state: "DiarioDeBordoState", ticket_id: str, patch: Dict[str, Any]):
        self._state = state
        self._ticket_id = ticket_id
        self._patch = patch
        self._snapshot: List[TicketEntity] = []

    def _begin_transaction(self) -> None:
        self._snapshot = copy.deepcopy(self._state.tickets)
        for ticket in self._state.tickets:
            if ticket.id == self._ticket_id:
                ticket.aplicar_patch(self._patch)

    def commit(self) -> None:
        logger.debug(f"Atualização do ticket {self._ticket_id} confirmada")

    def rollback(self) -> None:
        logger.warning(f"Atualização do ticket {self._ticket_id} falhou, relendo coleção")
        self._state.tickets = self._snapshot
        self._state.recarregar()


class DiarioDeBordoState:
    """
    Coleção de tickets, indicador de carregamento, erro e notificações.

    Attributes:
        tickets: Coleção atual, mais recentes primeiro
        carregando: Indicador global de operação em andamento
        erro: Mensagem da última falha de leitura (tela de erro com
            opção de tentar novamente)
        notificacoes: Mensagens de falha de escrita para o operador

    Example:
        state = DiarioDeBordoState(store)
        state.recarregar()
        state.atualizar(ticket_id, {"status": "Escalado"})
        state.estatisticas()
    """

    def __init__(
        self,
        store: TicketStore,
        classifier: Optional[TicketClassifier] = None,
        validated_by: str = VALIDADO_POR_PADRAO,
        relogio: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.classifier = classifier or NullTicketClassifier()
        self.validated_by = validated_by
        self.relogio = relogio

        self.tickets: List[TicketEntity] = []
        self.carregando = False
        self.erro: Optional[str] = None
        self.notificacoes: List[str] = []

    # -------------------------------------------------------------------------
    # Leitura
    # -------------------------------------------------------------------------

    def recarregar(self) -> bool:
        """
        Relê a coleção do armazenamento.

        Falha mantém os dados anteriores e preenche `erro`.
        """
        self.carregando = True
        try:
            self.tickets = self.store.list()
            self.erro = None
            return True
        except StoreError as e:
            logger.error(f"Falha ao carregar tickets: {e}")
            self.erro = e.mensagem_usuario
            return False
        finally:
            self.carregando = False

    # -------------------------------------------------------------------------
    # Escrita
    # -------------------------------------------------------------------------

    def criar(self, input_dto: CriarTicketInputDTO) -> bool:
        """
        Registra um atendimento.

        Returns:
            False em falha (o chamador mantém o formulário preenchido)
        """
        try:
            ticket = entidade_from_input(input_dto)
        except DomainException as e:
            self._notificar(e.mensagem_usuario)
            return False

        self.carregando = True
        try:
            self.store.insert(ticket)
        except StoreError as e:
            logger.error(f"Falha ao criar ticket: {e}")
            self.carregando = False
            self._notificar(f"Erro ao salvar: {e.mensagem_usuario}")
            return False

        self.recarregar()
        return True

    def atualizar(self, ticket_id: str, patch: Dict[str, Any]) -> bool:
        """
        Atualização parcial otimista.

        Raises:
            BusinessRuleViolationError: Encerramento fora do fluxo de validação
            ValidationError: Campo desconhecido ou enum inválido
            EntityNotFoundError: Ticket fora da coleção local
        """
        checar_patch_manual(patch_from_row(patch))
        return self._aplicar(ticket_id, patch)

    def _aplicar(self, ticket_id: str, patch: Dict[str, Any]) -> bool:
        ticket = buscar_ticket(self.tickets, ticket_id)
        patch = validar_patch(ticket, patch)

        try:
            with OptimisticUpdateUnitOfWork(self, ticket_id, patch):
                self.store.update(ticket_id, patch)
        except DomainException as e:
            logger.error(f"Falha ao atualizar ticket {ticket_id}: {e}")
            self._notificar(f"Erro ao atualizar: {e.mensagem_usuario}")
            return False
        return True

    # -------------------------------------------------------------------------
    # Encerramento
    # -------------------------------------------------------------------------

    def abrir_validacao(self, ticket_id: str) -> FormularioValidacao:
        return FormularioValidacao.from_ticket(buscar_ticket(self.tickets, ticket_id))

    def resumo_validacao(self, form: FormularioValidacao) -> str:
        return gerar_resumo_validacao(buscar_ticket(self.tickets, form.ticket_id), form)

    def confirmar_validacao(self, form: FormularioValidacao) -> bool:
        """
        Encerra o ticket do formulário.

        Sem nome e matrícula da testemunha não faz nada: nem o ticket
        nem o armazenamento são tocados.
        """
        if not form.pode_confirmar:
            return False
        patch = form.to_patch(self._agora(), validated_by=self.validated_by)
        return self._aplicar(form.ticket_id, patch)

    # -------------------------------------------------------------------------
    # IA
    # -------------------------------------------------------------------------

    def classificar(self, input_dto: CriarTicketInputDTO) -> CriarTicketInputDTO:
        return ClassificarTicketService(self.classifier).execute(input_dto)

    # -------------------------------------------------------------------------
    # Visões derivadas
    # -------------------------------------------------------------------------

    def estatisticas(self, agora: Optional[datetime] = None) -> DashboardStatsDTO:
        return calcular_estatisticas(self.tickets, agora or self._agora())

    def escalonados(self) -> List[TicketEntity]:
        return filtrar_escalonados(self.tickets)

    def filtrar(self, termo: str = "") -> List[TicketEntity]:
        return filtrar_tickets(self.tickets, termo)

    def _notificar(self, mensagem: str) -> None:
        self.notificacoes.append(mensagem)

    def _agora(self) -> Optional[datetime]:
        return self.relogio() if self.relogio else None
