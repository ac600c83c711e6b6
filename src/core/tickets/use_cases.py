"""
Use Cases (Application Services) do Domínio de Tickets.

Este módulo contém os casos de uso da aplicação, que orquestram
a lógica de negócio coordenando entidades, armazenamento e IA.

Use Cases implementados:
- CriarTicketService: Registra novo atendimento
- ListarTicketsService: Lista tickets (com busca)
- AtualizarTicketService: Atualização parcial (sem encerramento)
- ObterEstatisticasService: Números do dashboard
- ListarEscalonadosService: Quadro de escalonamento
- ClassificarTicketService: Sugestão da IA para o formulário
- PrepararValidacaoService: Formulário de encerramento + resumo
- ValidarEncerramentoService: Encerra ticket validado

Responsabilidades dos Use Cases:
- Validar entrada antes de qualquer chamada de rede
- Coordenar entidades
- Retornar DTOs de saída

Princípios:
- Um Use Case = Uma operação de negócio
- Dependências injetadas (DI)
- Sem lógica de infraestrutura
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, List, Optional

from src.core.shared.exceptions import EntityNotFoundError, ValidationError

from .dtos import (
    ClassificacaoDTO,
    CriarTicketInputDTO,
    DashboardStatsDTO,
    TicketOutputDTO,
    ValidacaoPreviaDTO,
    patch_from_row,
)
from .entities import TicketEntity
from .ports import TicketClassifier, TicketStore, sem_campos_imutaveis
from .statistics import calcular_estatisticas, filtrar_tickets
from .summaries import gerar_resumo_validacao
from .validation import (
    TESTEMUNHA_OBRIGATORIA,
    VALIDADO_POR_PADRAO,
    FormularioValidacao,
    checar_patch_manual,
    filtrar_escalonados,
)

logger = logging.getLogger(__name__)


def entidade_from_input(input_dto: CriarTicketInputDTO) -> TicketEntity:
    """
    Valida o formulário de criação e monta a entidade.

    Raises:
        ValidationError: Campo obrigatório vazio ou enum inválido
    """
    dados = input_dto.to_dict()
    if not dados.get("trocou_peca"):
        dados["peca_trocada"] = dados.get("peca_trocada") or None
    return TicketEntity.criar(**dados)


def buscar_ticket(tickets: List[TicketEntity], ticket_id: str) -> TicketEntity:
    """
    Raises:
        EntityNotFoundError: Se ticket não está na coleção
    """
    for ticket in tickets:
        if ticket.id == ticket_id:
            return ticket
    raise EntityNotFoundError(
        f"Ticket {ticket_id} não encontrado",
        entity_type="Ticket",
        entity_id=ticket_id,
    )


def validar_patch(ticket: TicketEntity, patch: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normaliza um patch (camelCase aceito) e valida numa cópia do ticket.

    Returns:
        Patch com chaves snake_case, sem id/created_at

    Raises:
        ValidationError: Campo desconhecido ou enum inválido
    """
    patch = sem_campos_imutaveis(patch_from_row(patch))
    replace(ticket).aplicar_patch(patch)
    return patch


class CriarTicketService:
    """
    Use Case: Registrar um novo atendimento.

    Fluxo:
    1. Validar dados de entrada (sem rede)
    2. Inserir no armazenamento
    3. Reler a coleção (id e created_at vêm do armazenamento)

    Example:
        service = CriarTicketService(store)
        tickets = service.execute(CriarTicketInputDTO(
            client_name="Banco A",
            analyst_name="João",
            location_name="Agência Centro",
            task_ticket="TASK-001",
            service_request="SR-001",
            description="Terminal não dispensa cédulas",
        ))
    """

    def __init__(self, store: TicketStore):
        self.store = store

    def execute(self, input_dto: CriarTicketInputDTO) -> List[TicketOutputDTO]:
        """
        Executa criação de ticket.

        Returns:
            Coleção atualizada, mais recentes primeiro

        Raises:
            ValidationError: Se dados inválidos
            StoreError: Se falha no armazenamento
        """
        ticket = entidade_from_input(input_dto)
        self.store.insert(ticket)
        logger.info(f"Ticket criado: task={ticket.task_ticket} cliente={ticket.client_name}")
        return [TicketOutputDTO.from_entity(t) for t in self.store.list()]


class ListarTicketsService:
    """
    Use Case: Listar tickets.

    Busca opcional por cliente, ação do analista ou task.
    """

    def __init__(self, store: TicketStore):
        self.store = store

    def execute(self, termo: str = "") -> List[TicketOutputDTO]:
        tickets = filtrar_tickets(self.store.list(), termo)
        return [TicketOutputDTO.from_entity(t) for t in tickets]


class AtualizarTicketService:
    """
    Use Case: Atualização parcial de um ticket.

    Encerrar (status Resolvido) e os campos de auditoria ficam
    reservados ao ValidarEncerramentoService.
    """

    def __init__(self, store: TicketStore):
        self.store = store

    def execute(self, ticket_id: str, patch: Dict[str, Any]) -> TicketOutputDTO:
        """
        Aplica o patch e devolve o ticket como ficou.

        Raises:
            BusinessRuleViolationError: Tentativa de encerrar sem validação
            ValidationError: Campo desconhecido ou enum inválido
            EntityNotFoundError: Se ticket não existe
            StoreError: Se falha no armazenamento
        """
        normalizado = patch_from_row(patch)
        checar_patch_manual(normalizado)

        ticket = buscar_ticket(self.store.list(), ticket_id)
        normalizado = validar_patch(ticket, normalizado)

        self.store.update(ticket_id, normalizado)
        ticket.aplicar_patch(normalizado)
        logger.info(f"Ticket {ticket_id} atualizado: {sorted(normalizado)}")
        return TicketOutputDTO.from_entity(ticket)


class ObterEstatisticasService:
    """Use Case: Números do dashboard."""

    def __init__(self, store: TicketStore):
        self.store = store

    def execute(self, agora: Optional[datetime] = None) -> DashboardStatsDTO:
        return calcular_estatisticas(self.store.list(), agora)


class ListarEscalonadosService:
    """Use Case: Quadro de escalonamento (prioritários não resolvidos)."""

    def __init__(self, store: TicketStore):
        self.store = store

    def execute(self) -> List[TicketOutputDTO]:
        return [
            TicketOutputDTO.from_entity(t)
            for t in filtrar_escalonados(self.store.list())
        ]


class ClassificarTicketService:
    """
    Use Case: Aplicar a sugestão da IA ao formulário de criação.

    Regras:
    - Prioridade e assunto são substituídos
    - Ação do analista só é preenchida se estiver vazia
    - ai_analysis recebe o próximo passo sugerido
    - Sem descrição ou sem cliente: nada é feito (a IA não é chamada)
    """

    def __init__(self, classifier: TicketClassifier):
        self.classifier = classifier

    def execute(self, input_dto: CriarTicketInputDTO) -> CriarTicketInputDTO:
        if not input_dto.description.strip() or not input_dto.client_name.strip():
            return input_dto

        resultado = self.classifier.classificar(
            input_dto.description, input_dto.client_name
        )
        return self.aplicar(input_dto, resultado)

    @staticmethod
    def aplicar(
        input_dto: CriarTicketInputDTO,
        resultado: ClassificacaoDTO,
    ) -> CriarTicketInputDTO:
        return input_dto.with_changes(
            priority=resultado.prioridade.value,
            subject_code=resultado.codigo_assunto.value,
            analyst_action=input_dto.analyst_action or resultado.acao_analista,
            ai_analysis=resultado.proximo_passo,
        )


class PrepararValidacaoService:
    """
    Use Case: Abrir o formulário de encerramento.

    Devolve o formulário pré-preenchido (com as edições informadas,
    se houver) e o resumo de validação. Nada é gravado.
    """

    def __init__(self, store: TicketStore):
        self.store = store

    def execute(
        self,
        ticket_id: str,
        edicoes: Optional[Dict[str, Any]] = None,
    ) -> ValidacaoPreviaDTO:
        ticket = buscar_ticket(self.store.list(), ticket_id)
        form = FormularioValidacao.from_ticket(ticket)
        if edicoes:
            form = form.com_edicoes(**edicoes)
        return ValidacaoPreviaDTO(
            formulario=form,
            resumo=gerar_resumo_validacao(ticket, form),
        )


class ValidarEncerramentoService:
    """
    Use Case: Encerrar um ticket validado.

    Fluxo:
    1. Buscar ticket e montar o formulário com as edições
    2. Exigir nome e matrícula da testemunha
    3. Gravar tags, testemunha, ação, status Resolvido e auditoria
    """

    def __init__(self, store: TicketStore, validated_by: str = VALIDADO_POR_PADRAO):
        self.store = store
        self.validated_by = validated_by

    def execute(
        self,
        ticket_id: str,
        edicoes: Optional[Dict[str, Any]] = None,
        agora: Optional[datetime] = None,
    ) -> TicketOutputDTO:
        """
        Raises:
            ValidationError: Sem testemunha (nada é gravado)
            EntityNotFoundError: Se ticket não existe
            StoreError: Se falha no armazenamento
        """
        ticket = buscar_ticket(self.store.list(), ticket_id)
        form = FormularioValidacao.from_ticket(ticket).com_edicoes(**(edicoes or {}))

        if not form.pode_confirmar:
            logger.info(f"Encerramento do ticket {ticket_id} recusado: sem testemunha")
            raise ValidationError(TESTEMUNHA_OBRIGATORIA, field=form.testemunha_pendente)

        patch = form.to_patch(agora, validated_by=self.validated_by)

        self.store.update(ticket_id, patch)
        ticket.aplicar_patch(patch)
        logger.info(f"Ticket {ticket_id} encerrado com {form.tag.value}")
        return TicketOutputDTO.from_entity(ticket)
