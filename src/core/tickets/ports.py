"""
Ports (Interfaces) do Domínio de Tickets.

Define os contratos que os Adapters de infraestrutura devem implementar
para persistência de tickets e classificação automática.

Tipos de Ports:
- TicketStore: Armazenamento de tickets (listar, inserir, atualizar)
- TicketClassifier: Classificação do relato por IA

Princípio:
    Core define interfaces → Adapters implementam
    Dependências sempre apontam para o Core

Example:
    # No Adapter (Supabase)
    class SupabaseTicketStore:
        def list(self) -> List[TicketEntity]:
            rows = self._request("GET", params={"order": "createdAt.desc"})
            return [row_to_entity(row) for row in rows]
"""

import copy
import itertools
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable
from uuid import uuid4

from src.core.shared.exceptions import EntityNotFoundError

from .dtos import CLASSIFICACAO_SEM_IA, ClassificacaoDTO
from .entities import CAMPOS_IMUTAVEIS, TicketEntity


@runtime_checkable
class TicketStore(Protocol):
    """
    Interface para o armazenamento de Tickets.

    Três operações apenas: a coleção inteira é relida após cada
    escrita, então não há busca por id nem exclusão.

    Implementações:
    - SupabaseTicketStore (PostgREST via HTTP)
    - DjangoTicketStore (ORM)
    - InMemoryTicketStore (para testes)

    Falhas são sempre subclasses de StoreError:
    StoreConnectionError, SchemaError ou StorePermissionError.
    """

    def list(self) -> List[TicketEntity]:
        """
        Lista todos os tickets, mais recentes primeiro (created_at desc).

        Raises:
            StoreError: Se falha no armazenamento
        """
        ...

    def insert(self, ticket: TicketEntity) -> None:
        """
        Insere um ticket novo.

        id e created_at do ticket são ignorados: o armazenamento
        atribui os dois.
        """
        ...

    def update(self, ticket_id: str, patch: Dict[str, Any]) -> None:
        """
        Mescla uma atualização parcial no ticket.

        id e created_at presentes no patch são descartados.

        Raises:
            EntityNotFoundError: Se ticket não existe
            StoreError: Se falha no armazenamento
        """
        ...


def sem_campos_imutaveis(patch: Dict[str, Any]) -> Dict[str, Any]:
    """Remove id e created_at de um patch."""
    return {k: v for k, v in patch.items() if k not in CAMPOS_IMUTAVEIS}


class InMemoryTicketStore:
    """
    Implementação em memória do TicketStore.

    Útil para:
    - Testes unitários
    - Desenvolvimento local sem Supabase

    Guarda cópias: mutar uma entidade devolvida por list() não
    altera o armazenamento.

    Example:
        store = InMemoryTicketStore()
        store.simular_falha("update", StoreConnectionError("offline"))
        store.update("abc", {"priority": "Alta"})  # levanta StoreConnectionError
    """

    def __init__(self, tickets: Optional[List[TicketEntity]] = None):
        self._tickets: Dict[str, TicketEntity] = {}
        self._ordem: Dict[str, int] = {}
        self._seq = itertools.count()
        self._falhas: Dict[str, Exception] = {}
        self.chamadas: List[str] = []

        for ticket in tickets or []:
            self.adicionar(ticket)

    def adicionar(self, ticket: TicketEntity) -> TicketEntity:
        """Grava o ticket como está (id e created_at preenchidos se vazios)."""
        ticket = copy.deepcopy(ticket)
        if not ticket.id:
            ticket.id = str(uuid4())
        if ticket.created_at is None:
            ticket.created_at = datetime.now(timezone.utc)
        self._tickets[ticket.id] = ticket
        self._ordem[ticket.id] = next(self._seq)
        return copy.deepcopy(ticket)

    def simular_falha(self, operacao: str, erro: Exception) -> None:
        """Faz a operação ("list", "insert", "update") levantar `erro`."""
        self._falhas[operacao] = erro

    def limpar_falhas(self) -> None:
        self._falhas.clear()

    def _registrar(self, operacao: str) -> None:
        self.chamadas.append(operacao)
        erro = self._falhas.get(operacao)
        if erro is not None:
            raise erro

    def list(self) -> List[TicketEntity]:
        self._registrar("list")
        ordenados = sorted(
            self._tickets.values(),
            key=lambda t: (t.created_at, self._ordem[t.id]),
            reverse=True,
        )
        return [copy.deepcopy(t) for t in ordenados]

    def insert(self, ticket: TicketEntity) -> None:
        self._registrar("insert")
        novo = copy.deepcopy(ticket)
        novo.id = ""
        novo.created_at = None
        self.adicionar(novo)

    def update(self, ticket_id: str, patch: Dict[str, Any]) -> None:
        self._registrar("update")
        ticket = self._tickets.get(ticket_id)
        if ticket is None:
            raise EntityNotFoundError(
                f"Ticket {ticket_id} não encontrado",
                entity_type="Ticket",
                entity_id=ticket_id,
            )
        ticket.aplicar_patch(sem_campos_imutaveis(patch))

    def get(self, ticket_id: str) -> Optional[TicketEntity]:
        """Leitura direta (apenas testes)."""
        ticket = self._tickets.get(ticket_id)
        return copy.deepcopy(ticket) if ticket else None

    def count(self) -> int:
        return len(self._tickets)

    def clear(self) -> None:
        """Limpa todos os dados (útil para testes)."""
        self._tickets.clear()
        self._ordem.clear()
        self.chamadas.clear()


@runtime_checkable
class TicketClassifier(Protocol):
    """
    Interface para classificação automática do relato.

    Contrato: nunca levanta exceção. Qualquer falha (sem chave,
    rede, resposta malformada) vira um resultado padrão.
    """

    def classificar(self, descricao: str, cliente: str) -> ClassificacaoDTO:
        ...


class NullTicketClassifier:
    """Classificador usado quando não há chave de API configurada."""

    def classificar(self, descricao: str, cliente: str) -> ClassificacaoDTO:
        return CLASSIFICACAO_SEM_IA
