"""
Armazenamento Django para Tickets.

Implementa o port TicketStore definido no Core.
É um DRIVEN ADAPTER - acionado pelo Core em resposta a operações.

Responsabilidades:
- Implementar TicketStore protocol (list, insert, update)
- Mapear entities para models e vice-versa
- Traduzir erros do banco para a taxonomia de StoreError

Princípios:
- Store não contém lógica de negócio
- Usa Mapper para conversões
- Trata apenas persistência
"""

from contextlib import contextmanager
from typing import Any, Dict, List
import logging

from django.db import DatabaseError, OperationalError, ProgrammingError, transaction

from src.core.shared.exceptions import (
    EntityNotFoundError,
    SchemaError,
    StoreConnectionError,
    StoreError,
)
from src.core.tickets.entities import TicketEntity

from .mappers import TicketMapper
from .models import TicketModel

logger = logging.getLogger(__name__)

# Mensagens de tabela ausente (SQLite / PostgreSQL)
_TABELA_AUSENTE = ("no such table", "does not exist")


@contextmanager
def traduzir_erros_de_banco(operacao: str):
    """
    Converte exceções do Django ORM em StoreError.

    Raises:
        SchemaError: Tabela inexistente (migrations não aplicadas)
        StoreConnectionError: Banco inacessível
        StoreError: Demais erros do banco
    """
    try:
        yield
    except (OperationalError, ProgrammingError) as e:
        mensagem = str(e)
        logger.error(f"Erro de banco em {operacao}: {mensagem}")
        if any(trecho in mensagem.lower() for trecho in _TABELA_AUSENTE):
            raise SchemaError(mensagem, remote_code="42P01") from e
        if isinstance(e, OperationalError):
            raise StoreConnectionError(mensagem) from e
        raise StoreError(mensagem) from e
    except DatabaseError as e:
        logger.error(f"Erro de banco em {operacao}: {e}")
        raise StoreError(str(e)) from e


class DjangoTicketStore:
    """
    Implementação Django do TicketStore.

    Mesma tabela e colunas do Supabase, via ORM.

    Example:
        store = DjangoTicketStore()
        store.insert(TicketEntity.criar(...))
        tickets = store.list()  # mais recentes primeiro
    """

    def __init__(self):
        """Inicializa store."""
        self._mapper = TicketMapper()

    def list(self) -> List[TicketEntity]:
        with traduzir_erros_de_banco("list"):
            models = TicketModel.objects.order_by("-created_at")
            return self._mapper.to_entity_list(list(models))

    def insert(self, ticket: TicketEntity) -> None:
        """
        Insere ticket novo.

        id e created_at da entidade são ignorados (defaults do Model).
        """
        with traduzir_erros_de_banco("insert"):
            model = self._mapper.to_model(ticket)
            with transaction.atomic():
                model.save(force_insert=True)

        logger.info(f"Ticket inserido: {model.id}")

    def update(self, ticket_id: str, patch: Dict[str, Any]) -> None:
        """
        Atualização parcial via UPDATE ... WHERE id = ?.

        Raises:
            EntityNotFoundError: Se nenhuma linha foi afetada
        """
        campos = self._mapper.patch_to_fields(patch)

        with traduzir_erros_de_banco("update"):
            with transaction.atomic():
                if campos:
                    afetados = TicketModel.objects.filter(id=ticket_id).update(**campos)
                else:
                    afetados = TicketModel.objects.filter(id=ticket_id).count()

        if not afetados:
            raise EntityNotFoundError(
                f"Ticket {ticket_id} não encontrado",
                entity_type="Ticket",
                entity_id=ticket_id,
            )

        logger.info(f"Ticket {ticket_id} atualizado: {sorted(campos)}")
