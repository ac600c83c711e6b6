"""
Testes do DjangoTicketStore (ORM).

Usa o banco de testes do pytest-django (SQLite).
"""

from datetime import timedelta
from unittest.mock import patch

import pytest
from django.db import OperationalError

from src.adapters.django_app.tickets.mappers import TicketMapper
from src.adapters.django_app.tickets.models import TicketModel
from src.adapters.django_app.tickets.repositories import (
    DjangoTicketStore,
    traduzir_erros_de_banco,
)
from src.core.tickets.entities import TicketPriority, TicketStatus
from src.core.tickets.ports import TicketStore
from src.core.shared.exceptions import (
    EntityNotFoundError,
    SchemaError,
    StoreConnectionError,
)


@pytest.fixture
def django_store():
    return DjangoTicketStore()


@pytest.mark.django_db
class TestDjangoTicketStore:
    """Testes para DjangoTicketStore."""

    def test_implementa_protocolo(self, django_store):
        assert isinstance(django_store, TicketStore)

    def test_insert_atribui_id_e_created_at(self, django_store, ticket_factory):
        django_store.insert(ticket_factory(id="ignorado", priority="Alta"))

        model = TicketModel.objects.get()
        assert model.id != "ignorado"
        assert len(model.id) == 36
        assert model.created_at is not None
        assert model.priority == "Alta"

    def test_list_mais_recentes_primeiro(self, django_store, ticket_factory, agora):
        for minutos, task in ((10, "TASK-A"), (0, "TASK-C"), (5, "TASK-B")):
            model = TicketMapper.to_model(ticket_factory(task_ticket=task))
            model.created_at = agora - timedelta(minutes=minutos)
            model.save(force_insert=True)

        tickets = django_store.list()

        assert [t.task_ticket for t in tickets] == ["TASK-C", "TASK-B", "TASK-A"]
        assert tickets[0].priority == TicketPriority.MEDIA

    def test_update_parcial(self, django_store, ticket_factory):
        django_store.insert(ticket_factory())
        ticket_id = TicketModel.objects.get().id

        django_store.update(ticket_id, {
            "status": TicketStatus.ESCALADO,
            "customer_witness_id": "M-1",
            "id": "outro",
        })

        model = TicketModel.objects.get(id=ticket_id)
        assert model.status == "Escalado"
        assert model.customer_witness_id == "M-1"

    def test_update_inexistente(self, django_store):
        with pytest.raises(EntityNotFoundError):
            django_store.update("nao-existe", {"priority": "Alta"})

    def test_ida_e_volta_preserva_campos(self, django_store, ticket_factory):
        django_store.insert(ticket_factory(
            trocou_peca=True, peca_trocada="Fonte", ai_analysis="Sugestão",
        ))

        ticket = django_store.list()[0]

        assert ticket.peca_trocada == "Fonte"
        assert ticket.ai_analysis == "Sugestão"
        assert ticket.validated_by is None


class TestTraduzirErrosDeBanco:
    def test_tabela_ausente(self):
        with pytest.raises(SchemaError) as exc_info:
            with traduzir_erros_de_banco("list"):
                raise OperationalError("no such table: tickets")
        assert exc_info.value.remote_code == "42P01"

    def test_banco_inacessivel(self):
        with pytest.raises(StoreConnectionError):
            with traduzir_erros_de_banco("list"):
                raise OperationalError("could not connect to server")

    def test_list_traduz_erro(self, django_store):
        with patch.object(TicketModel.objects, "order_by",
                          side_effect=OperationalError("no such table: tickets")):
            with pytest.raises(SchemaError):
                django_store.list()
