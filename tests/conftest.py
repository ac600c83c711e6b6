"""
Configurações globais do Pytest para o Diário de Bordo.

Este arquivo é carregado automaticamente pelo pytest e
fornece fixtures e configurações compartilhadas.

Django é configurado pelo pytest-django (DJANGO_SETTINGS_MODULE
no pyproject.toml).
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from src.config.container import reset_container
from src.core.tickets.entities import TicketEntity
from src.core.tickets.ports import InMemoryTicketStore


# Instante fixo para testes que dependem de "hoje"
AGORA = datetime(2024, 5, 10, 15, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def project_root():
    """Retorna o caminho raiz do projeto."""
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def reset_di_container():
    """
    Reset do container entre testes.

    Garante que cada teste inicia com estado limpo.
    """
    reset_container()
    yield
    reset_container()


@pytest.fixture
def agora():
    return AGORA


@pytest.fixture
def dados_ticket():
    """Campos obrigatórios de um atendimento válido."""
    return {
        "client_name": "Banco Alfa",
        "analyst_name": "João Silva",
        "location_name": "Agência Centro",
        "task_ticket": "TASK-001",
        "service_request": "SR-001",
        "description": "Terminal não dispensa cédulas",
    }


@pytest.fixture
def ticket_factory(dados_ticket):
    """
    Factory de TicketEntity já "persistida" (id e created_at preenchidos).

    Cada ticket criado é um minuto mais antigo que o anterior.
    """
    contador = {"n": 0}

    def create_ticket(**kwargs):
        n = contador["n"]
        contador["n"] += 1
        dados = dict(dados_ticket)
        dados.update(kwargs)
        ticket_id = dados.pop("id", f"ticket-{n}")
        created_at = dados.pop("created_at", AGORA - timedelta(minutes=n))
        ticket = TicketEntity.criar(**dados)
        ticket.id = ticket_id
        ticket.created_at = created_at
        return ticket

    return create_ticket


@pytest.fixture
def store():
    """Armazenamento em memória para testes unitários."""
    return InMemoryTicketStore()
