"""
Testes para a API JSON do Diário de Bordo.

Testa:
- Listagem, criação e atualização
- Estatísticas e quadro de escalonamento
- Classificação e resumo
- Encerramento (prévia e confirmação)
- Tradução de erros para status HTTP

O TicketStore do container é substituído por um InMemoryTicketStore;
nenhum banco é acessado.
"""

import json

import pytest
from dependency_injector import providers
from django.test import Client

from src.config.container import get_container
from src.core.tickets.dtos import ClassificacaoDTO
from src.core.tickets.entities import SubjectCode, TicketPriority, TicketStatus
from src.core.tickets.ports import InMemoryTicketStore
from src.core.shared.exceptions import (
    SchemaError,
    StoreConnectionError,
    StorePermissionError,
)


API = "/tickets/api/"


class FixedClassifier:
    def classificar(self, descricao, cliente):
        return ClassificacaoDTO(
            prioridade=TicketPriority.ALTA,
            codigo_assunto=SubjectCode.CODE_1204,
            acao_analista="Sensor obstruído",
            proximo_passo="Limpar sensores",
        )


@pytest.fixture
def client():
    """Django test client."""
    return Client()


@pytest.fixture
def api_store():
    """InMemoryTicketStore injetado no container."""
    store = InMemoryTicketStore()
    container = get_container()
    container.ticket_store.override(providers.Object(store))
    container.ticket_classifier.override(providers.Object(FixedClassifier()))
    yield store
    container.ticket_store.reset_override()
    container.ticket_classifier.reset_override()


@pytest.fixture
def payload():
    return {
        "clientName": "Banco Alfa",
        "analystName": "João",
        "locationName": "Agência Centro",
        "taskTicket": "TASK-001",
        "serviceRequest": "SR-001",
        "description": "Terminal não dispensa cédulas",
    }


def post_json(client, url, data):
    return client.post(url, data=json.dumps(data), content_type="application/json")


def patch_json(client, url, data):
    return client.patch(url, data=json.dumps(data), content_type="application/json")


class TestTicketAPIListView:
    """Testes para TicketAPIListView."""

    def test_get_lista_tickets(self, client, api_store, ticket_factory):
        api_store.adicionar(ticket_factory(client_name="Banco Alfa"))
        api_store.adicionar(ticket_factory(client_name="Banco Beta"))

        response = client.get(API)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["meta"]["total"] == 2
        assert body["data"][0]["clientName"] == "Banco Alfa"
        assert "noEscalonamento" in body["data"][0]

    def test_get_com_busca(self, client, api_store, ticket_factory):
        api_store.adicionar(ticket_factory(client_name="Banco Alfa"))
        api_store.adicionar(ticket_factory(task_ticket="TASK-XYZ"))

        response = client.get(API, {"q": "xyz"})

        assert [t["taskTicket"] for t in response.json()["data"]] == ["TASK-XYZ"]

    def test_post_cria_ticket(self, client, api_store, payload):
        response = post_json(client, API, {**payload, "priority": "Alta", "id": "ignorado"})

        assert response.status_code == 201
        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["priority"] == "Alta"
        assert data[0]["id"] != "ignorado"
        assert data[0]["createdAt"]

    def test_post_campo_obrigatorio(self, client, api_store, payload):
        response = post_json(client, API, {**payload, "clientName": ""})

        assert response.status_code == 400
        assert response.json()["meta"]["field"] == "client_name"
        assert api_store.chamadas == []

    def test_post_json_invalido(self, client, api_store):
        response = client.post(API, data="{", content_type="application/json")

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_erro_de_schema_vira_500(self, client, api_store):
        api_store.simular_falha("list", SchemaError("relation does not exist", remote_code="42P01"))

        response = client.get(API)

        assert response.status_code == 500
        body = response.json()
        assert body["error"].startswith('Tabela "tickets" não encontrada')
        assert body["meta"] == {"code": "SCHEMA_ERROR", "remote_code": "42P01"}

    def test_erro_de_permissao_vira_403(self, client, api_store, payload):
        api_store.simular_falha("insert", StorePermissionError("rls"))

        response = post_json(client, API, payload)

        assert response.status_code == 403
        assert response.json()["meta"]["code"] == "PERMISSION_ERROR"

    def test_erro_de_conexao_vira_503(self, client, api_store):
        api_store.simular_falha("list", StoreConnectionError("offline"))

        response = client.get(API)

        assert response.status_code == 503
        assert response.json()["success"] is False


class TestTicketAPIDetailView:
    """Testes para TicketAPIDetailView (PATCH)."""

    def test_patch(self, client, api_store, ticket_factory):
        api_store.adicionar(ticket_factory(id="t1"))

        response = patch_json(client, f"{API}t1/", {"status": "Escalado"})

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "Escalado"
        assert api_store.get("t1").status == TicketStatus.ESCALADO

    def test_patch_resolvido_recusado(self, client, api_store, ticket_factory):
        api_store.adicionar(ticket_factory(id="t1"))

        response = patch_json(client, f"{API}t1/", {"status": "Resolvido"})

        assert response.status_code == 422
        assert response.json()["meta"]["rule"] == "encerramento_exige_validacao"

    def test_patch_inexistente(self, client, api_store):
        response = patch_json(client, f"{API}nao-existe/", {"priority": "Alta"})
        assert response.status_code == 404

    def test_patch_vazio(self, client, api_store):
        response = patch_json(client, f"{API}t1/", {})
        assert response.status_code == 400


class TestTicketAPIEstatisticasView:
    def test_estatisticas(self, client, api_store, ticket_factory):
        api_store.adicionar(ticket_factory(priority="Crítica", status="Resolvido",
                                           subject_code="1206 - Erro de HW"))
        api_store.adicionar(ticket_factory())

        response = client.get(f"{API}estatisticas/")

        data = response.json()["data"]
        assert data["totalTickets"] == 2
        assert data["openTickets"] == 1
        assert data["escalatedTickets"] == 1
        assert data["subjectVolume"] == [
            {"name": "1206", "count": 1},
            {"name": "1200", "count": 1},
        ]


class TestTicketAPIEscalonadosView:
    def test_quadro(self, client, api_store, ticket_factory):
        api_store.adicionar(ticket_factory(id="a", priority="Alta"))
        api_store.adicionar(ticket_factory(id="b", priority="Crítica", status="Resolvido"))

        response = client.get(f"{API}escalonados/")

        assert [t["id"] for t in response.json()["data"]] == ["a"]


class TestTicketAPIClassificarView:
    def test_classificar(self, client, api_store, payload):
        response = post_json(client, f"{API}classificar/", payload)

        data = response.json()["data"]
        assert response.status_code == 200
        assert data["priority"] == "Alta"
        assert data["subjectCode"] == "1204 - Status sensores"
        assert data["analystAction"] == "Sensor obstruído"
        assert data["aiAnalysis"] == "Limpar sensores"
        assert api_store.chamadas == []

    @pytest.mark.parametrize("campo,valor", [
        ("description", None),
        ("clientName", None),
        ("trocouPeca", "sim"),
    ])
    def test_classificar_tipo_invalido(self, client, api_store, payload, campo, valor):
        response = post_json(client, f"{API}classificar/", {**payload, campo: valor})

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestTicketAPIResumoView:
    def test_resumo(self, client, api_store, payload):
        response = post_json(client, f"{API}resumo/", payload)

        resumo = response.json()["data"]["resumo"]
        assert resumo.startswith("*RESUMO DO ATENDIMENTO*")
        assert "*Cliente:* Banco Alfa" in resumo


class TestTicketAPIValidacaoView:
    """Testes do fluxo de encerramento via API."""

    def test_get_formulario(self, client, api_store, ticket_factory):
        api_store.adicionar(ticket_factory(id="t1", analyst_action="Trocado sensor"))

        response = client.get(f"{API}t1/validacao/")

        data = response.json()["data"]
        assert data["formulario"]["editedAnalystAction"] == "Trocado sensor"
        assert data["formulario"]["podeConfirmar"] is False
        assert data["resumo"].startswith("RESUMO DE VALIDAÇÃO")

    def test_preview_nao_grava(self, client, api_store, ticket_factory):
        api_store.adicionar(ticket_factory(id="t1"))

        response = post_json(client, f"{API}t1/validacao/?preview=1",
                             {"witnessName": "Ana", "witnessId": "M-1"})

        assert response.json()["data"]["formulario"]["podeConfirmar"] is True
        assert "update" not in api_store.chamadas

    def test_confirmar(self, client, api_store, ticket_factory):
        api_store.adicionar(ticket_factory(id="t1", priority="Alta"))

        response = post_json(client, f"{API}t1/validacao/", {
            "tag": "#NLVDD#",
            "witnessName": "Ana",
            "witnessId": "M-1",
            "sicValidation": {"saques": True},
        })

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "Resolvido"
        assert data["tagNVLDD"] is True
        assert data["validatedBy"] == "Sistema"
        assert data["noEscalonamento"] is False

    def test_confirmar_sem_testemunha(self, client, api_store, ticket_factory):
        api_store.adicionar(ticket_factory(id="t1"))

        response = post_json(client, f"{API}t1/validacao/", {"witnessName": "Ana"})

        assert response.status_code == 400
        assert "update" not in api_store.chamadas
        assert api_store.get("t1").status == TicketStatus.ABERTO

    @pytest.mark.parametrize("body,campo", [
        ({"witnessName": None, "witnessId": "1"}, "witness_name"),
        ({"witnessName": "Ana", "witnessId": 1}, "witness_id"),
        ({"witnessName": "Ana", "witnessId": "1", "sicValidation": ["saques"]}, "sic_validation"),
        ({"witnessName": "Ana", "witnessId": "1", "cardTest": "sim"}, "card_test"),
    ])
    def test_formulario_com_tipo_invalido(self, client, api_store, ticket_factory, body, campo):
        api_store.adicionar(ticket_factory(id="t1"))

        response = post_json(client, f"{API}t1/validacao/", body)

        assert response.status_code == 400
        assert response.json()["meta"]["field"] == campo
        assert "update" not in api_store.chamadas


class TestHealth:
    def test_health(self, client):
        response = client.get("/health/")
        assert response.json() == {"status": "ok"}
