"""
Testes Unitários para Entidades do Domínio de Tickets.

Testa:
- Conversão dos enums (nome ou valor literal)
- Factory method TicketEntity.criar (campos obrigatórios)
- aplicar_patch (campos imutáveis, desconhecidos, enums)
- Propriedades derivadas
"""

import pytest

from src.core.tickets.entities import (
    SubjectCode,
    TicketEntity,
    TicketPriority,
    TicketStatus,
)
from src.core.shared.exceptions import ValidationError


class TestEnums:
    """Testes para os enums com valores literais."""

    def test_valores_gravados_sao_literais(self):
        """Deve manter os literais exatos gravados no armazenamento."""
        assert TicketPriority.CRITICA.value == "Crítica"
        assert TicketStatus.EM_ATENDIMENTO.value == "Em Atendimento"
        assert SubjectCode.CODE_1206.value == "1206 - Erro de HW"
        assert len(list(SubjectCode)) == 11

    def test_from_string_aceita_valor_e_nome(self):
        """Deve aceitar o valor literal ou o nome do membro."""
        assert TicketPriority.from_string("Crítica") == TicketPriority.CRITICA
        assert TicketPriority.from_string("critica") == TicketPriority.CRITICA
        assert TicketStatus.from_string("Em Atendimento") == TicketStatus.EM_ATENDIMENTO
        assert TicketStatus.from_string("em_atendimento") == TicketStatus.EM_ATENDIMENTO
        assert SubjectCode.from_string("1206 - Erro de HW") == SubjectCode.CODE_1206

    def test_from_string_invalido(self):
        """Deve levantar ValueError para valor fora do vocabulário."""
        with pytest.raises(ValueError):
            TicketPriority.from_string("Urgente")
        with pytest.raises(ValueError):
            TicketStatus.from_string(None)

    def test_prefixo_do_assunto(self):
        """Deve extrair a parte numérica antes de " - "."""
        assert SubjectCode.CODE_1101.prefixo == "1101"
        assert SubjectCode.CODE_1207.prefixo == "1207"

    def test_prioridades_escalonaveis(self):
        assert TicketPriority.ALTA.e_escalonavel
        assert TicketPriority.CRITICA.e_escalonavel
        assert not TicketPriority.MEDIA.e_escalonavel
        assert not TicketPriority.BAIXA.e_escalonavel


class TestTicketEntityCriar:
    """Testes para TicketEntity.criar."""

    def test_criar_com_defaults(self, dados_ticket):
        """Deve criar ticket aberto, prioridade Média, assunto 1200."""
        ticket = TicketEntity.criar(**dados_ticket)

        assert ticket.status == TicketStatus.ABERTO
        assert ticket.priority == TicketPriority.MEDIA
        assert ticket.subject_code == SubjectCode.CODE_1200
        assert ticket.id == ""
        assert ticket.created_at is None
        assert ticket.validated_by is None
        assert not ticket.tag_vldd and not ticket.tag_nvldd

    def test_criar_converte_enums_em_string(self, dados_ticket):
        """Deve aceitar enums como strings."""
        ticket = TicketEntity.criar(
            **dados_ticket,
            priority="Alta",
            status="Escalado",
            subject_code="1206 - Erro de HW",
        )

        assert ticket.priority == TicketPriority.ALTA
        assert ticket.status == TicketStatus.ESCALADO
        assert ticket.codigo_assunto == "1206"

    def test_criar_remove_espacos(self, dados_ticket):
        dados_ticket["client_name"] = "  Banco Alfa  "
        ticket = TicketEntity.criar(**dados_ticket)
        assert ticket.client_name == "Banco Alfa"

    def test_criar_ignora_id_e_created_at(self, dados_ticket, agora):
        """id e created_at são atribuídos pelo armazenamento."""
        ticket = TicketEntity.criar(**dados_ticket, id="x", created_at=agora)
        assert ticket.id == ""
        assert ticket.created_at is None

    @pytest.mark.parametrize("campo", [
        "client_name",
        "analyst_name",
        "location_name",
        "task_ticket",
        "service_request",
        "description",
    ])
    def test_campo_obrigatorio_vazio(self, dados_ticket, campo):
        """Deve levantar ValidationError com o campo faltante."""
        dados_ticket[campo] = "   "

        with pytest.raises(ValidationError) as exc_info:
            TicketEntity.criar(**dados_ticket)

        assert exc_info.value.field == campo

    def test_mensagem_do_campo_obrigatorio(self, dados_ticket):
        del dados_ticket["service_request"]

        with pytest.raises(ValidationError) as exc_info:
            TicketEntity.criar(**dados_ticket)

        assert exc_info.value.message == "SR é obrigatório"

    def test_enum_invalido(self, dados_ticket):
        with pytest.raises(ValidationError) as exc_info:
            TicketEntity.criar(**dados_ticket, priority="Urgente")
        assert exc_info.value.field == "priority"

    def test_campo_desconhecido(self, dados_ticket):
        with pytest.raises(ValidationError) as exc_info:
            TicketEntity.criar(**dados_ticket, titulo="x")
        assert exc_info.value.field == "titulo"


class TestTicketEntityPatch:
    """Testes para aplicar_patch."""

    def test_patch_altera_campos(self, ticket_factory):
        ticket = ticket_factory()

        ticket.aplicar_patch({"priority": "Crítica", "analyst_action": "Trocado sensor"})

        assert ticket.priority == TicketPriority.CRITICA
        assert ticket.analyst_action == "Trocado sensor"

    def test_patch_ignora_campos_imutaveis(self, ticket_factory, agora):
        """id e created_at nunca mudam após a criação."""
        ticket = ticket_factory(id="abc")
        criado_em = ticket.created_at

        ticket.aplicar_patch({"id": "outro", "created_at": agora, "status": "Escalado"})

        assert ticket.id == "abc"
        assert ticket.created_at == criado_em
        assert ticket.status == TicketStatus.ESCALADO

    def test_patch_campo_desconhecido(self, ticket_factory):
        ticket = ticket_factory()
        with pytest.raises(ValidationError):
            ticket.aplicar_patch({"foo": 1})

    def test_patch_invalido_nao_altera_nada(self, ticket_factory):
        ticket = ticket_factory()

        with pytest.raises(ValidationError) as exc_info:
            ticket.aplicar_patch({
                "analyst_action": "Trocado sensor",
                "priority": "Crítica",
                "status": "Arquivado",
            })

        assert exc_info.value.field == "status"
        assert ticket.analyst_action == ""
        assert ticket.priority == TicketPriority.MEDIA
        assert ticket.status == TicketStatus.ABERTO


class TestTicketEntityPropriedades:
    """Testes para propriedades derivadas."""

    def test_e_prioritario(self, ticket_factory):
        assert ticket_factory(priority="Alta").e_prioritario
        assert not ticket_factory(priority="Baixa").e_prioritario

    def test_esta_resolvido(self, ticket_factory):
        assert ticket_factory(status="Resolvido").esta_resolvido
        assert not ticket_factory(status="Escalado").esta_resolvido

    def test_esta_validado(self, ticket_factory):
        assert ticket_factory(tag_nvldd=True).esta_validado
        assert not ticket_factory().esta_validado

    def test_repr(self, ticket_factory):
        ticket = ticket_factory(id="12345678-abcd", task_ticket="TASK-9")
        assert "12345678" in repr(ticket)
        assert "TASK-9" in repr(ticket)
