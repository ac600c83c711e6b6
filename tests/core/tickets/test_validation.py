"""
Testes do fluxo de escalonamento e validação (encerramento).
"""

import pytest

from src.core.tickets.entities import TicketStatus
from src.core.tickets.validation import (
    FormularioValidacao,
    SicValidation,
    ValidationTag,
    checar_patch_manual,
    edicoes_from_dict,
    esta_no_escalonamento,
)
from src.core.shared.exceptions import BusinessRuleViolationError, ValidationError


class TestQuadroDeEscalonamento:
    """Quem entra no quadro de escalonamento."""

    @pytest.mark.parametrize("priority,status,esperado", [
        ("Alta", "Aberto", True),
        ("Crítica", "Em Atendimento", True),
        ("Baixa", "Escalado", True),
        ("Média", "Aberto", False),
        ("Crítica", "Resolvido", False),
    ])
    def test_esta_no_escalonamento(self, ticket_factory, priority, status, esperado):
        ticket = ticket_factory(priority=priority, status=status)
        assert esta_no_escalonamento(ticket) is esperado


class TestFormularioValidacao:
    """Testes do formulário de encerramento."""

    def test_from_ticket_pre_preenche(self, ticket_factory):
        ticket = ticket_factory(
            analyst_action="Trocado sensor",
            customer_witness_name="Ana",
            customer_witness_id="M-1",
            trocou_peca=True,
            peca_trocada="Sensor",
        )

        form = FormularioValidacao.from_ticket(ticket)

        assert form.ticket_id == ticket.id
        assert form.tag == ValidationTag.VLDD
        assert form.witness_name == "Ana"
        assert form.witness_id == "M-1"
        assert form.edited_analyst_action == "Trocado sensor"
        assert form.part_replaced is True
        assert form.part_name == "Sensor"
        assert form.card_test is False
        assert form.sic_validation == SicValidation()

    def test_from_ticket_tag_nvldd(self, ticket_factory):
        form = FormularioValidacao.from_ticket(ticket_factory(tag_nvldd=True))
        assert form.tag == ValidationTag.NLVDD

    def test_com_edicoes_nao_altera_original(self, ticket_factory):
        form = FormularioValidacao.from_ticket(ticket_factory())

        editado = form.com_edicoes(tag="#NLVDD#", witness_name="Ana",
                                   sic_validation={"saques": True})

        assert editado.tag == ValidationTag.NLVDD
        assert editado.sic_validation.saques is True
        assert form.tag == ValidationTag.VLDD
        assert form.witness_name == ""

    def test_com_edicoes_invalidas(self, ticket_factory):
        form = FormularioValidacao.from_ticket(ticket_factory())

        with pytest.raises(ValidationError):
            form.com_edicoes(tag="#OUTRA#")
        with pytest.raises(ValidationError):
            form.com_edicoes(foo=1)
        with pytest.raises(ValidationError):
            form.com_edicoes(sic_validation={"cofre": True})

    @pytest.mark.parametrize("edicoes,campo", [
        ({"witness_name": None}, "witness_name"),
        ({"witness_id": 123}, "witness_id"),
        ({"edited_analyst_action": ["a"]}, "edited_analyst_action"),
        ({"card_test": "sim"}, "card_test"),
        ({"part_replaced": 1}, "part_replaced"),
        ({"sic_validation": ["saques"]}, "sic_validation"),
        ({"sic_validation": {"saques": "sim"}}, "sic_validation"),
    ])
    def test_com_edicoes_tipo_invalido(self, ticket_factory, edicoes, campo):
        form = FormularioValidacao.from_ticket(ticket_factory())

        with pytest.raises(ValidationError) as exc_info:
            form.com_edicoes(**edicoes)

        assert exc_info.value.field == campo

    @pytest.mark.parametrize("nome,matricula,pendente", [
        ("Ana", "M-1", None),
        ("", "M-1", "customer_witness_name"),
        ("Ana", " ", "customer_witness_id"),
    ])
    def test_testemunha_pendente(self, ticket_factory, nome, matricula, pendente):
        form = FormularioValidacao.from_ticket(ticket_factory()).com_edicoes(
            witness_name=nome, witness_id=matricula,
        )
        assert form.testemunha_pendente == pendente

    @pytest.mark.parametrize("nome,matricula,esperado", [
        ("Ana", "M-1", True),
        ("Ana", "  ", False),
        ("", "M-1", False),
    ])
    def test_pode_confirmar(self, ticket_factory, nome, matricula, esperado):
        form = FormularioValidacao.from_ticket(ticket_factory()).com_edicoes(
            witness_name=nome, witness_id=matricula,
        )
        assert form.pode_confirmar is esperado

    def test_to_patch(self, ticket_factory, agora):
        form = FormularioValidacao.from_ticket(ticket_factory()).com_edicoes(
            tag="#NLVDD#",
            witness_name="Ana",
            witness_id="M-1",
            edited_analyst_action="Reiniciado terminal",
        )

        patch = form.to_patch(agora, validated_by="Sistema")

        assert patch == {
            "tag_vldd": False,
            "tag_nvldd": True,
            "customer_witness_name": "Ana",
            "customer_witness_id": "M-1",
            "analyst_action": "Reiniciado terminal",
            "status": TicketStatus.RESOLVIDO,
            "validated_by": "Sistema",
            "validated_at": agora.isoformat(),
        }

    def test_to_patch_sem_testemunha(self, ticket_factory):
        form = FormularioValidacao.from_ticket(ticket_factory())
        with pytest.raises(ValidationError):
            form.to_patch()

    def test_to_dict(self, ticket_factory):
        form = FormularioValidacao.from_ticket(ticket_factory(id="t1"))
        data = form.to_dict()

        assert data["ticketId"] == "t1"
        assert data["tag"] == "#VLDD#"
        assert data["podeConfirmar"] is False
        assert data["sicValidation"] == {
            "saques": False,
            "depositos": False,
            "sensoriamento": False,
            "smartpower": False,
        }

    def test_edicoes_from_dict(self):
        edicoes = edicoes_from_dict({
            "witnessName": "Ana",
            "witnessId": "M-1",
            "cardTest": True,
            "sicValidation": {"depositos": True},
        })
        assert edicoes == {
            "witness_name": "Ana",
            "witness_id": "M-1",
            "card_test": True,
            "sic_validation": {"depositos": True},
        }


class TestSicValidation:
    def test_itens_validados_em_ordem(self):
        sic = SicValidation(smartpower=True, saques=True)
        assert sic.itens_validados() == ["Saques", "Smartpower"]


class TestChecarPatchManual:
    """Atualizações genéricas não podem encerrar ticket."""

    def test_patch_comum_passa(self):
        checar_patch_manual({"priority": "Alta", "status": "Escalado"})

    @pytest.mark.parametrize("status", ["Resolvido", TicketStatus.RESOLVIDO, "resolvido"])
    def test_status_resolvido_recusado(self, status):
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            checar_patch_manual({"status": status})
        assert exc_info.value.rule == "encerramento_exige_validacao"

    def test_campos_de_auditoria_recusados(self):
        with pytest.raises(BusinessRuleViolationError):
            checar_patch_manual({"validated_by": "Alguém"})

    def test_status_invalido(self):
        with pytest.raises(ValidationError):
            checar_patch_manual({"status": "Fechado"})
