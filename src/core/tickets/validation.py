"""
Fluxo de Escalonamento e Validação (encerramento).

O quadro de escalonamento lista os tickets prioritários ainda não
resolvidos. O encerramento é manual: o operador abre o formulário,
confere a ação técnica, marca a tag e informa a testemunha do cliente.

Fluxo:
    1. FormularioValidacao.from_ticket(ticket)  -> formulário pré-preenchido
    2. Edição pelo operador (tag exclusiva)
    3. summaries.gerar_resumo_validacao(ticket, form)  -> texto para cópia
    4. form.to_patch(agora)  -> somente se pode_confirmar
    5. Cancelar = descartar o formulário (o ticket não é tocado)
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from src.core.shared.exceptions import BusinessRuleViolationError, ValidationError

from .entities import (
    CAMPOS_AUDITORIA,
    TicketEntity,
    TicketStatus,
)


VALIDADO_POR_PADRAO = "Sistema"

TESTEMUNHA_OBRIGATORIA = "Nome e matrícula da testemunha são obrigatórios"


class ValidationTag(Enum):
    """Tag escolhida no encerramento."""

    VLDD = "#VLDD#"
    NLVDD = "#NLVDD#"

    @classmethod
    def from_string(cls, value: str) -> "ValidationTag":
        if isinstance(value, cls):
            return value
        for member in cls:
            if value in (member.value, member.name):
                return member
        raise ValueError(f"Tag de validação inválida: {value}")


# =============================================================================
# QUADRO DE ESCALONAMENTO
# =============================================================================

def esta_no_escalonamento(ticket: TicketEntity) -> bool:
    """Alta/Crítica ou status Escalado, desde que não resolvido."""
    escalonado = ticket.e_prioritario or ticket.status == TicketStatus.ESCALADO
    return escalonado and not ticket.esta_resolvido


def filtrar_escalonados(tickets: Iterable[TicketEntity]) -> List[TicketEntity]:
    return [t for t in tickets if esta_no_escalonamento(t)]


# =============================================================================
# FORMULÁRIO DE VALIDAÇÃO
# =============================================================================

@dataclass
class SicValidation:
    """Itens validados no SIC."""

    saques: bool = False
    depositos: bool = False
    sensoriamento: bool = False
    smartpower: bool = False

    ROTULOS = (
        ("saques", "Saques"),
        ("depositos", "Depósitos"),
        ("sensoriamento", "Sensoriamento"),
        ("smartpower", "Smartpower"),
    )

    def itens_validados(self) -> List[str]:
        return [rotulo for nome, rotulo in self.ROTULOS if getattr(self, nome)]

    def to_dict(self) -> dict:
        return {nome: getattr(self, nome) for nome, _ in self.ROTULOS}


@dataclass
class FormularioValidacao:
    """
    Estado do formulário de encerramento.

    É um objeto destacado do ticket: editar o formulário não altera o
    ticket, e descartá-lo equivale a cancelar.
    """

    ticket_id: str
    tag: ValidationTag = ValidationTag.VLDD
    witness_name: str = ""
    witness_id: str = ""
    edited_analyst_action: str = ""
    part_replaced: bool = False
    part_name: str = ""
    card_test: bool = False
    sic_validation: SicValidation = field(default_factory=SicValidation)

    @classmethod
    def from_ticket(cls, ticket: TicketEntity) -> "FormularioValidacao":
        """Pré-preenche o formulário a partir do ticket."""
        return cls(
            ticket_id=ticket.id,
            tag=ValidationTag.NLVDD if ticket.tag_nvldd else ValidationTag.VLDD,
            witness_name=ticket.customer_witness_name or "",
            witness_id=ticket.customer_witness_id or "",
            edited_analyst_action=ticket.analyst_action or "",
            part_replaced=ticket.trocou_peca,
            part_name=ticket.peca_trocada or "",
        )

    def com_edicoes(self, **edicoes: Any) -> "FormularioValidacao":
        """
        Devolve uma cópia com os campos editados.

        Aceita "tag" como string e "sic_validation" como dict.
        """
        if "tag" in edicoes:
            try:
                edicoes["tag"] = ValidationTag.from_string(edicoes["tag"])
            except ValueError as e:
                raise ValidationError(str(e), field="tag") from e

        desconhecidos = set(edicoes) - set(self.__dataclass_fields__) - {"ticket_id"}
        if desconhecidos:
            nome = sorted(desconhecidos)[0]
            raise ValidationError(f"Campo desconhecido: {nome}", field=nome)
        edicoes.pop("ticket_id", None)

        for nome, valor in edicoes.items():
            if nome in _CAMPOS_TEXTO:
                _exigir_tipo(nome, valor, str, "texto")
            elif nome in _CAMPOS_BOOLEANOS:
                _exigir_tipo(nome, valor, bool, "verdadeiro/falso")

        if "sic_validation" in edicoes:
            edicoes["sic_validation"] = self._sic_com_edicoes(edicoes["sic_validation"])

        return replace(self, **edicoes)

    def _sic_com_edicoes(self, sic: Any) -> SicValidation:
        if isinstance(sic, SicValidation):
            return sic
        _exigir_tipo("sic_validation", sic, dict, "objeto")
        for nome, valor in sic.items():
            if nome not in SicValidation.__dataclass_fields__:
                raise ValidationError(
                    f"Item SIC desconhecido: {nome}", field="sic_validation"
                )
            _exigir_tipo("sic_validation", valor, bool, "verdadeiro/falso")
        return replace(self.sic_validation, **sic)

    @property
    def testemunha_pendente(self) -> Optional[str]:
        """Campo da testemunha ainda vazio (nome antes da matrícula)."""
        if not self.witness_name.strip():
            return "customer_witness_name"
        if not self.witness_id.strip():
            return "customer_witness_id"
        return None

    @property
    def pode_confirmar(self) -> bool:
        """Testemunha (nome e matrícula) é obrigatória para encerrar."""
        return self.testemunha_pendente is None

    def to_patch(
        self,
        agora: Optional[datetime] = None,
        validated_by: str = VALIDADO_POR_PADRAO,
    ) -> Dict[str, Any]:
        """
        Patch de encerramento aplicado ao ticket.

        Raises:
            ValidationError: Se a testemunha não foi informada
        """
        if not self.pode_confirmar:
            raise ValidationError(
                TESTEMUNHA_OBRIGATORIA, field=self.testemunha_pendente
            )

        agora = agora or datetime.now(timezone.utc)
        return {
            "tag_vldd": self.tag == ValidationTag.VLDD,
            "tag_nvldd": self.tag == ValidationTag.NLVDD,
            "customer_witness_name": self.witness_name,
            "customer_witness_id": self.witness_id,
            "analyst_action": self.edited_analyst_action,
            "status": TicketStatus.RESOLVIDO,
            "validated_by": validated_by,
            "validated_at": agora.isoformat(),
        }

    def to_dict(self) -> dict:
        return {
            "ticketId": self.ticket_id,
            "tag": self.tag.value,
            "witnessName": self.witness_name,
            "witnessId": self.witness_id,
            "editedAnalystAction": self.edited_analyst_action,
            "partReplaced": self.part_replaced,
            "partName": self.part_name,
            "cardTest": self.card_test,
            "sicValidation": self.sic_validation.to_dict(),
            "podeConfirmar": self.pode_confirmar,
        }


_CAMPOS_TEXTO = frozenset({
    "witness_name", "witness_id", "edited_analyst_action", "part_name",
})
_CAMPOS_BOOLEANOS = frozenset({"part_replaced", "card_test"})


def _exigir_tipo(nome: str, valor: Any, tipo: type, rotulo: str) -> None:
    if not isinstance(valor, tipo):
        raise ValidationError(f"{nome} deve ser {rotulo}: {valor!r}", field=nome)


# Chaves aceitas do JSON do formulário -> atributo
CAMPOS_FORMULARIO = {
    "tag": "tag",
    "witnessName": "witness_name",
    "witnessId": "witness_id",
    "editedAnalystAction": "edited_analyst_action",
    "partReplaced": "part_replaced",
    "partName": "part_name",
    "cardTest": "card_test",
    "sicValidation": "sic_validation",
}


def edicoes_from_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Converte o JSON do formulário (camelCase) em edições."""
    return {
        CAMPOS_FORMULARIO.get(chave, chave): valor
        for chave, valor in data.items()
    }


# =============================================================================
# GUARDA DE ATUALIZAÇÃO MANUAL
# =============================================================================

def checar_patch_manual(patch: Dict[str, Any]) -> None:
    """
    Recusa em atualizações genéricas o que só o encerramento grava.

    Raises:
        BusinessRuleViolationError: status Resolvido ou campos de auditoria
    """
    auditoria = CAMPOS_AUDITORIA.intersection(patch)
    if auditoria:
        raise BusinessRuleViolationError(
            f"Campo reservado ao encerramento: {sorted(auditoria)[0]}",
            rule="encerramento_exige_validacao",
        )

    status = patch.get("status")
    if status is None:
        return
    try:
        status = TicketStatus.from_string(status)
    except ValueError as e:
        raise ValidationError(str(e), field="status") from e
    if status == TicketStatus.RESOLVIDO:
        raise BusinessRuleViolationError(
            "Encerramento exige validação com testemunha",
            rule="encerramento_exige_validacao",
        )
