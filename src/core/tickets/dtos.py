"""
Data Transfer Objects (DTOs) do Domínio de Tickets.

DTOs são estruturas simples para transportar dados entre camadas,
evitando vazamento de entidades para camadas externas.

Tipos de DTOs:
- Input DTOs: Dados de criação vindos do formulário/API
- Output DTOs: Dados formatados para resposta
- Stats DTOs: Agregados do dashboard
- Classificação: Resultado da IA

O formato persistido usa chaves camelCase ("clientName", "tagVLDD");
ROW_FIELDS é a fonte única desse mapeamento.
"""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import Any, Dict, Optional

from src.core.shared.exceptions import ValidationError

from .entities import TicketEntity, TicketPriority, TicketStatus, SubjectCode
from .validation import FormularioValidacao, esta_no_escalonamento


# =============================================================================
# FORMATO PERSISTIDO
# =============================================================================

# atributo da entidade -> coluna/chave no armazenamento
ROW_FIELDS: Dict[str, str] = {
    "id": "id",
    "client_name": "clientName",
    "analyst_name": "analystName",
    "location_name": "locationName",
    "task_ticket": "taskTicket",
    "service_request": "serviceRequest",
    "support_start_time": "supportStartTime",
    "support_end_time": "supportEndTime",
    "subject_code": "subjectCode",
    "priority": "priority",
    "status": "status",
    "description": "description",
    "analyst_action": "analystAction",
    "ai_analysis": "aiAnalysis",
    "ligacao_devida": "ligacaoDevida",
    "utilizou_acfs": "utilizouACFS",
    "ocorreu_entintamento": "ocorreuEntintamento",
    "trocou_peca": "trocouPeca",
    "peca_trocada": "pecaTrocada",
    "tag_vldd": "tagVLDD",
    "tag_nvldd": "tagNVLDD",
    "customer_witness_name": "customerWitnessName",
    "customer_witness_id": "customerWitnessID",
    "validated_by": "validatedBy",
    "validated_at": "validatedAt",
    "created_at": "createdAt",
}

ROW_TO_FIELD: Dict[str, str] = {row: attr for attr, row in ROW_FIELDS.items()}


def patch_from_row(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Converte chaves camelCase (ou já snake_case) para atributos da entidade.

    Chaves desconhecidas são mantidas para que a validação da entidade
    as rejeite com o nome original.
    """
    return {ROW_TO_FIELD.get(key, key): value for key, value in data.items()}


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CriarTicketInputDTO:
    """
    DTO de entrada para registrar um atendimento.

    Imutável (frozen=True) para garantir que dados
    validados não sejam alterados acidentalmente. Os defaults
    espelham o formulário de novo atendimento.
    """

    client_name: str = ""
    analyst_name: str = ""
    location_name: str = ""
    task_ticket: str = ""
    service_request: str = ""
    description: str = ""

    support_start_time: str = ""
    support_end_time: str = ""

    subject_code: str = SubjectCode.CODE_1200.value
    priority: str = TicketPriority.MEDIA.value
    status: str = TicketStatus.ABERTO.value

    analyst_action: str = ""
    ai_analysis: Optional[str] = None

    ligacao_devida: bool = False
    utilizou_acfs: bool = False
    ocorreu_entintamento: bool = False
    trocou_peca: bool = False
    peca_trocada: str = ""

    tag_vldd: bool = False
    tag_nvldd: bool = False

    customer_witness_name: str = ""
    customer_witness_id: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CriarTicketInputDTO":
        """
        Cria DTO a partir de JSON (chaves camelCase ou snake_case).

        Chaves fora do formulário (id, createdAt, validatedBy...) são
        descartadas.

        Raises:
            ValidationError: Valor que não é texto (ou booleano, nos
                campos do checklist)
        """
        tipos = {f.name: f.default for f in fields(cls)}
        dados = {
            k: v for k, v in patch_from_row(data).items()
            if k in tipos
        }

        for nome, valor in dados.items():
            padrao = tipos[nome]
            if isinstance(padrao, bool):
                if not isinstance(valor, bool):
                    raise ValidationError(
                        f"{nome} deve ser verdadeiro/falso: {valor!r}", field=nome
                    )
            elif not isinstance(valor, str) and not (padrao is None and valor is None):
                raise ValidationError(f"{nome} deve ser texto: {valor!r}", field=nome)

        return cls(**dados)

    def with_changes(self, **changes: Any) -> "CriarTicketInputDTO":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Converte para dicionário (atributos da entidade)."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_row(self) -> dict:
        """Rascunho no formato persistido (camelCase), para respostas JSON."""
        return {ROW_FIELDS[nome]: valor for nome, valor in self.to_dict().items()}


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class TicketOutputDTO:
    """
    DTO de saída completo com dados do ticket.

    to_dict() produz o formato persistido (camelCase, enums como
    literais, createdAt em ISO-8601) acrescido de "noEscalonamento".
    """

    id: str
    client_name: str
    analyst_name: str
    location_name: str
    task_ticket: str
    service_request: str
    support_start_time: str
    support_end_time: str
    subject_code: str
    priority: str
    status: str
    description: str
    analyst_action: str
    ai_analysis: Optional[str]
    ligacao_devida: bool
    utilizou_acfs: bool
    ocorreu_entintamento: bool
    trocou_peca: bool
    peca_trocada: Optional[str]
    tag_vldd: bool
    tag_nvldd: bool
    customer_witness_name: str
    customer_witness_id: str
    validated_by: Optional[str]
    validated_at: Optional[str]
    created_at: Optional[datetime]
    no_escalonamento: bool = False

    @classmethod
    def from_entity(cls, entity: TicketEntity) -> "TicketOutputDTO":
        """
        Factory method para converter entidade em DTO.

        Args:
            entity: Entidade TicketEntity

        Returns:
            DTO com dados da entidade
        """
        dados = {}
        for nome in ROW_FIELDS:
            valor = getattr(entity, nome)
            if nome in ("subject_code", "priority", "status"):
                valor = valor.value
            dados[nome] = valor
        return cls(no_escalonamento=esta_no_escalonamento(entity), **dados)

    def to_dict(self) -> dict:
        """Converte para dicionário (serialização JSON)."""
        result = {}
        for nome, chave in ROW_FIELDS.items():
            valor = getattr(self, nome)
            if isinstance(valor, datetime):
                valor = valor.isoformat()
            result[chave] = valor
        result["noEscalonamento"] = self.no_escalonamento
        return result


# =============================================================================
# DASHBOARD
# =============================================================================

@dataclass
class DashboardStatsDTO:
    """
    Agregados do dashboard.

    Attributes:
        total: Total de tickets
        abertos: Status Aberto
        escalados: Prioridade Alta/Crítica ou status Escalado (inclui resolvidos)
        resolvidos_hoje: Resolvidos com criação no dia corrente
        volume_por_assunto: Prefixo do assunto -> contagem, ordem de aparição
    """

    total: int
    abertos: int
    escalados: int
    resolvidos_hoje: int
    volume_por_assunto: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "totalTickets": self.total,
            "openTickets": self.abertos,
            "escalatedTickets": self.escalados,
            "resolvedToday": self.resolvidos_hoje,
            "subjectVolume": [
                {"name": codigo, "count": total}
                for codigo, total in self.volume_por_assunto.items()
            ],
        }


# =============================================================================
# VALIDAÇÃO
# =============================================================================

@dataclass
class ValidacaoPreviaDTO:
    """Formulário de encerramento e o resumo correspondente."""

    formulario: FormularioValidacao
    resumo: str

    def to_dict(self) -> dict:
        return {
            "formulario": self.formulario.to_dict(),
            "resumo": self.resumo,
        }


# =============================================================================
# CLASSIFICAÇÃO (IA)
# =============================================================================

@dataclass(frozen=True)
class ClassificacaoDTO:
    """
    Resultado da classificação automática.

    prioridade e codigo_assunto são sempre membros dos enums fixos.
    """

    prioridade: TicketPriority
    codigo_assunto: SubjectCode
    acao_analista: str
    proximo_passo: str

    def to_dict(self) -> dict:
        return {
            "priority": self.prioridade.value,
            "subjectCode": self.codigo_assunto.value,
            "analystAction": self.acao_analista,
            "suggestedNextStep": self.proximo_passo,
        }


CLASSIFICACAO_SEM_IA = ClassificacaoDTO(
    prioridade=TicketPriority.MEDIA,
    codigo_assunto=SubjectCode.CODE_1200,
    acao_analista="Verificar relato (IA indisponível).",
    proximo_passo="Investigação manual necessária.",
)

CLASSIFICACAO_FALHA = ClassificacaoDTO(
    prioridade=TicketPriority.MEDIA,
    codigo_assunto=SubjectCode.CODE_1200,
    acao_analista="Verificar relato.",
    proximo_passo="Investigação manual necessária.",
)
