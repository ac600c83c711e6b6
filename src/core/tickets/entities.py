"""
Entidades do Domínio de Tickets.

Este módulo define as entidades de domínio do Diário de Bordo,
o registro de atendimentos técnicos a terminais de autoatendimento.

Entidades:
- TicketEntity: Registro de um atendimento (única entidade persistida)
- TicketStatus: Estados possíveis de um ticket
- TicketPriority: Níveis de prioridade
- SubjectCode: Códigos de assunto com prefixo numérico

Regras de Negócio Encapsuladas:
- Validação dos campos obrigatórios na criação
- id e created_at imutáveis após a criação
- Ticket resolvido nunca aparece no quadro de escalonamento

Os valores dos enums são gravados literalmente no armazenamento
("Crítica", "Escalado", "1200 - Duvida técnica") e não podem mudar.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from src.core.shared.exceptions import ValidationError


def _enum_from_string(enum_cls, value, rotulo: str):
    """
    Converte string para enum.

    Aceita o nome do membro (CRITICA) ou o valor literal ("Crítica"),
    sem diferenciar maiúsculas de minúsculas.

    Raises:
        ValueError: Se valor inválido
    """
    if isinstance(value, enum_cls):
        return value

    if not isinstance(value, str):
        raise ValueError(f"{rotulo} inválido: {value!r}")

    # Tenta pelo nome (CRITICA)
    try:
        return enum_cls[value.strip().upper().replace(" ", "_")]
    except KeyError:
        pass

    # Tenta pelo valor ("Crítica")
    for member in enum_cls:
        if member.value.lower() == value.strip().lower():
            return member

    raise ValueError(f"{rotulo} inválido: {value}")


class TicketStatus(Enum):
    """
    Estados possíveis de um ticket.

    Fluxo de Estados:
        ABERTO ──→ EM_ATENDIMENTO ──┐
           │            ↕           ├──→ RESOLVIDO (apenas via validação)
           └──────→ ESCALADO ───────┘
    """

    ABERTO = "Aberto"
    EM_ATENDIMENTO = "Em Atendimento"
    RESOLVIDO = "Resolvido"
    ESCALADO = "Escalado"

    @classmethod
    def from_string(cls, value: str) -> "TicketStatus":
        return _enum_from_string(cls, value, "Status")


class TicketPriority(Enum):
    """Níveis de prioridade. ALTA e CRITICA entram no escalonamento."""

    BAIXA = "Baixa"
    MEDIA = "Média"
    ALTA = "Alta"
    CRITICA = "Crítica"

    @property
    def e_escalonavel(self) -> bool:
        return self in (TicketPriority.ALTA, TicketPriority.CRITICA)

    @classmethod
    def from_string(cls, value: str) -> "TicketPriority":
        return _enum_from_string(cls, value, "Prioridade")


class SubjectCode(Enum):
    """Códigos de assunto. O prefixo numérico agrupa o volume no dashboard."""

    CODE_1100 = "1100 - Codigo"
    CODE_1101 = "1101 - Codigo de peças"
    CODE_1102 = "1102 - Codigo de midia"
    CODE_1200 = "1200 - Duvida técnica"
    CODE_1201 = "1201 - Interpretação defeito"
    CODE_1202 = "1202 - Testes perifericos"
    CODE_1203 = "1203 - Sistema de ensinamento"
    CODE_1204 = "1204 - Status sensores"
    CODE_1205 = "1205 - Diag não carrega"
    CODE_1206 = "1206 - Erro de HW"
    CODE_1207 = "1207 - Duvida em configuração"

    @property
    def prefixo(self) -> str:
        """Parte numérica antes do primeiro " - "."""
        return self.value.split(" - ")[0]

    @classmethod
    def from_string(cls, value: str) -> "SubjectCode":
        return _enum_from_string(cls, value, "Assunto")


# Campos que nunca mudam após a criação
CAMPOS_IMUTAVEIS = frozenset({"id", "created_at"})

# Campos gravados apenas pelo fluxo de validação/encerramento
CAMPOS_AUDITORIA = frozenset({"validated_by", "validated_at"})

_ENUM_FIELDS = {
    "status": TicketStatus,
    "priority": TicketPriority,
    "subject_code": SubjectCode,
}


@dataclass
class TicketEntity:
    """
    Entidade de Domínio: Ticket (registro de atendimento).

    Invariantes:
    - Cliente, analista, local, task e SR obrigatórios na criação
    - Descrição do problema obrigatória na criação
    - id e created_at atribuídos pelo armazenamento e imutáveis
    - peca_trocada só tem significado quando trocou_peca é True
    - tag_vldd e tag_nvldd mutuamente exclusivas após o encerramento

    Example:
        ticket = TicketEntity.criar(
            client_name="Banco A",
            analyst_name="João",
            location_name="Agência Centro",
            task_ticket="TASK-001",
            service_request="SR-001",
            description="Terminal não dispensa cédulas",
            priority=TicketPriority.ALTA,
        )
    """

    # Identificação (atribuída pelo armazenamento)
    id: str = ""

    # Dados descritivos
    client_name: str = ""
    analyst_name: str = ""
    location_name: str = ""
    task_ticket: str = ""
    service_request: str = ""

    # Período do atendimento (informado pelo analista)
    support_start_time: str = ""
    support_end_time: str = ""

    # Classificação
    subject_code: SubjectCode = field(default=SubjectCode.CODE_1200)
    priority: TicketPriority = field(default=TicketPriority.MEDIA)
    status: TicketStatus = field(default=TicketStatus.ABERTO)

    # Narrativa
    description: str = ""
    analyst_action: str = ""
    ai_analysis: Optional[str] = None

    # Checklist
    ligacao_devida: bool = False
    utilizou_acfs: bool = False
    ocorreu_entintamento: bool = False
    trocou_peca: bool = False
    peca_trocada: Optional[str] = None

    # Tags de validação
    tag_vldd: bool = False
    tag_nvldd: bool = False

    # Testemunha do cliente
    customer_witness_name: str = ""
    customer_witness_id: str = ""

    # Auditoria do encerramento
    validated_by: Optional[str] = None
    validated_at: Optional[str] = None

    # Atribuído na inserção
    created_at: Optional[datetime] = None

    CAMPOS_OBRIGATORIOS = (
        ("client_name", "Cliente"),
        ("analyst_name", "Analista"),
        ("location_name", "Local"),
        ("task_ticket", "Task"),
        ("service_request", "SR"),
        ("description", "Descrição"),
    )

    @classmethod
    def criar(cls, **dados: Any) -> "TicketEntity":
        """
        Factory method para criar ticket com validações.

        Aceita os mesmos campos da dataclass. Enums podem vir como
        membros ou como strings (nome ou valor literal). id e
        created_at são ignorados: quem atribui é o armazenamento.

        Raises:
            ValidationError: Se um campo obrigatório estiver vazio ou
                um enum for inválido
        """
        dados = {k: v for k, v in dados.items() if k not in CAMPOS_IMUTAVEIS}

        nomes_validos = cls.nomes_de_campos()
        for nome in dados:
            if nome not in nomes_validos:
                raise ValidationError(f"Campo desconhecido: {nome}", field=nome)

        for nome, rotulo in cls.CAMPOS_OBRIGATORIOS:
            valor = dados.get(nome)
            if not isinstance(valor, str) or not valor.strip():
                raise ValidationError(f"{rotulo} é obrigatório", field=nome)
            dados[nome] = valor.strip()

        for nome, valor in list(dados.items()):
            dados[nome] = _coagir_valor(nome, valor)

        return cls(**dados)

    @classmethod
    def nomes_de_campos(cls) -> frozenset:
        return frozenset(f.name for f in fields(cls))

    def aplicar_patch(self, patch: Dict[str, Any]) -> None:
        """
        Mescla uma atualização parcial nesta entidade.

        id e created_at presentes no patch são ignorados. Todos os valores são convertidos antes da primeira atribuição:
        um patch inválido não altera a entidade.

        Raises:
            ValidationError: Campo desconhecido ou enum inválido
        """
        nomes_validos = self.nomes_de_campos()
        valores = {}
        for nome, valor in patch.items():
            if nome in CAMPOS_IMUTAVEIS:
                continue
            if nome not in nomes_validos:
                raise ValidationError(f"Campo desconhecido: {nome}", field=nome)
            valores[nome] = _coagir_valor(nome, valor)

        for nome, valor in valores.items():
            setattr(self, nome, valor)

    @property
    def codigo_assunto(self) -> str:
        """Prefixo numérico do assunto ("1206")."""
        return self.subject_code.prefixo

    @property
    def e_prioritario(self) -> bool:
        return self.priority.e_escalonavel

    @property
    def esta_resolvido(self) -> bool:
        return self.status == TicketStatus.RESOLVIDO

    @property
    def esta_validado(self) -> bool:
        return self.tag_vldd or self.tag_nvldd

    def __repr__(self) -> str:
        """Representação string para debugging."""
        return (
            f"TicketEntity("
            f"id={self.id[:8] or '<novo>'}, "
            f"task='{self.task_ticket}', "
            f"status={self.status.value}, "
            f"prioridade={self.priority.value}"
            f")"
        )


def _coagir_valor(nome: str, valor: Any) -> Any:
    """Converte strings de enum em membros, com erro de validação."""
    enum_cls = _ENUM_FIELDS.get(nome)
    if enum_cls is None:
        return valor
    try:
        return enum_cls.from_string(valor)
    except ValueError as e:
        raise ValidationError(str(e), field=nome) from e
