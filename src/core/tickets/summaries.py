"""
Textos de resumo para cópia (área de transferência).

Somente exibição: nada aqui é persistido.
"""

from .dtos import CriarTicketInputDTO
from .entities import TicketEntity
from .validation import FormularioValidacao

LIMITE_DESCRICAO = 100

_SEPARADOR_VALIDACAO = "-" * 32
_SEPARADOR_ATENDIMENTO = "-" * 26


def _sim_nao(valor: bool) -> str:
    return "Sim" if valor else "Não"


def _horario(valor: str) -> str:
    # "2024-05-10T14:30" -> "2024-05-10 14:30"
    return (valor or "").replace("T", " ", 1)


def gerar_resumo_validacao(ticket: TicketEntity, form: FormularioValidacao) -> str:
    """Resumo de validação exibido antes de confirmar o encerramento."""
    descricao = ticket.description[:LIMITE_DESCRICAO]
    if len(ticket.description) > LIMITE_DESCRICAO:
        descricao += "..."

    troca = f"Sim ({form.part_name})" if form.part_replaced else "Não"
    sic = form.sic_validation.itens_validados()
    sic_texto = ", ".join(sic) if sic else "Nenhum"

    linhas = [
        "RESUMO DE VALIDAÇÃO",
        _SEPARADOR_VALIDACAO,
        f"STATUS: {form.tag.value}",
        f"CLIENTE: {ticket.client_name}",
        f"LOCAL: {ticket.location_name}",
        f"TASK: {ticket.task_ticket}",
        f"DEFEITO RECLAMADO: {descricao}",
        f"AÇÃO TÉCNICO: {form.edited_analyst_action}",
        "",
        "VALIDAÇÃO TÉCNICA:",
        f"- Houve Troca de Peça: {troca}",
        f"- Teste com Cartão: {_sim_nao(form.card_test)}",
        "",
        "VALIDAÇÃO SIC:",
        f"- Itens validados: {sic_texto}",
        "",
        f"VALIDADO POR: {form.witness_name} (Matrícula: {form.witness_id})",
        _SEPARADOR_VALIDACAO,
    ]
    return "\n".join(linhas).strip()


def gerar_resumo_atendimento(dto: CriarTicketInputDTO) -> str:
    """Resumo do atendimento no formato usado nos grupos de mensagens."""
    tags = ""
    if dto.tag_vldd:
        tags += "#VLDD# "
    if dto.tag_nvldd:
        tags += "#NVLDD# "

    troca = f"Sim ({dto.peca_trocada})" if dto.trocou_peca else "Não"

    linhas = [
        "*RESUMO DO ATENDIMENTO*",
        _SEPARADOR_ATENDIMENTO,
        f"*Analista:* {dto.analyst_name}",
        f"*Cliente:* {dto.client_name}",
        f"*Local:* {dto.location_name}",
        f"*Task:* {dto.task_ticket} | *SR:* {dto.service_request}",
        f"*Início:* {_horario(dto.support_start_time)} | "
        f"*Fim:* {_horario(dto.support_end_time)}",
        _SEPARADOR_ATENDIMENTO,
        f"*Assunto:* {dto.subject_code}",
        f"*Prioridade:* {dto.priority}",
        f"*Tags:* {tags}",
        "",
        "*Acompanhamento:*",
        f"Nome: {dto.customer_witness_name} | Matrícula: {dto.customer_witness_id}",
        "",
        "*Relato do Problema:*",
        dto.description,
        "",
        "*Ação do Analista:*",
        dto.analyst_action,
        "",
        "*Checklist:*",
        f"- Ligação Devida: {_sim_nao(dto.ligacao_devida)}",
        f"- ACFS Utilizado: {_sim_nao(dto.utilizou_acfs)}",
        f"- Entintamento: {_sim_nao(dto.ocorreu_entintamento)}",
        f"- Troca de Peça: {troca}",
        _SEPARADOR_ATENDIMENTO,
    ]
    return "\n".join(linhas).strip()
