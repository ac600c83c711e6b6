"""
Estatísticas derivadas do Dashboard.

Funções puras sobre a coleção de tickets em memória. Nada é
armazenado em cache: cada leitura recalcula tudo a partir da coleção
e do relógio.

Atenção: contar_escalados NÃO exclui tickets resolvidos, ao contrário
do quadro de escalonamento (validation.filtrar_escalonados). Um ticket
Crítico e Resolvido entra na contagem mas não aparece no quadro.
"""

from collections import OrderedDict
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from .entities import TicketEntity, TicketStatus
from .dtos import DashboardStatsDTO


def contar_abertos(tickets: Iterable[TicketEntity]) -> int:
    return sum(1 for t in tickets if t.status == TicketStatus.ABERTO)


def contar_escalados(tickets: Iterable[TicketEntity]) -> int:
    """Prioridade Alta/Crítica ou status Escalado, inclusive resolvidos."""
    return sum(
        1 for t in tickets
        if t.e_prioritario or t.status == TicketStatus.ESCALADO
    )


def contar_resolvidos_hoje(
    tickets: Iterable[TicketEntity],
    agora: Optional[datetime] = None,
) -> int:
    """
    Conta tickets resolvidos criados no dia corrente (horário local).

    Usa a data de criação: o momento da resolução não é registrado
    no ticket.
    """
    agora = agora or datetime.now()
    hoje = agora.date()
    return sum(
        1 for t in tickets
        if t.status == TicketStatus.RESOLVIDO
        and t.created_at is not None
        and _data_local(t.created_at, agora) == hoje
    )


def volume_por_assunto(tickets: Iterable[TicketEntity]) -> "OrderedDict[str, int]":
    """Contagem por prefixo do assunto, na ordem em que aparecem."""
    volume: "OrderedDict[str, int]" = OrderedDict()
    for t in tickets:
        codigo = t.codigo_assunto
        volume[codigo] = volume.get(codigo, 0) + 1
    return volume


def dados_grafico_assunto(tickets: Iterable[TicketEntity]) -> List[Dict]:
    """Linhas prontas para o gráfico de barras."""
    return [
        {"name": codigo, "count": total}
        for codigo, total in volume_por_assunto(tickets).items()
    ]


def filtrar_tickets(tickets: Iterable[TicketEntity], termo: str = "") -> List[TicketEntity]:
    """
    Busca por cliente, ação do analista ou task (sem diferenciar
    maiúsculas de minúsculas). Termo vazio devolve todos.
    """
    tickets = list(tickets)
    if not termo:
        return tickets

    termo = termo.lower()
    return [
        t for t in tickets
        if termo in t.client_name.lower()
        or (t.analyst_action and termo in t.analyst_action.lower())
        or termo in t.task_ticket.lower()
    ]


def calcular_estatisticas(
    tickets: Iterable[TicketEntity],
    agora: Optional[datetime] = None,
) -> DashboardStatsDTO:
    """Monta todas as estatísticas do dashboard de uma vez."""
    tickets = list(tickets)
    return DashboardStatsDTO(
        total=len(tickets),
        abertos=contar_abertos(tickets),
        escalados=contar_escalados(tickets),
        resolvidos_hoje=contar_resolvidos_hoje(tickets, agora),
        volume_por_assunto=dict(volume_por_assunto(tickets)),
    )


def _data_local(momento: datetime, agora: datetime):
    """Data de `momento` no mesmo fuso de `agora`."""
    if momento.tzinfo is None:
        return momento.date()
    if agora.tzinfo is None:
        return momento.astimezone().date()
    return momento.astimezone(agora.tzinfo).date()
