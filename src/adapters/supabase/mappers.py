"""
Mapper entre TicketEntity e as linhas da tabela "tickets" (PostgREST).

As colunas usam camelCase entre aspas ("clientName"); enums são
gravados pelo valor literal e createdAt em ISO-8601.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict

from django.utils.dateparse import parse_datetime

from src.core.shared.exceptions import StoreError
from src.core.tickets.dtos import ROW_FIELDS, ROW_TO_FIELD
from src.core.tickets.entities import CAMPOS_IMUTAVEIS, TicketEntity


def parse_timestamp(valor: Any):
    """
    Converte timestamp do PostgREST em datetime.

    O PostgREST corta zeros à direita da fração ("14:30:00.12345+00:00")
    e pode usar "Z" como fuso.

    Raises:
        StoreError: Se o valor não for um timestamp ISO-8601
    """
    if valor is None or isinstance(valor, datetime):
        return valor
    try:
        momento = parse_datetime(str(valor))
    except ValueError:
        momento = None
    if momento is None:
        raise StoreError(f"createdAt inválido: {valor!r}")
    return momento


def _valor_row(valor: Any) -> Any:
    if isinstance(valor, Enum):
        return valor.value
    if isinstance(valor, datetime):
        return valor.isoformat()
    return valor


class TicketRowMapper:
    """
    Mapper para conversão entre TicketEntity e linha JSON.

    Responsável por:
    - to_row(): Entity → linha de inserção (sem id/createdAt)
    - patch_to_row(): patch parcial → corpo do PATCH
    - to_entity(): linha → Entity
    """

    @staticmethod
    def to_row(entity: TicketEntity) -> Dict[str, Any]:
        return {
            coluna: _valor_row(getattr(entity, nome))
            for nome, coluna in ROW_FIELDS.items()
            if nome not in CAMPOS_IMUTAVEIS
        }

    @staticmethod
    def patch_to_row(patch: Dict[str, Any]) -> Dict[str, Any]:
        return {
            ROW_FIELDS.get(nome, nome): _valor_row(valor)
            for nome, valor in patch.items()
            if nome not in CAMPOS_IMUTAVEIS
        }

    @staticmethod
    def to_entity(row: Dict[str, Any]) -> TicketEntity:
        """
        Converte linha em entidade.

        Colunas extras são ignoradas; colunas nulas voltam ao default
        da entidade (exceto os opcionais, que ficam None).
        """
        dados = {}
        for coluna, valor in row.items():
            nome = ROW_TO_FIELD.get(coluna)
            if nome is None:
                continue
            if valor is None and nome not in _OPCIONAIS:
                continue
            dados[nome] = valor

        if "id" in dados:
            dados["id"] = str(dados["id"])
        if "created_at" in dados:
            dados["created_at"] = parse_timestamp(dados["created_at"])

        entity = TicketEntity()
        entity.id = dados.pop("id", "")
        entity.created_at = dados.pop("created_at", None)
        entity.aplicar_patch(dados)
        return entity


_OPCIONAIS = frozenset({"ai_analysis", "peca_trocada", "validated_by", "validated_at"})
