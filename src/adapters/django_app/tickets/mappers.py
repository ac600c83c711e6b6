"""
Mappers para conversão entre Entities (Core) e Models (Django).

Responsabilidades:
- Converter TicketEntity → TicketModel (para persistência)
- Converter TicketModel → TicketEntity (para uso no Core)
- Converter patch parcial → campos do Model

Princípios:
- Mappers são stateless
- Não contêm lógica de negócio
- Tratam apenas conversão de dados
"""

from enum import Enum
from typing import Any, Dict, List

from src.core.tickets.dtos import ROW_FIELDS
from src.core.tickets.entities import (
    CAMPOS_IMUTAVEIS,
    SubjectCode,
    TicketEntity,
    TicketPriority,
    TicketStatus,
)

from .models import TicketModel

# Campos da entidade que existem como colunas editáveis no Model
CAMPOS_MODEL = [nome for nome in ROW_FIELDS if nome not in CAMPOS_IMUTAVEIS]


def _valor_model(valor: Any) -> Any:
    return valor.value if isinstance(valor, Enum) else valor


class TicketMapper:
    """
    Mapper para conversão entre TicketEntity e TicketModel.

    Responsável por:
    - to_model(): Entity → Model (nova inserção, sem id/created_at)
    - to_entity(): Model → Entity
    - to_entity_list(): List[Model] → List[Entity]
    - patch_to_fields(): patch parcial → {campo_model: valor}
    """

    @staticmethod
    def to_model(entity: TicketEntity) -> TicketModel:
        """
        Converte TicketEntity para TicketModel.

        Note:
            Não chama .save() - deixa isso para o Store.
            id e created_at ficam com os defaults do Model.
        """
        return TicketModel(**{
            nome: _valor_model(getattr(entity, nome))
            for nome in CAMPOS_MODEL
        })

    @staticmethod
    def to_entity(model: TicketModel) -> TicketEntity:
        """
        Converte TicketModel para TicketEntity.

        Note:
            Bypassa validações do factory method .criar()
            pois dados já foram validados na criação original
        """
        dados = {nome: getattr(model, nome) for nome in CAMPOS_MODEL}
        dados["status"] = TicketStatus(model.status)
        dados["priority"] = TicketPriority(model.priority)
        dados["subject_code"] = SubjectCode(model.subject_code)

        return TicketEntity(
            id=model.id,
            created_at=model.created_at,
            **dados,
        )

    @staticmethod
    def to_entity_list(models: List[TicketModel]) -> List[TicketEntity]:
        return [TicketMapper.to_entity(model) for model in models]

    @staticmethod
    def patch_to_fields(patch: Dict[str, Any]) -> Dict[str, Any]:
        """Filtra id/created_at e converte enums para o valor gravado."""
        return {
            nome: _valor_model(valor)
            for nome, valor in patch.items()
            if nome not in CAMPOS_IMUTAVEIS
        }
