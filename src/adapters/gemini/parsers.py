"""
Parser para respostas de classificação do Google Gemini AI.

A resposta deve ser um objeto JSON com os quatro campos do schema.
Valores fora do vocabulário invalidam a resposta inteira.
"""

import json
from typing import Optional

from src.core.tickets.dtos import ClassificacaoDTO
from src.core.tickets.entities import SubjectCode, TicketPriority


def parse_classification_response(response_text: str) -> Optional[ClassificacaoDTO]:
    """
    Faz parse da resposta de classificação do Gemini.

    Espera formato:
        {"priority": "Alta", "subjectCode": "1206 - Erro de HW",
         "analystAction": "...", "suggestedNextStep": "..."}

    Returns:
        ClassificacaoDTO, ou None se a resposta for inválida
    """
    if not response_text:
        return None

    try:
        data = json.loads(response_text)
    except ValueError:
        return None

    if not isinstance(data, dict):
        return None

    try:
        prioridade = TicketPriority(data.get("priority"))
        codigo = SubjectCode(data.get("subjectCode"))
    except ValueError:
        return None

    acao = data.get("analystAction")
    proximo = data.get("suggestedNextStep")
    if not isinstance(acao, str) or not isinstance(proximo, str):
        return None

    return ClassificacaoDTO(
        prioridade=prioridade,
        codigo_assunto=codigo,
        acao_analista=acao.strip(),
        proximo_passo=proximo.strip(),
    )
