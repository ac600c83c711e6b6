"""
Classificador de tickets com Google Gemini.

Implementa o port TicketClassifier: nunca levanta exceção, qualquer
falha vira o resultado padrão.
"""

import logging
from typing import Optional

from src.core.shared.exceptions import AIUnavailableError
from src.core.tickets.dtos import (
    CLASSIFICACAO_FALHA,
    CLASSIFICACAO_SEM_IA,
    ClassificacaoDTO,
)
from src.core.tickets.ports import NullTicketClassifier, TicketClassifier

from .client import GeminiClient
from .parsers import parse_classification_response
from .prompts import build_classification_prompt, build_generation_config

logger = logging.getLogger(__name__)


class GeminiTicketClassifier:
    """
    Classificação de prioridade, assunto, ação e próximo passo.

    Example:
        classifier = GeminiTicketClassifier(GeminiClient(api_key="..."))
        resultado = classifier.classificar("ATM não liga", "Banco A")
    """

    def __init__(self, client: GeminiClient):
        self.client = client

    def classificar(self, descricao: str, cliente: str) -> ClassificacaoDTO:
        if not self.client.api_key:
            logger.warning("GEMINI_API_KEY ausente, usando classificação padrão")
            return CLASSIFICACAO_SEM_IA

        try:
            texto = self.client.generate_content(
                build_classification_prompt(descricao, cliente),
                config=build_generation_config(),
            )
        except AIUnavailableError as e:
            logger.warning(f"IA indisponível ({e.error_type}), usando classificação padrão")
            return CLASSIFICACAO_FALHA

        resultado = parse_classification_response(texto)
        if resultado is None:
            logger.warning(f"Resposta inválida do Gemini: {texto!r}")
            return CLASSIFICACAO_FALHA
        return resultado


def build_ticket_classifier(
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> TicketClassifier:
    """Gemini quando há chave configurada, senão o classificador nulo."""
    client = GeminiClient(api_key=api_key, model=model)
    if not client.api_key:
        logger.info("Classificação por IA desativada (sem GEMINI_API_KEY)")
        return NullTicketClassifier()
    return GeminiTicketClassifier(client)
