"""Adapter do Google Gemini para classificação de tickets."""

from .classifier import GeminiTicketClassifier, build_ticket_classifier
from .client import GeminiClient

__all__ = ["GeminiClient", "GeminiTicketClassifier", "build_ticket_classifier"]
