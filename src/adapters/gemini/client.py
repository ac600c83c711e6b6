"""
Cliente para integração com Google Gemini AI.

Centraliza toda comunicação com a API do Gemini, incluindo:
- Criação do cliente
- Chamadas à API
- Tratamento de erros
"""

import logging
from typing import Optional, Tuple

from django.conf import settings
from google import genai
from google.genai import types

from src.core.shared.exceptions import AIUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiClient:
    """
    Cliente para comunicação com Google Gemini AI.

    Encapsula toda lógica de autenticação, chamadas e tratamento de erros.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """
        Inicializa o cliente Gemini.

        Args:
            api_key: Chave da API do Gemini. Se None, tenta obter de settings.
            model: Modelo a ser usado. Se None, tenta obter de settings.
        """
        self.api_key = api_key or getattr(settings, "GEMINI_API_KEY", None)
        self.model = model or getattr(settings, "GEMINI_MODEL", DEFAULT_MODEL)
        self._client = None

    def get_client(self) -> Optional[genai.Client]:
        """
        Cria e retorna o cliente do Google Gemini AI.

        Returns:
            Cliente Gemini ou None se API key não estiver configurada
        """
        if not self.api_key:
            return None

        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)

        return self._client

    def generate_content(
        self,
        prompt: str,
        config: Optional[types.GenerateContentConfig] = None,
    ) -> Optional[str]:
        """
        Faz chamada à API do Gemini e retorna o texto da resposta.

        Args:
            prompt: Prompt a ser enviado
            config: Configuração da geração (schema de resposta etc.)

        Returns:
            Texto da resposta, ou None se não houver chave ou texto

        Raises:
            AIUnavailableError: Qualquer falha na chamada
        """
        client = self.get_client()
        if not client:
            return None

        try:
            response = client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            error_type, error_message = self._parse_error(e)
            logger.warning(f"Erro ao chamar API do Gemini: {error_type} - {str(e)}")
            raise AIUnavailableError(error_message, error_type=error_type) from e

        return response.text.strip() if response.text else None

    def _parse_error(self, exception: Exception) -> Tuple[str, str]:
        """
        Analisa exceções da API do Gemini.

        Returns:
            (tipo_erro, mensagem_amigavel)
            tipos possíveis: 'api_key_invalid', 'quota_exceeded',
                             'service_unavailable', 'unknown'
        """
        error_str = str(exception)
        error_lower = error_str.lower()

        if "503" in error_str or "unavailable" in error_lower or "overloaded" in error_lower:
            return "service_unavailable", "O modelo do Gemini está sobrecarregado."

        if "quota" in error_lower or "rate limit" in error_lower or "429" in error_str:
            return "quota_exceeded", "Limite de quota da API do Gemini foi excedido."

        if "api key" in error_lower or "api_key" in error_lower:
            return "api_key_invalid", "A chave da API do Gemini é inválida ou expirou."

        if "permission" in error_lower or "unauthorized" in error_lower:
            return "api_key_invalid", "A chave da API do Gemini não tem permissões suficientes."

        return "unknown", f"Erro ao comunicar com a API do Gemini: {error_str}"
