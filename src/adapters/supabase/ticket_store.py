"""
Armazenamento de tickets no Supabase (PostgREST).

Centraliza toda comunicação com a API REST do Supabase, incluindo:
- Cabeçalhos de autenticação (apikey + Bearer)
- Listagem ordenada, inserção e atualização parcial
- Tradução de erros para a taxonomia de StoreError
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from django.conf import settings

from src.core.shared.exceptions import (
    EntityNotFoundError,
    SchemaError,
    StoreConnectionError,
    StoreError,
    StorePermissionError,
    ValidationError,
)
from src.core.tickets.entities import TicketEntity

from .mappers import TicketRowMapper

logger = logging.getLogger(__name__)

# Códigos do Postgres/PostgREST por categoria
SCHEMA_ERROR_CODES = frozenset({"42P01", "PGRST205"})
PERMISSION_ERROR_CODES = frozenset({"PGRST301", "42501"})


class SupabaseTicketStore:
    """
    TicketStore sobre a API REST do Supabase.

    Encapsula autenticação, chamadas e tratamento de erros.

    Example:
        store = SupabaseTicketStore(
            base_url="https://xyz.supabase.co",
            api_key="eyJ...",
        )
        tickets = store.list()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        table: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Inicializa o cliente.

        Args:
            base_url: URL do projeto (ex: "https://xyz.supabase.co")
            api_key: Chave anon do projeto
            table: Nome da tabela (padrão "tickets")
            timeout: Timeout em segundos por requisição
            session: Sessão HTTP (injetável em testes)
        """
        self.base_url = self._normalize_base_url(
            base_url or getattr(settings, "SUPABASE_URL", None)
        )
        self.api_key = api_key or getattr(settings, "SUPABASE_ANON_KEY", None)
        self.table = table or getattr(settings, "SUPABASE_TICKETS_TABLE", "tickets")
        self.timeout = timeout or getattr(settings, "STORE_TIMEOUT_SECONDS", 10)
        self.session = session or requests.Session()

    def _normalize_base_url(self, url: Optional[str]) -> Optional[str]:
        """
        Normaliza a URL base para o endpoint REST.

        Returns:
            URL formatada (ex: "https://xyz.supabase.co/rest/v1")
            ou None se não estiver configurada
        """
        if not url:
            return None

        url = url.rstrip("/")
        if url.endswith("/rest/v1"):
            return url
        return f"{url}/rest/v1"

    def _headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key or "",
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _request(
        self,
        method: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> Any:
        """
        Executa uma chamada e devolve o JSON (ou None sem corpo).

        Raises:
            StoreConnectionError: URL ausente, rede ou timeout
            SchemaError: Tabela inexistente
            StorePermissionError: Bloqueado por RLS/credencial
            StoreError: Qualquer outro erro do backend
        """
        if not self.base_url or not self.api_key:
            raise StoreConnectionError(
                "SUPABASE_URL ou SUPABASE_ANON_KEY não configurado"
            )

        url = f"{self.base_url}/{self.table}"
        logger.debug(f"Supabase {method} {url} params={params}")

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(prefer),
                timeout=self.timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.error(f"Falha de conexão com Supabase: {e}")
            raise StoreConnectionError(str(e)) from e
        except requests.RequestException as e:
            logger.error(f"Erro na requisição ao Supabase: {e}")
            raise StoreError(str(e)) from e

        if not response.ok:
            raise self._parse_error(response)

        if not response.content:
            return None
        return response.json()

    def _parse_error(self, response: requests.Response) -> StoreError:
        """Traduz resposta de erro do PostgREST para StoreError."""
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        code = body.get("code")
        message = body.get("message") or response.text or f"HTTP {response.status_code}"
        logger.warning(
            f"Supabase respondeu {response.status_code} (code={code}): {message}"
        )

        if code in SCHEMA_ERROR_CODES:
            return SchemaError(message, remote_code=code)
        if code in PERMISSION_ERROR_CODES or response.status_code in (401, 403):
            return StorePermissionError(message, remote_code=code)
        return StoreError(message, remote_code=code)

    def list(self) -> List[TicketEntity]:
        rows = self._request(
            "GET",
            params={"select": "*", "order": "createdAt.desc"},
        ) or []
        try:
            return [TicketRowMapper.to_entity(row) for row in rows]
        except ValidationError as e:
            logger.error(f"Linha inválida na tabela {self.table}: {e}")
            raise StoreError(f"Linha inválida: {e}") from e

    def insert(self, ticket: TicketEntity) -> None:
        self._request(
            "POST",
            json=TicketRowMapper.to_row(ticket),
            prefer="return=minimal",
        )
        logger.info(f"Ticket inserido no Supabase: task={ticket.task_ticket}")

    def update(self, ticket_id: str, patch: Dict[str, Any]) -> None:
        body = TicketRowMapper.patch_to_row(patch)
        rows = self._request(
            "PATCH",
            params={"id": f"eq.{ticket_id}"},
            json=body,
            prefer="return=representation",
        )
        if not rows:
            raise EntityNotFoundError(
                f"Ticket {ticket_id} não encontrado",
                entity_type="Ticket",
                entity_id=ticket_id,
            )
        logger.info(f"Ticket {ticket_id} atualizado no Supabase: {sorted(body)}")
