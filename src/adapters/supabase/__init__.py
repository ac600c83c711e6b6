"""Adapter do Supabase (PostgREST) para o armazenamento de tickets."""

from .mappers import TicketRowMapper
from .schema import build_supabase_sql
from .ticket_store import SupabaseTicketStore

__all__ = ["SupabaseTicketStore", "TicketRowMapper", "build_supabase_sql"]
