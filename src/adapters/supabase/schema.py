"""
DDL da tabela "tickets" no Supabase.

Gerado a partir de ROW_FIELDS para que colunas do banco, mapper do
PostgREST e model Django não divirjam. O SQL é colado no editor SQL
do painel do Supabase (scripts/setup_database.py --sql).
"""

from typing import List, Tuple

from src.core.tickets.dtos import ROW_FIELDS

# atributo -> (tipo, restrição)
COLUNAS: List[Tuple[str, str, str]] = [
    ("id", "uuid", "primary key default gen_random_uuid()"),
    ("client_name", "text", "not null"),
    ("analyst_name", "text", "not null"),
    ("location_name", "text", "not null"),
    ("task_ticket", "text", "not null"),
    ("service_request", "text", "not null"),
    ("support_start_time", "text", "not null default ''"),
    ("support_end_time", "text", "not null default ''"),
    ("subject_code", "text", "not null"),
    ("priority", "text", "not null"),
    ("status", "text", "not null"),
    ("description", "text", "not null"),
    ("analyst_action", "text", "default ''"),
    ("ai_analysis", "text", ""),
    ("ligacao_devida", "boolean", "default false"),
    ("utilizou_acfs", "boolean", "default false"),
    ("ocorreu_entintamento", "boolean", "default false"),
    ("trocou_peca", "boolean", "default false"),
    ("peca_trocada", "text", ""),
    ("tag_vldd", "boolean", "default false"),
    ("tag_nvldd", "boolean", "default false"),
    ("customer_witness_name", "text", "default ''"),
    ("customer_witness_id", "text", "default ''"),
    ("validated_by", "text", ""),
    ("validated_at", "text", ""),
    ("created_at", "timestamptz", "not null default now()"),
]


def build_supabase_sql(table: str = "tickets") -> str:
    """
    Script de criação da tabela, índice e política de acesso (RLS).

    A política libera leitura e escrita para a chave anon: o app não
    tem autenticação própria.
    """
    definicoes = []
    for nome, tipo, restricao in COLUNAS:
        linha = f'  "{ROW_FIELDS[nome]}" {tipo}'
        if restricao:
            linha += f" {restricao}"
        definicoes.append(linha)

    corpo = ",\n".join(definicoes)
    return "\n".join([
        f'create table if not exists public."{table}" (',
        corpo,
        ");",
        "",
        f'create index if not exists "idx_{table}_created_at" '
        f'on public."{table}" ("createdAt" desc);',
        "",
        f'alter table public."{table}" enable row level security;',
        "",
        f'drop policy if exists "Acesso publico" on public."{table}";',
        f'create policy "Acesso publico" on public."{table}"',
        "  for all using (true) with check (true);",
        "",
    ])
