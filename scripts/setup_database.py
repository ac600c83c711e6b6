#!/usr/bin/env python
"""
Setup do banco de dados do Diário de Bordo.

Este script:
1. Imprime o SQL da tabela "tickets" para o Supabase (--sql)
2. Ou, no backend Django, executa migrations
3. Cria dados de exemplo (opcional)

Uso:
    python scripts/setup_database.py --sql
    python scripts/setup_database.py
    python scripts/setup_database.py --with-sample-data
"""

import os
import sys
import argparse

# Raiz do projeto no path para importar src.*
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def setup_django():
    """Configura Django para uso standalone."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

    import django
    django.setup()


def print_supabase_sql():
    """Imprime o SQL para colar no editor SQL do Supabase."""
    from django.conf import settings
    from src.adapters.supabase.schema import build_supabase_sql

    print("-- Cole no SQL Editor do painel do Supabase")
    print(build_supabase_sql(settings.SUPABASE_TICKETS_TABLE))


def run_migrations():
    """Executa migrations."""
    from django.core.management import call_command

    print("📦 Executando migrations...")
    call_command('migrate', verbosity=1)
    print("✅ Migrations concluídas!")


def create_sample_data():
    """Cria dados de exemplo pelo TicketStore configurado."""
    from src.config.container import get_container
    from src.core.tickets.dtos import CriarTicketInputDTO
    from src.core.tickets.use_cases import entidade_from_input

    store = get_container().ticket_store()

    sample_tickets = [
        CriarTicketInputDTO(
            client_name='Banco Alfa',
            analyst_name='João Silva',
            location_name='Agência Centro',
            task_ticket='TASK-1001',
            service_request='SR-5001',
            description='Terminal não dispensa cédulas, erro no módulo dispensador.',
            priority='Crítica',
            subject_code='1206 - Erro de HW',
            status='Escalado',
        ),
        CriarTicketInputDTO(
            client_name='Banco Beta',
            analyst_name='Maria Souza',
            location_name='Shopping Norte',
            task_ticket='TASK-1002',
            service_request='SR-5002',
            description='Leitora de cartão não reconhece cartões com chip.',
            priority='Alta',
            subject_code='1202 - Testes perifericos',
        ),
        CriarTicketInputDTO(
            client_name='Cooperativa Gama',
            analyst_name='João Silva',
            location_name='Posto Rodovia',
            task_ticket='TASK-1003',
            service_request='SR-5003',
            description='Técnico com dúvida na configuração de rede do terminal.',
            subject_code='1207 - Duvida em configuração',
            status='Em Atendimento',
        ),
    ]

    print("📝 Criando tickets de exemplo...")

    for dto in sample_tickets:
        store.insert(entidade_from_input(dto))
        print(f"   ✓ {dto.task_ticket} - {dto.client_name}")

    print(f"✅ {len(sample_tickets)} tickets criados!")


def check_connection():
    """Verifica acesso ao armazenamento configurado."""
    from django.conf import settings
    from src.config.container import get_container
    from src.core.shared.exceptions import StoreError

    print(f"🔍 Verificando armazenamento ({settings.TICKET_STORE_BACKEND})...")

    try:
        total = len(get_container().ticket_store().list())
    except StoreError as e:
        print(f"❌ {e.mensagem_usuario}")
        return False

    print(f"✅ Conexão OK! {total} tickets encontrados.")
    return True


def main():
    parser = argparse.ArgumentParser(description='Setup do banco do Diário de Bordo')
    parser.add_argument(
        '--sql',
        action='store_true',
        help='Imprimir SQL da tabela para o Supabase'
    )
    parser.add_argument(
        '--with-sample-data',
        action='store_true',
        help='Criar dados de exemplo'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Apenas verificar conexão'
    )

    args = parser.parse_args()

    setup_django()

    if args.sql:
        print_supabase_sql()
        return

    from django.conf import settings

    print("\n" + "=" * 60)
    print("🔧 Diário de Bordo - Setup")
    print("=" * 60 + "\n")

    if args.check_only:
        check_connection()
        return

    if settings.TICKET_STORE_BACKEND == 'django':
        run_migrations()
    elif settings.TICKET_STORE_BACKEND == 'supabase':
        print("ℹ️  Backend Supabase: crie a tabela com --sql antes de continuar.")

    if not check_connection():
        return

    if args.with_sample_data:
        create_sample_data()


if __name__ == '__main__':
    main()
