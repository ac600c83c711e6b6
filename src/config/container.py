"""
Dependency Injection Container.

Configura e gerencia todas as dependências da aplicação.
Usa dependency-injector para lazy-loading e injeção automática.

Benefícios:
- Dependências explícitas
- Testabilidade (fácil trocar o armazenamento por um fake)
- Lazy-loading (criado sob demanda)

Padrões:
- Selector: Escolhe o TicketStore pelo backend configurado
- Singleton: Uma instância para toda app (stores, classificador, estado)
- Factory: Nova instância por chamada (services)
"""

from dependency_injector import containers, providers
from typing import Optional


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Configuration: Valores vindos do Django settings
    - Stores: Supabase, Django ORM ou memória
    - IA: Classificador (Gemini ou nulo), escolhido uma vez
    - Services: Use Cases
    - State: Estado da aplicação

    Example:
        from src.config.container import get_container

        container = get_container()
        service = container.listar_tickets_service()
        tickets = service.execute(termo="banco")
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    config = providers.Configuration()

    # =========================================================================
    # Stores (Singleton - uma instância por app)
    # =========================================================================

    supabase_ticket_store = providers.Singleton(
        # Lazy import
        lambda base_url, api_key, table, timeout: __import__(
            'src.adapters.supabase.ticket_store',
            fromlist=['SupabaseTicketStore']
        ).SupabaseTicketStore(
            base_url=base_url,
            api_key=api_key,
            table=table,
            timeout=timeout,
        ),
        base_url=config.supabase_url,
        api_key=config.supabase_anon_key,
        table=config.supabase_tickets_table,
        timeout=config.store_timeout_seconds,
    )

    django_ticket_store = providers.Singleton(
        lambda: __import__(
            'src.adapters.django_app.tickets.repositories',
            fromlist=['DjangoTicketStore']
        ).DjangoTicketStore()
    )

    memory_ticket_store = providers.Singleton(
        lambda: __import__(
            'src.core.tickets.ports',
            fromlist=['InMemoryTicketStore']
        ).InMemoryTicketStore()
    )

    ticket_store = providers.Selector(
        config.ticket_store_backend,
        supabase=supabase_ticket_store,
        django=django_ticket_store,
        memory=memory_ticket_store,
    )

    # =========================================================================
    # IA (Singleton - decidido uma vez na inicialização)
    # =========================================================================

    ticket_classifier = providers.Singleton(
        lambda api_key, model: __import__(
            'src.adapters.gemini.classifier',
            fromlist=['build_ticket_classifier']
        ).build_ticket_classifier(api_key=api_key, model=model),
        api_key=config.gemini_api_key,
        model=config.gemini_model,
    )

    # =========================================================================
    # Services / Use Cases (Factory - nova instância por chamada)
    # =========================================================================

    criar_ticket_service = providers.Factory(
        lambda store: __import__(
            'src.core.tickets.use_cases',
            fromlist=['CriarTicketService']
        ).CriarTicketService(store),
        store=ticket_store,
    )

    listar_tickets_service = providers.Factory(
        lambda store: __import__(
            'src.core.tickets.use_cases',
            fromlist=['ListarTicketsService']
        ).ListarTicketsService(store),
        store=ticket_store,
    )

    atualizar_ticket_service = providers.Factory(
        lambda store: __import__(
            'src.core.tickets.use_cases',
            fromlist=['AtualizarTicketService']
        ).AtualizarTicketService(store),
        store=ticket_store,
    )

    obter_estatisticas_service = providers.Factory(
        lambda store: __import__(
            'src.core.tickets.use_cases',
            fromlist=['ObterEstatisticasService']
        ).ObterEstatisticasService(store),
        store=ticket_store,
    )

    listar_escalonados_service = providers.Factory(
        lambda store: __import__(
            'src.core.tickets.use_cases',
            fromlist=['ListarEscalonadosService']
        ).ListarEscalonadosService(store),
        store=ticket_store,
    )

    classificar_ticket_service = providers.Factory(
        lambda classifier: __import__(
            'src.core.tickets.use_cases',
            fromlist=['ClassificarTicketService']
        ).ClassificarTicketService(classifier),
        classifier=ticket_classifier,
    )

    preparar_validacao_service = providers.Factory(
        lambda store: __import__(
            'src.core.tickets.use_cases',
            fromlist=['PrepararValidacaoService']
        ).PrepararValidacaoService(store),
        store=ticket_store,
    )

    validar_encerramento_service = providers.Factory(
        lambda store, validated_by: __import__(
            'src.core.tickets.use_cases',
            fromlist=['ValidarEncerramentoService']
        ).ValidarEncerramentoService(store, validated_by=validated_by),
        store=ticket_store,
        validated_by=config.validated_by_marker,
    )

    # =========================================================================
    # Estado da aplicação
    # =========================================================================

    diario_state = providers.Singleton(
        lambda store, classifier, validated_by: __import__(
            'src.core.tickets.state',
            fromlist=['DiarioDeBordoState']
        ).DiarioDeBordoState(
            store,
            classifier=classifier,
            validated_by=validated_by,
        ),
        store=ticket_store,
        classifier=ticket_classifier,
        validated_by=config.validated_by_marker,
    )


def _config_from_settings() -> dict:
    """Lê do Django settings os valores usados pelo container."""
    from django.conf import settings

    return {
        'ticket_store_backend': settings.TICKET_STORE_BACKEND,
        'supabase_url': settings.SUPABASE_URL,
        'supabase_anon_key': settings.SUPABASE_ANON_KEY,
        'supabase_tickets_table': settings.SUPABASE_TICKETS_TABLE,
        'store_timeout_seconds': settings.STORE_TIMEOUT_SECONDS,
        'gemini_api_key': settings.GEMINI_API_KEY,
        'gemini_model': settings.GEMINI_MODEL,
        'validated_by_marker': settings.VALIDATED_BY_MARKER,
    }


# =============================================================================
# Container Global (Singleton)
# =============================================================================

_container: Optional[Container] = None


def get_container() -> Container:
    """
    Retorna instância global do container.

    Cria se não existir (lazy initialization), configurado
    a partir do Django settings.

    Returns:
        Container configurado
    """
    global _container

    if _container is None:
        _container = Container()
        _container.config.from_dict(_config_from_settings())

    return _container


def reset_container() -> None:
    """
    Reset do container (para testes).

    Permite criar novo container limpo.
    """
    global _container
    _container = None
