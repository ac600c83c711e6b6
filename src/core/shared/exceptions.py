"""
Exceções de Domínio do Diário de Bordo.

Este módulo define exceções específicas do domínio que permitem
comunicar erros de forma clara e tipada entre as camadas.

Hierarquia:
    DomainException (base)
    ├── ValidationError (validação de entrada)
    ├── EntityNotFoundError (entidade não existe)
    ├── BusinessRuleViolationError (regra de negócio violada)
    ├── StoreError (falha no armazenamento remoto)
    │   ├── StoreConnectionError (rede/DNS)
    │   ├── SchemaError (tabela inexistente)
    │   └── StorePermissionError (política de acesso)
    └── AIUnavailableError (IA indisponível, nunca chega ao operador)
"""


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Todas as exceções específicas do domínio devem herdar desta classe.
    Isso permite capturar qualquer erro de domínio de forma genérica.

    Example:
        try:
            service.execute(input_dto)
        except DomainException as e:
            logger.error(f"Erro de domínio: {e}")
    """

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    @property
    def mensagem_usuario(self) -> str:
        """Mensagem exibida ao operador."""
        return self.message

    def to_dict(self) -> dict:
        """Serializa exceção para dicionário (útil para APIs)."""
        return {
            "error": self.code,
            "message": self.mensagem_usuario,
        }


class ValidationError(DomainException):
    """
    Erro de validação de dados de entrada.

    Lançada na fronteira, antes de qualquer chamada de rede, quando
    um campo obrigatório está ausente ou um valor é inválido.

    Example:
        if not client_name.strip():
            raise ValidationError("Cliente é obrigatório", field="client_name")
    """

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class EntityNotFoundError(DomainException):
    """
    Entidade não encontrada no armazenamento.

    Example:
        ticket = next((t for t in store.list() if t.id == ticket_id), None)
        if not ticket:
            raise EntityNotFoundError(f"Ticket {ticket_id} não encontrado")
    """

    def __init__(self, message: str, entity_type: str = None, entity_id: str = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, "ENTITY_NOT_FOUND")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id:
            result["entity_id"] = self.entity_id
        return result


class BusinessRuleViolationError(DomainException):
    """
    Violação de regra de negócio.

    Example:
        if patch.get("status") == TicketStatus.RESOLVIDO:
            raise BusinessRuleViolationError(
                "Encerramento exige validação",
                rule="encerramento_exige_validacao"
            )
    """

    def __init__(self, message: str, rule: str = None):
        self.rule = rule
        super().__init__(message, "BUSINESS_RULE_VIOLATION")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.rule:
            result["rule"] = self.rule
        return result


class StoreError(DomainException):
    """
    Falha genérica do armazenamento de tickets.

    Subclasses identificam a categoria da falha para que o operador
    consiga distinguir "sem rede" de "sem permissão" de "tabela ausente".

    Attributes:
        detail: Mensagem original do backend (para logs)
        remote_code: Código de erro devolvido pelo backend, se houver
    """

    DEFAULT_CODE = "STORE_ERROR"
    USER_MESSAGE = "Falha ao acessar o banco de dados: {detail}"

    def __init__(self, detail: str = "", remote_code: str = None):
        self.detail = detail or "Erro desconhecido."
        self.remote_code = remote_code
        super().__init__(self.detail, self.DEFAULT_CODE)

    @property
    def mensagem_usuario(self) -> str:
        return self.USER_MESSAGE.format(detail=self.detail)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.remote_code:
            result["remote_code"] = self.remote_code
        return result


class StoreConnectionError(StoreError):
    """Falha de transporte (rede, DNS, timeout)."""

    DEFAULT_CODE = "CONNECTION_ERROR"
    USER_MESSAGE = (
        "Falha de conexão. Verifique se a URL do Supabase no .env está correta."
    )


class SchemaError(StoreError):
    """Tabela/coleção de tickets inexistente no backend."""

    DEFAULT_CODE = "SCHEMA_ERROR"
    USER_MESSAGE = (
        'Tabela "tickets" não encontrada. Verifique se você rodou o script '
        "SQL no Painel do Supabase."
    )


class StorePermissionError(StoreError):
    """Acesso negado pela política do backend (RLS)."""

    DEFAULT_CODE = "PERMISSION_ERROR"
    USER_MESSAGE = (
        "Erro de permissão (RLS). Crie uma Policy no Supabase para permitir acesso."
    )


class AIUnavailableError(DomainException):
    """
    Serviço de classificação por IA indisponível.

    Nunca é propagada ao operador: o classificador converte esta
    exceção no resultado padrão.

    Attributes:
        error_type: Tipo do erro ('api_key_invalid', 'quota_exceeded', etc.)
    """

    def __init__(self, message: str, error_type: str = "unknown"):
        self.error_type = error_type
        super().__init__(message, "AI_UNAVAILABLE")
