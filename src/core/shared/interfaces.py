"""
Interfaces (Ports) - Contratos entre Core e Adapters.

Este módulo define os contratos genéricos que o Core usa para
coordenar operações de escrita.

Princípio: Core define interfaces; Adapters implementam.
O fluxo de dependência sempre aponta para o Core.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """
    Unit of Work - Coordena uma escrita em duas fases.

    Não há transação no armazenamento remoto (last-write-wins), então
    a unidade de trabalho é: aplicar mudança provisória, tentar a
    escrita remota, e desfazer a mudança provisória se ela falhar.

    Pattern: Context Manager
        with uow:
            store.update(ticket_id, patch)
        # Commit automático ao sair sem erro
        # Rollback automático se exceção

    Example:
        class OptimisticUpdateUnitOfWork(UnitOfWork):
            def _begin_transaction(self):
                self._state.merge_local(self._ticket_id, self._patch)
    """

    def __enter__(self) -> "UnitOfWork":
        """
        Inicia a unidade de trabalho.

        Returns:
            Self para permitir uso como context manager
        """
        self._begin_transaction()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """
        Finaliza a unidade de trabalho.

        Returns:
            False para propagar exceções
        """
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False  # Não suprime exceções

    @abstractmethod
    def _begin_transaction(self) -> None:
        """Aplica a mudança provisória."""
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        """Confirma a mudança provisória após a escrita remota."""
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """
        Descarta a mudança provisória.

        Chamado automaticamente se exceção ocorrer dentro
        do bloco `with`.
        """
        raise NotImplementedError


# Type alias para facilitar tipagem
UoW = UnitOfWork
