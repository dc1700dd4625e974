# src/scoped_symbols/errors.py
"""Errores de la tabla de símbolos.

- ScopeUnderflowError: exit_scope() en el scope global (bug del llamador).
- DuplicateSymbolError: add()/add_to_global_scope() con un símbolo indistinguible
  de uno ya existente en el scope destino (recuperable: reportar redeclaración).
"""

from typing import Any, Optional


class SymbolTableError(Exception):
    """Base class for every error raised by the symbol table."""


class ScopeUnderflowError(SymbolTableError, RuntimeError):
    def __init__(self, message: str = "Already at the root scope"):
        super().__init__(message)


class DuplicateSymbolError(SymbolTableError, KeyError):
    def __init__(self, key: str, existing: Optional[Any] = None, scope: str = "local"):
        self.key = key
        self.existing = existing
        self.scope = scope
        self.message = f"Symbol {key} already found in {scope} scope"
        super().__init__(self.message)

    # KeyError.__str__ quotes its argument; keep the plain message
    def __str__(self) -> str:
        return self.message
