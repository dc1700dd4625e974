# src/scoped_symbols/symbols.py
"""Contrato mínimo de símbolo.

La tabla sólo necesita tres capacidades de un símbolo:
  - identifier: nombre usado como clave (salvo key_func propia)
  - type: discriminador opaco, sólo se compara por igualdad
  - parent: referencia a otro símbolo, sólo se compara por igualdad

AstSymbol es la implementación por defecto; cualquier objeto con esos
atributos (o un str) sirve.
"""

from typing import Any, Generic, Optional, Protocol, TypeVar, Union


class SymbolLike(Protocol):
    identifier: str


TExtra = TypeVar("TExtra")


class AstSymbol(Generic[TExtra]):
    def __init__(self, identifier: str, sym_type: Any = None, parent: Optional["AstSymbol"] = None,
                 extra: Optional[TExtra] = None):
        self.identifier = identifier
        self.type = sym_type
        # back-reference used only for comparison, never walked by the table
        self.parent = parent
        self.extra = extra

    def __str__(self) -> str:
        return self.identifier

    def __repr__(self):
        parent = self.parent.identifier if self.parent is not None else None
        return f"AstSymbol(identifier={self.identifier!r}, type={self.type!r}, parent={parent!r})"


def default_key(symbol: Union[str, SymbolLike, Any]) -> str:
    """Derive the storage key of a symbol.

    Strings are their own key, structured symbols use ``identifier`` and
    anything else falls back to ``str()``.
    """
    if isinstance(symbol, str):
        return symbol
    identifier = getattr(symbol, "identifier", None)
    if identifier is not None:
        return str(identifier)
    return str(symbol)
