# src/scoped_symbols/symbol_table.py
"""
SymbolTable: tabla de símbolos con scopes léxicos anidados.

Características:
- enter_scope() / exit_scope() => empuja / saca un scope vacío (O(1), sin copiar bindings)
- add(key[, value]) => inserta en el scope actual
- add_to_global_scope(key[, value]) => inserta directo en el scope raíz, desde cualquier profundidad
- local_lookup(...) / lookup(...) => búsqueda sólo local / recorriendo la cadena hacia la raíz
- iter(table) => generador perezoso de todos los símbolos visibles (local primero, luego padres)
- context manager .scope() => enter_scope() dentro de un `with`, exit_scope() al salir

Modelo:
- Cada scope es un "bucket map": clave (str) -> lista de símbolos con esa clave,
  en orden de inserción.
- La instancia viva siempre apunta al scope más interno. enter_scope() crea un nodo
  que se queda con el bucket map y el enlace al padre actuales, y pasa a ser el
  padre de la instancia; exit_scope() hace lo inverso.
- El bucket map global es siempre el del scope raíz y se alcanza en O(1).
- Varias entradas con la misma clave conviven si difieren en `type` o en `parent`.
  Con allow_duplicates=False basta con la clave para rechazar.

No es thread-safe: un solo cursor muta la cadena a la vez.
"""

from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, TypeVar, Union
import logging

from .errors import DuplicateSymbolError, ScopeUnderflowError
from .symbols import default_key

log = logging.getLogger(__name__)

TSymbol = TypeVar("TSymbol")


class SymbolTable(Generic[TSymbol]):
    def __init__(self, key_func: Optional[Callable[[TSymbol], str]] = None, allow_duplicates: bool = True):
        """
        key_func: deriva la clave de un símbolo (por defecto `identifier`, o el propio str)
        allow_duplicates: si False, una clave repetida en el mismo scope siempre es error,
                          aunque los símbolos difieran en type/parent
        """
        self.symbols: Dict[str, List[TSymbol]] = {}
        self.key_func: Callable[[TSymbol], str] = key_func or default_key
        self.allow_duplicates = bool(allow_duplicates)
        self.parent: Optional["SymbolTable[TSymbol]"] = None
        # el raíz comparte su propio bucket map como global
        self._global_symbols: Dict[str, List[TSymbol]] = self.symbols
        self._depth = 0

    # ---------- scope management ----------

    def enter_scope(self) -> None:
        """Push a fresh, empty innermost scope."""
        node: "SymbolTable[TSymbol]" = SymbolTable(self.key_func, self.allow_duplicates)
        node.symbols = self.symbols
        node.parent = self.parent
        node._global_symbols = self._global_symbols
        node._depth = self._depth

        self.parent = node
        self.symbols = {}
        self._depth += 1
        log.debug("enter_scope: depth=%d", self._depth)

    def exit_scope(self) -> None:
        """
        Drop the innermost scope and everything defined only there.
        Raises ScopeUnderflowError at the root; the table is left untouched.
        """
        if self.parent is None:
            log.debug("exit_scope: already at the root scope")
            raise ScopeUnderflowError()

        self.symbols = self.parent.symbols
        self.parent = self.parent.parent
        self._depth -= 1
        log.debug("exit_scope: depth=%d", self._depth)

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def is_global(self) -> bool:
        return self.parent is None

    # ---------- lookup ----------

    def local_lookup(self, key: Union[str, TSymbol], sym_type: Any = None, parent: Any = None) -> List[TSymbol]:
        """Matches for `key` in the current scope only (empty list if none)."""
        return self._match(self.symbols, self._key(key), sym_type, parent)

    def lookup(self, key: Union[str, TSymbol], sym_type: Any = None, parent: Any = None) -> List[TSymbol]:
        """
        Matches for `key` from the innermost scope outwards.

        The first scope with any match wins entirely: outer matches are never
        merged in, even when the filters would select different symbols there.
        """
        name = self._key(key)
        node: Optional["SymbolTable[TSymbol]"] = self
        while node is not None:
            found = self._match(node.symbols, name, sym_type, parent)
            if found:
                return found
            node = node.parent
        return []

    def global_lookup(self, key: Union[str, TSymbol], sym_type: Any = None, parent: Any = None) -> List[TSymbol]:
        """Matches for `key` in the root scope, from any depth."""
        return self._match(self._global_symbols, self._key(key), sym_type, parent)

    def __contains__(self, key: Union[str, TSymbol]) -> bool:
        return bool(self.lookup(key))

    # ---------- insertion ----------

    def add(self, key: Union[str, TSymbol], value: Optional[TSymbol] = None) -> None:
        """
        Insert into the current scope. With no `value` the key itself is stored
        (symbol-as-key shorthand).
        """
        self._insert(self.symbols, key, value, "local")

    def add_to_global_scope(self, key: Union[str, TSymbol], value: Optional[TSymbol] = None) -> None:
        """Same as add() but always targets the root scope."""
        self._insert(self._global_symbols, key, value, "global")

    def _insert(self, target: Dict[str, List[TSymbol]], key: Union[str, TSymbol],
                value: Optional[TSymbol], scope: str) -> None:
        if value is None:
            value = key  # type: ignore[assignment]
        name = self._key(key)

        existing = self._find_clash(target.get(name), value)
        if existing is not None:
            log.debug("add: '%s' rejected in %s scope (depth=%d)", name, scope, self._depth)
            raise DuplicateSymbolError(name, existing, scope)

        # append, never replace: live iterators over the bucket stay valid
        target.setdefault(name, []).append(value)
        log.debug("add: '%s' into %s scope (depth=%d)", name, scope, self._depth)

    def _find_clash(self, bucket: Optional[List[TSymbol]], value: Any) -> Optional[TSymbol]:
        if not bucket:
            return None
        if not self.allow_duplicates:
            return bucket[0]
        for sym in bucket:
            if _type_of(sym) == _type_of(value) and _parent_of(sym) == _parent_of(value):
                return sym
        return None

    # ---------- iteration ----------

    def __iter__(self) -> Iterator[TSymbol]:
        """
        Lazily yield every visible symbol: the current scope first, then each
        enclosing scope up to the root. Each key keeps its insertion order.
        Do not mutate the table while iterating.
        """
        node: Optional["SymbolTable[TSymbol]"] = self
        while node is not None:
            for bucket in node.symbols.values():
                yield from bucket
            node = node.parent

    # ---------- context manager convenience ----------

    class _ScopeContext:
        def __init__(self, table: "SymbolTable"):
            self._table = table

        def __enter__(self) -> "SymbolTable":
            self._table.enter_scope()
            return self._table

        def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
            self._table.exit_scope()
            return None

    def scope(self) -> "SymbolTable._ScopeContext":
        """
        Context-manager helper:

        with table.scope():
            table.add("i")
            # 'i' disappears when leaving the block
        """
        return SymbolTable._ScopeContext(self)

    # ---------- internal utils ----------

    def _key(self, key: Union[str, TSymbol]) -> str:
        return key if isinstance(key, str) else self.key_func(key)

    @staticmethod
    def _match(symbols: Dict[str, List[TSymbol]], name: str, sym_type: Any, parent: Any) -> List[TSymbol]:
        bucket = symbols.get(name)
        if not bucket:
            return []
        return [
            sym for sym in bucket
            if (sym_type is None or _type_of(sym) == sym_type)
            and (parent is None or _parent_of(sym) == parent)
        ]

    def __repr__(self) -> str:
        return (
            f"<SymbolTable depth={self._depth} local_keys={len(self.symbols)} "
            f"allow_duplicates={self.allow_duplicates}>"
        )


def _type_of(sym: Any) -> Any:
    return getattr(sym, "type", None)


def _parent_of(sym: Any) -> Any:
    return getattr(sym, "parent", None)
