# tests/test_symbols.py

from scoped_symbols.symbols import AstSymbol, default_key

def test_ast_symbol_fields():
    owner = AstSymbol("Point", "class")
    sym = AstSymbol("x", "float", owner, extra={"line": 3})
    assert sym.identifier == "x"
    assert sym.type == "float"
    assert sym.parent is owner
    assert sym.extra == {"line": 3}

def test_ast_symbol_defaults():
    sym = AstSymbol("x")
    assert sym.type is None
    assert sym.parent is None
    assert sym.extra is None

def test_ast_symbol_equality_is_identity():
    assert AstSymbol("x", "int") != AstSymbol("x", "int")

def test_ast_symbol_repr_and_str():
    owner = AstSymbol("Point", "class")
    sym = AstSymbol("x", "float", owner)
    assert str(sym) == "x"
    assert repr(sym) == "AstSymbol(identifier='x', type='float', parent='Point')"

def test_default_key():
    class Named:
        identifier = "named"

    assert default_key("plain") == "plain"
    assert default_key(AstSymbol("sym")) == "sym"
    assert default_key(Named()) == "named"
    assert default_key(42) == "42"
