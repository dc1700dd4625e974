# tests/conftest.py
# Agrega src/ al sys.path para que "import scoped_symbols.xxx" funcione en pytest sin instalar.
import sys
import os

# calculamos la ruta a src/ (un nivel arriba de tests/)
SRC = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))

if SRC not in sys.path:
    sys.path.insert(0, SRC)
