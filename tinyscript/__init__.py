"""
TinyScript Front End Package

Lexer and parser for the TinyScript language: source text becomes a token
list, the token list becomes an Abstract Syntax Tree.

Architecture:
    tinyscript/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Syntax analysis, AST nodes, condition evaluation
    ├── debug.py         # Token and AST printers
    └── cli.py           # Command line entry point
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, lex, LexerError
from .parser import Parser, parse, ParseError

__all__ = [
    "Lexer",
    "lex",
    "LexerError",
    "Parser",
    "parse",
    "ParseError",

    "__version__",
    "__license__",
]
