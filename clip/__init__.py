"""clip: a small prefix-notation scripting language.

Basic program flow:
    1. Lexer: turns source text into tokens (see clip/core/lexer.py). Never fails: unexpected characters become
       illegal tokens.
    2. Parser: recursive descent over the tokens, producing a Program (see clip/core/parser.py for the grammar).
    3. Evaluator: walks the Program against a Scope (see clip/core/evaluator.py). Assignments write into the Scope,
       so a Scope can be reused across several programs (which is what the interactive shell does).

Everything that can go wrong in steps 2 and 3 raises clip.lang.error.ClipError.
"""

from clip.core.evaluator import evaluate
from clip.core.lexer import Lexer
from clip.core.parser import parse as parse_tokens
from clip.core.scope import Scope
from clip.lang.error import ClipError

__all__ = ["ClipError", "Lexer", "Scope", "evaluate", "lex", "parse", "run"]


def lex(source):
    """Returns the tokens of source, the last one being EOF."""
    return Lexer(source).lex()


def parse(source):
    """Lexes and parses source into a Program."""
    return parse_tokens(lex(source))


def run(source, scope=None):
    """Lexes, parses and evaluates source in scope (a fresh Scope if None). Returns the final value."""
    return evaluate(parse(source), Scope() if scope is None else scope)
