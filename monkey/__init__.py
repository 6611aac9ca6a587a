# Monkey: lexer, Pratt parser and tree-walking evaluator.
#
# Data flow: source text -> tokenize -> parse -> Program -> evaluate -> value.
#
# The functions below are the programmatic boundary used by the REPL/CLI and
# the language server:
# - tokenize(source): lazy Token iterator
# - parse(source): Program, or raises ParseError
# - evaluate(program, env): value, or raises MonkeyRuntimeError

from monkey.errors import MonkeyError, ParseError, MonkeyRuntimeError
from monkey.evaluation.evaluator import evaluate
from monkey.interpreter import Interpreter
from monkey.reader.lexer import tokenize
from monkey.reader.parser import parse
from monkey.types.environment import Environment

__version__ = "0.1.0"
