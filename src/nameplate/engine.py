""" Expression engines: parse and evaluate a boolean expression against a
named-variable context.

The evaluator treats engines as a black box. Any implementation of
ExpressionEngine will do, but none of them are expected to be safe for use by
more than one thread at a time. """

import abc
import re
from collections.abc import Mapping
from typing import Any, Callable

from simpleeval import EvalWithCompoundTypes, InvalidExpression # type: ignore

class ExpressionError(Exception):
    """ An expression could not be evaluated: bad syntax, an undefined name,
    or an operation the engine doesn't allow. """
    pass

class ExpressionEngine(abc.ABC):
    @abc.abstractmethod
    def evaluate(self, expression:str, context:Mapping[str, Any]) -> Any:
        """ Parses and evaluates expression with names from context. """
        ...

# string literals are matched first so operators inside them are left alone
OPERATOR_RE = re.compile(r"""('(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")|(&&|\|\||!(?!=))""")
OPERATOR_TRANSLATIONS = {
    "&&": " and ",
    "||": " or ",
    "!": " not ",
}

def _translate_match(match:re.Match) -> str:
    if match.group(1) is not None:
        return match.group(1)
    return OPERATOR_TRANSLATIONS[match.group(2)]

def translate_operators(expression:str) -> str:
    """ Rewrites C-style logical operators (&&, ||, !) as python keywords.

    Conditions are commonly written with the C-style operators, e.g.
    "%online% > 5 && !%afk%". "!=" is not touched. """
    return OPERATOR_RE.sub(_translate_match, expression)

class SimpleEvalEngine(ExpressionEngine):
    """ Engine backed by a single simpleeval evaluator.

    The simpleeval evaluator keeps the names for the current evaluation on
    itself, so one of these must never be shared between threads. """

    BUILTIN_NAMES:Mapping[str, Any] = {
        "true": True,
        "false": False,
        "null": None,
    }

    FUNCTIONS:Mapping[str, Callable[..., Any]] = {
        "abs": abs,
        "min": min,
        "max": max,
        "len": len,
        "round": round,
        "int": int,
        "float": float,
        "str": str,
        "lower": lambda s: s.lower() if isinstance(s, str) else s,
        "upper": lambda s: s.upper() if isinstance(s, str) else s,
    }

    def __init__(self) -> None:
        self._evaluator = EvalWithCompoundTypes(functions=dict(self.FUNCTIONS), names={})

    def evaluate(self, expression:str, context:Mapping[str, Any]) -> Any:
        if not expression or not expression.strip():
            raise ExpressionError("empty expression")

        names = dict(self.BUILTIN_NAMES)
        names.update(context)
        self._evaluator.names = names
        try:
            return self._evaluator.eval(translate_operators(expression).strip())
        except SyntaxError as e:
            raise ExpressionError(f'invalid syntax: {e.msg}') from e
        except InvalidExpression as e:
            raise ExpressionError(str(e)) from e
        finally:
            # don't hold on to subject data between evaluations
            self._evaluator.names = {}
