from __future__ import annotations

import math
import re
from typing import Any, Callable, Dict

from asteval import Interpreter

Evaluator = Callable[[str, Dict[str, Any]], bool]


class ExpressionError(ValueError):
    pass


def _as_float(v: Any) -> float:
    return float(v)


def _as_int(v: Any) -> int:
    if isinstance(v, str):
        return int(v.strip())
    return int(v)


def _is_nan(v: Any) -> bool:
    return isinstance(v, float) and math.isnan(v)


def _is_inf(v: Any) -> bool:
    return isinstance(v, float) and math.isinf(v)


def _is_nil(v: Any) -> bool:
    return v is None


def _default(v: Any, fallback: Any) -> Any:
    return fallback if v is None else v


_ALLOWED: Dict[str, Any] = {
    "abs": abs,
    "min": min,
    "max": max,
    "round": round,
    "len": len,
    "asFloat": _as_float,
    "asInt": _as_int,
    "isNaN": _is_nan,
    "isInf": _is_inf,
    "isNil": _is_nil,
    "default": _default,
}

# template conditions are often written with C-style boolean operators
_AND = re.compile(r"&&")
_OR = re.compile(r"\|\|")
_NOT = re.compile(r"!(?!=)")


def normalize(expression: str) -> str:
    expr = _AND.sub(" and ", expression)
    expr = _OR.sub(" or ", expr)
    return _NOT.sub(" not ", expr).strip()


def evaluate(expression: str, bindings: Dict[str, Any] | None = None) -> bool:
    """
    Evaluate a boolean condition such as ``asFloat(result) < 0.001``.

    Raises ExpressionError when the expression does not parse, fails at
    runtime, or produces something other than a bool.
    """
    ae = Interpreter(usersyms={**_ALLOWED, **(bindings or {})}, no_print=True)
    try:
        out = ae.eval(normalize(expression), show_errors=False, raise_errors=True)
    except Exception as e:
        raise ExpressionError(f"failed to evaluate {expression!r}: {e}") from e
    if not isinstance(out, bool):
        raise ExpressionError(f"expected bool, but got {type(out).__name__} from {expression!r}")
    return out
