"""
Abacus Backend — Calculator Service
=====================================

What:  Operation registry, operand validation and dispatch for GET /api/calculate.
Why:   Keeps all arithmetic and input rules out of the HTTP layer so they can
       be tested as plain functions.
How:   validate → parse to float → look up in an immutable registry → apply.

Operand validation (per operand, operand1 first):
    1. Trim surrounding whitespace; empty or missing is invalid
    2. Must match the numeric-literal grammar (case-insensitive)
    3. After removing digits, '-', 'e' and 'E', at most one character may remain
       (so "+1.5" and "1.5e+3" are rejected while "-1.5" and "1e+3" pass)

Grammar variants:
    strict (default)  ^[+-]?([0-9]+\\.?[0-9]*|\\.[0-9]+)(e[+-]?[0-9]+)?$
                      every operand must contain at least one digit
    legacy            ^([+-])?[0-9.]+(e([+-])?[0-9]+)?$
                      also accepts digitless operands such as "." and "-.",
                      which evaluate to NaN

IEEE semantics:
    Division by zero, overflow and undefined results produce inf / -inf / nan
    instead of raising, so a validated request always yields a number.
"""

import logging
import math
import re
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from app.config import settings
from app.exceptions import (
    InvalidOperandError,
    InvalidOperationError,
    UnspecifiedOperationError,
)

logger = logging.getLogger(__name__)

BinaryOperation = Callable[[float, float], float]

STRICT_OPERAND_PATTERN = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)(e[+-]?[0-9]+)?$", re.IGNORECASE)
LEGACY_OPERAND_PATTERN = re.compile(r"^([+-])?[0-9.]+(e([+-])?[0-9]+)?$", re.IGNORECASE)

# Everything the stray-character guard is allowed to strip
_GUARD_STRIPPED = re.compile(r"[-0-9e]", re.IGNORECASE)


# ══════════════════════════════════════════════════════════════════════════
# Operations
# ══════════════════════════════════════════════════════════════════════════

def add(a: float, b: float) -> float:
    return a + b


def subtract(a: float, b: float) -> float:
    return a - b


def multiply(a: float, b: float) -> float:
    return a * b


def divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        # Signed zero in the divisor flips the sign of the infinity
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def power(a: float, b: float) -> float:
    try:
        result = math.pow(a, b)
    except OverflowError:
        # Negative base with an odd integer exponent keeps its sign
        if a < 0 and b.is_integer() and int(b) % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        # 0 ** negative is a pole; negative ** fractional has no real value
        if a == 0:
            return math.inf
        return math.nan
    return result


def sqrt(a: float, _b: float) -> float:
    if a < 0:
        return math.nan
    return math.sqrt(a)


OPERATIONS: Mapping[str, BinaryOperation] = MappingProxyType({
    "add": add,
    "subtract": subtract,
    "multiply": multiply,
    "divide": divide,
    "power": power,
    "sqrt": sqrt,
})


# ══════════════════════════════════════════════════════════════════════════
# Validation
# ══════════════════════════════════════════════════════════════════════════

def is_valid_operand(value: str, legacy_grammar: bool = False) -> bool:
    """Return True if a trimmed operand passes both validation stages."""
    if not value:
        return False
    pattern = LEGACY_OPERAND_PATTERN if legacy_grammar else STRICT_OPERAND_PATTERN
    if not pattern.fullmatch(value):
        return False
    return len(_GUARD_STRIPPED.sub("", value)) <= 1


def parse_operand(
    field: str,
    raw_value: Optional[str],
    legacy_grammar: bool = False,
) -> float:
    """
    Validate one operand and convert it to a float.

    Args:
        field:      Parameter name used in the error message ("operand1")
        raw_value:  Value exactly as received, or None when absent
        legacy_grammar: Use the permissive grammar that accepts digitless operands

    Raises:
        InvalidOperandError: The operand is missing or malformed (→ 400)
    """
    value = raw_value.strip() if raw_value is not None else ""
    if not is_valid_operand(value, legacy_grammar):
        raise InvalidOperandError(field, raw_value)
    try:
        return float(value)
    except ValueError:
        # Only reachable with the legacy grammar (".", "-.", ".e5")
        return math.nan


def resolve_operation(operation: Optional[str]) -> BinaryOperation:
    """Look up an operation by name, raising the matching validation error."""
    if not operation:
        raise UnspecifiedOperationError()
    func = OPERATIONS.get(operation)
    if func is None:
        raise InvalidOperationError(operation)
    return func


def calculate(
    operation: Optional[str],
    operand1: Optional[str],
    operand2: Optional[str],
    legacy_grammar: Optional[bool] = None,
) -> float:
    """
    Validate the request and apply the named operation.

    `operand2` is required for every operation, including `sqrt`, which
    ignores its value.

    Returns:
        The unrounded float result (possibly inf or nan)

    Raises:
        UnspecifiedOperationError, InvalidOperationError, InvalidOperandError
    """
    if legacy_grammar is None:
        legacy_grammar = settings.calc_legacy_operand_grammar

    func = resolve_operation(operation)
    a = parse_operand("operand1", operand1, legacy_grammar)
    b = parse_operand("operand2", operand2, legacy_grammar)

    result = func(a, b)
    logger.debug("calculate %s(%r, %r) = %r", operation, a, b, result)
    return result
