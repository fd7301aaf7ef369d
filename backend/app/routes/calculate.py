"""
Abacus Backend — Calculator Route Handler
===========================================

What:  Handles GET /api/calculate.
Why:   Exposes the calculator service over HTTP.
How:   Reads the three query parameters as raw strings, delegates validation
       and arithmetic to the calculator service, returns {"result": n}.

Error Handling:
    Validation errors raised by the service propagate to the ValidationError
    handler registered once in main.py (→ 400 {"error": "<message>"}).
"""

import json
import logging
import math
from typing import Any, Optional, Union

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from app.schemas.calculator import CalculationResponse
from app.schemas.common import ErrorResponse
from app.services.calculator import OPERATIONS, calculate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Calculator"])

# Largest magnitude where every whole float is an exact integer
_MAX_EXACT_INT = 2 ** 53


class NumericJSONResponse(JSONResponse):
    """
    JSONResponse that can carry non-finite floats.

    Starlette refuses inf/nan; division by zero must still return 200, so
    they are emitted as the Infinity / -Infinity / NaN JSON extensions that
    JavaScript and Python JSON parsers accept.
    """

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=True,
            indent=None,
            separators=(",", ":"),
        ).encode("utf-8")


def to_json_number(value: float) -> Union[int, float]:
    """Render whole, exactly representable results as ints (5 rather than 5.0)."""
    if math.isfinite(value) and value.is_integer() and abs(value) <= _MAX_EXACT_INT:
        return int(value)
    return value


@router.get(
    "/calculate",
    response_class=NumericJSONResponse,
    responses={
        200: {"description": "Operation result", "model": CalculationResponse},
        400: {"description": "Missing/unknown operation or malformed operand", "model": ErrorResponse},
    },
    summary="Apply an arithmetic operation to two operands",
    description=(
        "Applies one of " + ", ".join(OPERATIONS) + " to operand1 and operand2. "
        "operand2 is required for every operation; sqrt ignores its value."
    ),
)
async def calculate_route(
    operation: Optional[str] = Query(default=None, description="Operation name"),
    operand1: Optional[str] = Query(default=None, description="First operand (numeric literal)"),
    operand2: Optional[str] = Query(default=None, description="Second operand (numeric literal)"),
) -> NumericJSONResponse:
    """
    Example:
        GET /api/calculate?operation=add&operand1=1e10&operand2=2
        → 200 {"result": 10000000002}
    """
    result = calculate(operation, operand1, operand2)
    return NumericJSONResponse(content={"result": to_json_number(result)})
