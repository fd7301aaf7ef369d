"""Response model for the calculator endpoint."""

from typing import Union

from pydantic import BaseModel, Field


class CalculationResponse(BaseModel):
    """
    What:  Result of one calculator operation.

    Whole results are rendered as integers (5, not 5.0); non-finite results
    are rendered as Infinity, -Infinity or NaN.
    """
    result: Union[int, float] = Field(description="Numeric result of the operation")
