"""
get_response payload — the state of one exchange.

Exactly one of three variants, selected by ``status``. Any other status
value is a decode failure.
"""

import math
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, BeforeValidator, Field, StrictStr

from walter_ai.models._fields import LenientStr

DEFAULT_RETRY_AFTER_S = 4.0


def _retry_after(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_RETRY_AFTER_S
    value = float(value)
    return value if math.isfinite(value) else DEFAULT_RETRY_AFTER_S


class Processing(BaseModel):
    status: Literal["processing"]
    partial: LenientStr = None
    retry_after_seconds: Annotated[float, BeforeValidator(_retry_after)] = DEFAULT_RETRY_AFTER_S


class Complete(BaseModel):
    status: Literal["complete"]
    response: StrictStr


class Failed(BaseModel):
    status: Literal["error"]
    error: StrictStr


ResponseStatus = Annotated[Union[Processing, Complete, Failed], Field(discriminator="status")]
