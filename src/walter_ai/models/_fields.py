"""Field types shared by the Walter records."""

from typing import Annotated, Any, Optional

from pydantic import BeforeValidator


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


# Optional text that silently becomes None when the server sends the wrong type
LenientStr = Annotated[Optional[str], BeforeValidator(_str_or_none)]
