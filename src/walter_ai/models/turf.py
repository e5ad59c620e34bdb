"""
Turf records — connected systems Walter can act on.
"""

from pydantic import BaseModel, StrictInt, StrictStr

from walter_ai.models._fields import LenientStr


class Turf(BaseModel):
    turf_id: StrictStr
    name: StrictStr
    type: StrictStr   # "server" | "aws" | "gcp"
    status: StrictStr  # "online" | "offline"
    os: LenientStr = None
    hostname: LenientStr = None
    arch: LenientStr = None
    version: LenientStr = None

    @property
    def online(self) -> bool:
        return self.status == "online"

    @property
    def label(self) -> str:
        return self.name or self.hostname or self.turf_id


class TurfSearch(BaseModel):
    turfs: list[Turf]
    count: StrictInt
