"""
Utility functions for the Splax front-end, including terminal coloring,
and a JSON artifact serializer.
"""

import json
from enum import Enum

from pydantic import BaseModel

from .exceptions import SplaxError


class TerminalColors:
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    RESET = "\033[0m"


class FrontEndArtifactEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, BaseModel):
            return o.model_dump(mode="json")
        if isinstance(o, Enum):
            return o.value
        if isinstance(o, SplaxError):
            return {"code": o.code.name, "line": o.line, "message": o.message}
        if isinstance(o, (set, tuple)):
            return list(o)
        return super().default(o)
