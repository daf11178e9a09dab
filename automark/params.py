import re
from dataclasses import dataclass
from typing import Any, Optional


# A tag opens with "<" directly followed by a name, "/", "!" or "?"
TAG_RE = re.compile(r"<!--.*?-->|</?[A-Za-z][^>]*>|<[!?][^>]*>", re.DOTALL)

PARAM_RAW = "raw"
PARAM_TEXT = "text"
PARAM_INT = "int"

PARAM_TYPES = (PARAM_RAW, PARAM_TEXT, PARAM_INT)


def clean_param(value, param_type):
    """
    Clean a submitted value according to its declared type.

    PARAM_TEXT removes tags but keeps whitespace, entities and any bare "<",
    PARAM_RAW passes the value through and PARAM_INT coerces to an integer.
    """
    if param_type not in PARAM_TYPES:
        raise ValueError(f"Unknown parameter type: {param_type}")
    if value is None:
        return None
    if param_type == PARAM_RAW:
        return value
    if param_type == PARAM_INT:
        return int(value)
    return TAG_RE.sub("", str(value))


@dataclass(frozen=True)
class ExternalValue:
    """Description of one parameter accepted by the remote API."""
    param_type: str
    description: str
    required: bool = True
    default: Optional[Any] = None

    def __post_init__(self):
        if self.param_type not in PARAM_TYPES:
            raise ValueError(f"Unknown parameter type: {self.param_type}")

    def clean(self, value):
        return clean_param(value, self.param_type)

    def to_dict(self):
        return {
            "type": self.param_type,
            "description": self.description,
            "required": self.required,
            "default": self.default,
        }
