"""
Parameter Schema Definitions.

This module defines the core types of the runtime parameter system:
- ParamKind: The closed set of value kinds a parameter can have
- ParamDef: Declaration of a parameter (name and compiled-in default)
- ParamInfo: What the registry records about a registered parameter

A ParamDef is usually created once at module level next to the code that
uses the parameter:

    EndTime = ParamDef("EndTime", 1e3)
    EnableVtkOutput = ParamDef("EnableVtkOutput", True)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .errors import ValueParseError, type_error
from .names import transform_key


class ParamKind(Enum):
    """
    Value kinds of runtime parameters.

    - STRING: Text, passed through unchanged
    - SCALAR: Floating point values
    - INTEGER: Integer values
    - BOOLEAN: Truth values, serialized as "1"/"0"
    - FLAG: No value; only the presence of the parameter carries meaning
    """
    STRING = "string"
    SCALAR = "scalar"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    FLAG = ""

    @staticmethod
    def of(value: Any) -> "ParamKind":
        """
        Infer the kind from a Python default value.

        Raises:
            TypeError: For values that do not map onto a kind.
        """
        # bool must be checked before int since it is a subclass of it
        if value is None:
            return ParamKind.FLAG
        if isinstance(value, bool):
            return ParamKind.BOOLEAN
        if isinstance(value, int):
            return ParamKind.INTEGER
        if isinstance(value, float):
            return ParamKind.SCALAR
        if isinstance(value, str):
            return ParamKind.STRING
        raise TypeError(f"Unsupported parameter default {value!r} of type {type(value).__name__}")

    @property
    def usage_hint(self) -> str:
        """Return the "=TYPE" suffix shown in usage messages."""
        if self is ParamKind.FLAG:
            return ""
        return "=" + self.name

    def serialize(self, value: Any) -> str:
        """Convert a Python value to the text stored in the registry."""
        if self is ParamKind.FLAG:
            return ""
        if self is ParamKind.BOOLEAN:
            return "1" if value else "0"
        if self is ParamKind.SCALAR and isinstance(value, float):
            return repr(value)
        return str(value)

    def parse_default(self, text: str, name: str = "") -> Any:
        """Convert a serialized default back to a Python value."""
        if self is ParamKind.BOOLEAN:
            return text == "1"
        return self.parse(text, name)

    def parse(self, text: str, name: str = "") -> Any:
        """
        Convert a run-time supplied value to a Python value.

        Booleans accept "true"/"false"/"yes"/"no" in any case, or an integer
        where anything but zero means true.

        Raises:
            ValueParseError: If the text does not represent a value of this kind.
        """
        if self is ParamKind.STRING:
            return text
        if self is ParamKind.FLAG:
            return True

        stripped = text.strip()
        try:
            if self is ParamKind.BOOLEAN:
                lowered = stripped.lower()
                if lowered in ("true", "yes"):
                    return True
                if lowered in ("false", "no"):
                    return False
                return int(stripped) != 0
            if self is ParamKind.INTEGER:
                return int(stripped)
            return float(stripped)
        except ValueError as exc:
            raise ValueParseError(type_error(name or "value", f"a valid {self.value}", text)) from exc


@dataclass(frozen=True)
class ParamDef:
    """
    Declaration of a single runtime parameter.

    Attributes:
        name: Canonical name (letters and digits, starting with a letter).
        default: Compiled-in default; its Python type selects the kind.
        kind: Explicit kind, inferred from default when omitted.
        type_tag: Optional tag naming the component that owns the parameter.
            Part of the registration identity.
    """
    name: str
    default: Any = None
    kind: Optional[ParamKind] = None
    type_tag: str = ""

    def __post_init__(self):
        # kebab-case spellings are stored in canonical form
        canonical = transform_key(self.name, capitalize_first=False)
        if canonical != self.name:
            object.__setattr__(self, "name", canonical)
        if self.kind is None:
            object.__setattr__(self, "kind", ParamKind.of(self.default))


@dataclass
class ParamInfo:
    """
    Registry record of a registered parameter.

    Equality only considers the identity of the registration (name, kind,
    type tag and usage), not the default or the hidden flag, so that several
    call sites may register the same parameter.
    """
    name: str
    kind: ParamKind = ParamKind.FLAG
    usage: str = ""
    default_value: str = ""
    type_tag: str = ""
    is_hidden: bool = False

    @property
    def type_name(self) -> str:
        """Symbolic kind tag; empty for flags."""
        return self.kind.value

    def __eq__(self, other) -> bool:
        if not isinstance(other, ParamInfo):
            return NotImplemented
        return (self.name == other.name
                and self.type_name == other.type_name
                and self.type_tag == other.type_tag
                and self.usage == other.usage)
