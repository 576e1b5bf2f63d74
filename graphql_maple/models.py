"""Descriptor and function-spec data types."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from . import utils


class OperationKind(str, Enum):
    """Root operation a field belongs to."""

    QUERY = "Query"
    MUTATION = "Mutation"


class ArgumentKind(str, Enum):
    """Whether an argument's declared type is wrapped in NON_NULL."""

    NON_NULL = "NON_NULL"
    NULLABLE = "NULLABLE"


class CallShape(str, Enum):
    """Signature variant of a generated function."""

    ARGUMENTLESS_QUERY = "argumentless_query"
    ARGUMENTED_QUERY = "argumented_query"
    MUTATION = "mutation"


@dataclass(frozen=True)
class ArgumentDescriptor:
    """One introspected argument of a field."""

    name: str
    kind: ArgumentKind = ArgumentKind.NULLABLE
    scalar_type_name: Optional[str] = None
    description: Optional[str] = None

    @property
    def required(self) -> bool:
        return self.kind is ArgumentKind.NON_NULL

    @classmethod
    def from_introspection(cls, raw: dict) -> "ArgumentDescriptor":
        """
        Build from an introspection ``__InputValue`` dict.

        Args:
            raw: {"name": ..., "description": ..., "type": {"kind": ..., "name": ..., "ofType": ...}}

        Returns:
            ArgumentDescriptor
        """
        type_ref = raw["type"]
        return cls(
            name=raw["name"],
            kind=ArgumentKind.NON_NULL if utils.is_non_null(type_ref) else ArgumentKind.NULLABLE,
            scalar_type_name=utils.named_type_name(type_ref),
            description=raw.get("description"),
        )


@dataclass(frozen=True)
class FieldDescriptor:
    """One introspected query or mutation field."""

    name: str
    arguments: tuple[ArgumentDescriptor, ...] = ()
    operation: OperationKind = OperationKind.QUERY
    is_deprecated: bool = False
    deprecation_reason: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_introspection(cls, raw: dict, operation: OperationKind = OperationKind.QUERY) -> "FieldDescriptor":
        """
        Build from an introspection ``__Field`` dict.

        Malformed input (missing ``name``, non-list ``args``) raises here,
        at client-construction time.

        Args:
            raw: Introspected field
            operation: Root operation the field was found under

        Returns:
            FieldDescriptor
        """
        args = raw.get("args") or []
        if not isinstance(args, list):
            raise TypeError(f"Field '{raw['name']}' has non-list args: {args!r}")
        return cls(
            name=raw["name"],
            arguments=tuple(ArgumentDescriptor.from_introspection(a) for a in args),
            operation=operation,
            is_deprecated=bool(raw.get("isDeprecated", False)),
            deprecation_reason=raw.get("deprecationReason"),
            description=raw.get("description"),
        )


@dataclass(frozen=True)
class FunctionSpec:
    """Normalized, read-only description of one generated function."""

    source_name: str
    generated_identifier: str
    operation: OperationKind
    shape: CallShape
    required_argument_names: tuple[str, ...]
    argument_names: tuple[str, ...]
    argument_types: Mapping[str, Optional[str]]
    help_text: str
    deprecated: bool = False
    deprecation_reason: Optional[str] = None


@dataclass
class CallArguments:
    """Caller-supplied values and selection for one invocation."""

    values: Mapping[str, Any] = field(default_factory=dict)
    field_selection: str = ""


@dataclass(frozen=True)
class MissingParams:
    """Failure returned when required arguments were not supplied."""

    operation: OperationKind
    missing: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"{self.operation.value} is missing the following required params: {', '.join(self.missing)}"

    def to_dict(self) -> dict:
        return {"error": self.message}


@dataclass(frozen=True)
class InvalidOperation:
    """Failure returned when a rendered operation does not validate against the schema."""

    operation_text: str
    errors: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"Operation failed schema validation: {'; '.join(self.errors)}"

    def to_dict(self) -> dict:
        return {"error": self.message}
