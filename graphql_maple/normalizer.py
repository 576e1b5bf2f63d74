"""Turn introspected field descriptors into function specs."""

from types import MappingProxyType
from typing import Optional, Sequence

from . import utils
from .models import (
    ArgumentDescriptor,
    CallShape,
    FieldDescriptor,
    FunctionSpec,
    OperationKind,
)

NO_DESCRIPTION = "No description available"
NO_ARG_DESCRIPTION = "No description"
NO_TYPE = "Not defined"


def normalize(descriptor: FieldDescriptor) -> FunctionSpec:
    """
    Derive the generated-function spec for one field.

    Args:
        descriptor: Introspected field

    Returns:
        FunctionSpec, computed once per schema load
    """
    args = descriptor.arguments
    return FunctionSpec(
        source_name=descriptor.name,
        generated_identifier=utils.underscore(descriptor.name),
        operation=descriptor.operation,
        shape=call_shape(descriptor.operation, args),
        required_argument_names=required_params(args),
        argument_names=tuple(a.name for a in args),
        argument_types=MappingProxyType(param_types(args)),
        help_text=generate_help(descriptor),
        deprecated=bool(descriptor.is_deprecated),
        deprecation_reason=descriptor.deprecation_reason,
    )


def call_shape(operation: OperationKind, args: Sequence[ArgumentDescriptor]) -> CallShape:
    """Pick the signature variant for a field."""
    if operation is OperationKind.MUTATION:
        return CallShape.MUTATION
    if args:
        return CallShape.ARGUMENTED_QUERY
    return CallShape.ARGUMENTLESS_QUERY


def required_params(args: Sequence[ArgumentDescriptor]) -> tuple[str, ...]:
    """Names of NON_NULL arguments, in declared order."""
    return tuple(a.name for a in args if a.required)


def param_types(args: Sequence[ArgumentDescriptor]) -> dict[str, Optional[str]]:
    """Map every argument name to its named type (None kept)."""
    return {a.name: a.scalar_type_name for a in args}


def generate_help(descriptor: FieldDescriptor) -> str:
    """
    Build the docstring attached to a generated function.

    The field description (or a placeholder) comes first, then one block per
    argument in declared order.
    """
    header = descriptor.description or NO_DESCRIPTION
    if descriptor.is_deprecated:
        header += f"\n\nDeprecated: {descriptor.deprecation_reason or 'no reason given'}"

    blocks = [_arg_help(a) for a in descriptor.arguments]
    if not blocks:
        return header + "\n"
    return header + "\n\n" + "\n".join(blocks)


def _arg_help(arg: ArgumentDescriptor) -> str:
    return (
        f"Param name: {arg.name}\n"
        f"- Description: {arg.description or NO_ARG_DESCRIPTION}\n"
        f"- Type: {arg.scalar_type_name or NO_TYPE}\n"
        f"- Required: {'Yes' if arg.required else 'No'}\n"
    )
