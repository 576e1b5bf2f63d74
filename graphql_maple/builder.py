"""Build GraphQL operation strings and forward them to an adapter."""

import inspect
import logging
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from graphql import GraphQLSchema

from . import parser
from .adapter import Adapter
from .models import (
    CallArguments,
    CallShape,
    FunctionSpec,
    InvalidOperation,
    MissingParams,
    OperationKind,
)
from .notifier import LogNotifier, Notifier, deprecation_message

logger = logging.getLogger(__name__)

# Types whose values are emitted as double-quoted string literals
QUOTED_TYPES = {"ID", "String"}


def find_missing(values: Mapping[str, Any], required: Sequence[str]) -> tuple[str, ...]:
    """Required names absent from ``values``, in declared order."""
    return tuple(name for name in required if name not in values)


def literal_text(value: Any) -> str:
    """GraphQL spelling of a plain Python value."""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    return str(value)


def cast_literal(key: str, value: Any, types: Mapping[str, Optional[str]]) -> str:
    """
    Render one argument value as a GraphQL literal.

    ID, String and untyped arguments are double-quoted; any other named type
    is emitted verbatim. Lists and tuples render as GraphQL lists, each
    element cast with the argument's type. Embedded quotes are not escaped.
    """
    return _cast(value, types.get(key))


def _cast(value: Any, type_name: Optional[str]) -> str:
    if value is None:
        return "null"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_cast(item, type_name) for item in value) + "]"
    if type_name is None or type_name in QUOTED_TYPES:
        return f'"{literal_text(value)}"'
    return literal_text(value)


def join_params(values: Mapping[str, Any], types: Mapping[str, Optional[str]]) -> str:
    """Join ``key: literal`` pairs in the iteration order of ``values``."""
    return ", ".join(f"{k}: {cast_literal(k, v, types)}" for k, v in values.items())


def _wrap(head: str, fields: str) -> str:
    if fields and fields.strip():
        return f"{{ {head} {{ {fields} }} }}"
    return f"{{ {head} }}"


def render_argumentless_query(spec: FunctionSpec, args: CallArguments) -> str:
    return _wrap(spec.source_name, args.field_selection)


def render_argumented_query(spec: FunctionSpec, args: CallArguments) -> str:
    head = spec.source_name
    if args.values:
        head += f"({join_params(args.values, spec.argument_types)})"
    return _wrap(head, args.field_selection)


def render_mutation(spec: FunctionSpec, args: CallArguments) -> str:
    head = f"{spec.source_name}({join_params(args.values, spec.argument_types)})"
    return _wrap(head, args.field_selection)


RENDERERS = {
    CallShape.ARGUMENTLESS_QUERY: render_argumentless_query,
    CallShape.ARGUMENTED_QUERY: render_argumented_query,
    CallShape.MUTATION: render_mutation,
}


def render(spec: FunctionSpec, args: CallArguments) -> str:
    """Render the operation text for a spec and call arguments."""
    return RENDERERS[spec.shape](spec, args)


def execute(
    spec: FunctionSpec,
    args: CallArguments,
    adapter: Adapter,
    notifier: Notifier,
    schema: Optional[GraphQLSchema] = None,
) -> Union[Any, MissingParams, InvalidOperation]:
    """
    Validate, render and forward one invocation.

    Args:
        spec: Function spec of the invoked field
        args: Call arguments
        adapter: Object exposing ``query(text)`` and ``mutate(text)``
        notifier: Receives deprecation warnings
        schema: When given, the rendered operation is validated before forwarding

    Returns:
        The adapter's result unchanged, or a MissingParams / InvalidOperation failure
    """
    missing = ()
    if spec.shape is not CallShape.ARGUMENTLESS_QUERY:
        missing = find_missing(args.values, spec.required_argument_names)

    if spec.deprecated:
        notifier.warn(deprecation_message(spec.source_name, spec.deprecation_reason))

    if missing:
        logger.debug(f"{spec.source_name}: missing required params {missing}")
        return MissingParams(operation=spec.operation, missing=missing)

    text = render(spec, args)

    if schema is not None:
        errors = parser.validate_operation(text, spec.operation, schema)
        if errors:
            logger.debug(f"{spec.source_name}: operation rejected by schema: {errors}")
            return InvalidOperation(operation_text=text, errors=tuple(errors))

    logger.debug(f"Forwarding {spec.operation.value.lower()} {spec.source_name}: {text}")
    if spec.operation is OperationKind.MUTATION:
        return adapter.mutate(text)
    return adapter.query(text)


_FIELDS_PARAM = inspect.Parameter("fields", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=str, default="")
_PARAMS_PARAM = inspect.Parameter("params", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=Mapping[str, Any])


def make_function(
    spec: FunctionSpec,
    adapter: Adapter,
    notifier: Optional[Notifier] = None,
    schema: Optional[GraphQLSchema] = None,
) -> Callable:
    """
    Create the callable for one spec.

    Argumentless queries take ``(fields)``; argumented queries and mutations
    take ``(params, fields)``. The callable's name and docstring come from the
    spec, which is also exposed as ``fn.spec``.
    """
    notifier = notifier or LogNotifier()

    if spec.shape is CallShape.ARGUMENTLESS_QUERY:

        def fn(fields=""):
            return execute(spec, CallArguments(values={}, field_selection=fields), adapter, notifier, schema)

        parameters = [_FIELDS_PARAM]
    else:

        def fn(params, fields=""):
            return execute(spec, CallArguments(values=params, field_selection=fields), adapter, notifier, schema)

        parameters = [_PARAMS_PARAM, _FIELDS_PARAM]

    fn.__name__ = spec.generated_identifier
    fn.__qualname__ = spec.generated_identifier
    fn.__doc__ = spec.help_text
    fn.__signature__ = inspect.Signature(parameters)
    fn.spec = spec
    return fn
