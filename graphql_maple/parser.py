"""GraphQL schema building and operation validation."""

from graphql import (
    GraphQLError,
    GraphQLSchema,
    build_client_schema,
    parse,
    validate,
)

from .models import OperationKind


def build_schema(schema_json: dict) -> GraphQLSchema:
    """
    Build GraphQL schema from introspection JSON.

    Args:
        schema_json: Introspection result, either {"__schema": {...}} or {"data": {"__schema": {...}}}

    Returns:
        GraphQLSchema object
    """
    # Handle both formats
    if "__schema" in schema_json:
        data = schema_json
    elif "data" in schema_json and "__schema" in schema_json["data"]:
        data = schema_json["data"]
    else:
        data = schema_json

    return build_client_schema(data)


def operation_document(text: str, operation: OperationKind) -> str:
    """Full document text for a rendered operation (mutations need the keyword)."""
    if operation is OperationKind.MUTATION:
        return f"mutation {text}"
    return text


def validate_operation(text: str, operation: OperationKind, schema: GraphQLSchema) -> list[str]:
    """
    Validate a rendered operation against the schema.

    Args:
        text: Rendered operation, as passed to the adapter
        operation: Query or mutation
        schema: GraphQL schema

    Returns:
        List of error messages (empty if valid)
    """
    try:
        doc = parse(operation_document(text, operation))
    except GraphQLError as e:
        return [e.message]
    return [e.message for e in validate(schema, doc)]
