"""Generate GraphQL client functions from schema introspection."""

from .adapter import HttpAdapter, RecordingAdapter
from .client import Client
from .models import (
    ArgumentDescriptor,
    ArgumentKind,
    CallArguments,
    CallShape,
    FieldDescriptor,
    FunctionSpec,
    InvalidOperation,
    MissingParams,
    OperationKind,
)
from .normalizer import normalize
from .notifier import LogNotifier, Notifier

__version__ = "0.1.0"

__all__ = [
    "ArgumentDescriptor",
    "ArgumentKind",
    "CallArguments",
    "CallShape",
    "Client",
    "FieldDescriptor",
    "FunctionSpec",
    "HttpAdapter",
    "InvalidOperation",
    "LogNotifier",
    "MissingParams",
    "Notifier",
    "OperationKind",
    "RecordingAdapter",
    "normalize",
]
