"""Client exposing one generated function per schema field."""

import logging
from typing import Any, Callable, Iterable, Optional

from graphql import GraphQLSchema

from . import parser, schema_loader
from .adapter import Adapter, HttpAdapter
from .builder import make_function
from .config import Config
from .models import FieldDescriptor, FunctionSpec
from .normalizer import normalize
from .notifier import LogNotifier, Notifier

logger = logging.getLogger(__name__)


class Client:
    """
    Registry of generated functions, built once at construction time.

    Functions are reachable as attributes named after their generated
    identifier (``client.create_user(...)``) or through ``call(name, ...)``,
    which also accepts the schema field name.
    """

    def __init__(
        self,
        descriptors: Iterable[FieldDescriptor],
        adapter: Adapter,
        notifier: Optional[Notifier] = None,
        schema: Optional[GraphQLSchema] = None,
    ):
        self._adapter = adapter
        self._notifier = notifier or LogNotifier()
        self._schema = schema
        self._functions: dict[str, Callable] = {}
        self._aliases: dict[str, str] = {}

        for descriptor in descriptors:
            spec = normalize(descriptor)
            name = spec.generated_identifier
            if name in self._functions:
                logger.warning(
                    f"{spec.operation.value} {spec.source_name} replaces existing function {name}"
                )
            if name in RESERVED_NAMES:
                logger.warning(
                    f"Function {name} is shadowed by Client.{name}; use client.call({name!r}, ...) instead"
                )
            self._functions[name] = make_function(spec, adapter, self._notifier, schema)
            self._aliases[spec.source_name] = name

        logger.info(f"Generated {len(self._functions)} client functions")

    @classmethod
    def from_introspection(
        cls,
        schema_json: dict,
        adapter: Adapter,
        notifier: Optional[Notifier] = None,
        validate: bool = False,
    ) -> "Client":
        """
        Build a client from an introspection result.

        Args:
            schema_json: Introspection result
            adapter: Executes rendered operations
            notifier: Receives deprecation warnings
            validate: Validate rendered operations against the schema before forwarding
        """
        schema = parser.build_schema(schema_json) if validate else None
        return cls(schema_loader.extract_descriptors(schema_json), adapter, notifier, schema)

    @classmethod
    def from_adapter(cls, adapter: Adapter, notifier: Optional[Notifier] = None, validate: bool = False) -> "Client":
        """Build a client from the schema the adapter itself reports."""
        return cls.from_introspection(adapter.schema(), adapter, notifier, validate)

    @classmethod
    def connect(
        cls,
        url: Optional[str] = None,
        cfg: Optional[Config] = None,
        schema_file: Optional[str] = None,
        token: Optional[str] = None,
        validate: Optional[bool] = None,
        refresh: bool = False,
    ) -> "Client":
        """
        Build an HTTP client, loading the schema from file, cache or introspection.

        Args:
            url: GraphQL endpoint URL (falls back to cfg.default_url)
            cfg: Configuration
            schema_file: Use this introspection file instead of fetching
            token: API token (falls back to cfg.token)
            validate: Override cfg.validate_operations
            refresh: Re-fetch the schema even if cached
        """
        cfg = cfg or Config()
        url = url or cfg.default_url
        token = token or cfg.token
        assert url, "No URL provided"

        profile = schema_loader.load_schema(
            url=url, schema_file=schema_file, cfg=cfg, allow_cache=True, refresh=refresh, token=token
        )
        adapter = HttpAdapter(
            url,
            token=token,
            auth_scheme=cfg.auth_scheme,
            headers=cfg.headers,
            timeout=cfg.timeout,
        )
        if validate is None:
            validate = cfg.validate_operations
        return cls.from_introspection(profile.schema_json, adapter, validate=validate)

    def functions(self) -> list[FunctionSpec]:
        """Specs of all generated functions, sorted by identifier."""
        return [self._functions[name].spec for name in sorted(self._functions)]

    def get(self, name: str) -> Callable:
        """
        Look up a generated function by identifier or schema field name.

        Raises:
            KeyError: If no such function exists
        """
        if name in self._functions:
            return self._functions[name]
        if name in self._aliases:
            return self._functions[self._aliases[name]]
        raise KeyError(f"No generated function named '{name}'")

    def call(self, name: str, *args, **kwargs) -> Any:
        """Invoke a generated function by name."""
        return self.get(name)(*args, **kwargs)

    def help(self, name: str) -> str:
        """Help text of a generated function."""
        return self.get(name).__doc__

    def __getattr__(self, name: str) -> Callable:
        functions = self.__dict__.get("_functions", {})
        if name in functions:
            return functions[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self._functions))

    def __contains__(self, name: str) -> bool:
        return name in self._functions or name in self._aliases

    def __len__(self) -> int:
        return len(self._functions)


# Public Client attributes that take precedence over generated functions
RESERVED_NAMES = frozenset(name for name in dir(Client) if not name.startswith("_"))
