"""Schema loading, caching and field extraction."""

import logging
from dataclasses import asdict, dataclass
from typing import Optional

from . import utils
from .adapter import HttpAdapter
from .config import Config
from .models import FieldDescriptor, OperationKind

logger = logging.getLogger(__name__)


@dataclass
class SchemaProfile:
    """Schema profile with metadata."""

    url: str
    fetched_at: str
    hash: str
    schema_json: dict


def load_schema(
    url: Optional[str] = None,
    schema_file: Optional[str] = None,
    cfg: Optional[Config] = None,
    allow_cache: bool = True,
    refresh: bool = False,
    token: Optional[str] = None,
) -> SchemaProfile:
    """
    Load GraphQL schema from file or via introspection.

    Args:
        url: GraphQL endpoint URL
        schema_file: Path to a schema JSON file (introspection result)
        cfg: Configuration object
        allow_cache: Whether to use cached schema
        refresh: Force refresh even if cached
        token: Optional API token for authentication

    Returns:
        SchemaProfile with loaded schema

    Raises:
        AssertionError: If neither url nor schema_file provided
    """
    cfg = cfg or Config()

    # Load from file
    if schema_file:
        js = utils.read_json(schema_file)
        return SchemaProfile(
            url=f"file://{schema_file}",
            fetched_at=utils.now_iso(),
            hash=utils.sha256(js),
            schema_json=js,
        )

    # Load from URL
    assert url, "No URL or schema file provided"

    cache_path = cache_path_for(url, cfg)

    # Try cache first
    if allow_cache and utils.exists(cache_path) and not refresh:
        logger.info(f"Using cached schema {cache_path}")
        prof_data = utils.read_json(cache_path)
        return SchemaProfile(**prof_data)

    # Fetch from server
    js = introspect(url, token or cfg.token, cfg)
    prof = SchemaProfile(
        url=url,
        fetched_at=utils.now_iso(),
        hash=utils.sha256(js),
        schema_json=js,
    )

    # Save to cache
    utils.ensure_dir(utils.dirname(cache_path))
    utils.write_json(cache_path, asdict(prof))

    return prof


def introspect(graphql_url: str, token: Optional[str] = None, cfg: Optional[Config] = None) -> dict:
    """
    Introspect GraphQL schema via HTTP.

    Args:
        graphql_url: GraphQL endpoint URL
        token: Optional API token for authentication
        cfg: Configuration (auth scheme, extra headers, timeout)

    Returns:
        Introspection result as dict

    Raises:
        RuntimeError: If introspection fails
    """
    cfg = cfg or Config()
    adapter = HttpAdapter(
        graphql_url,
        token=token,
        auth_scheme=cfg.auth_scheme,
        headers=cfg.headers,
        timeout=cfg.timeout,
    )
    return adapter.schema()


def cache_path_for(url: str, cfg: Config) -> str:
    """
    Get cache path for a schema URL.

    Args:
        url: GraphQL endpoint URL
        cfg: Configuration object

    Returns:
        Path to cache file
    """
    host = utils.sanitize_host(url)
    return utils.join(cfg.schema_cache_dir, f"{host}.json")


def root_fields(schema_json: dict, operation: OperationKind) -> list[dict]:
    """
    Raw introspected fields of the query or mutation root type.

    Returns an empty list when the schema has no such root.
    """
    root = utils.schema_root(schema_json)
    root_ref = root.get("queryType" if operation is OperationKind.QUERY else "mutationType")
    if not root_ref:
        return []

    for t in root["types"]:
        if t["name"] == root_ref["name"]:
            return t.get("fields") or []

    raise KeyError(f"Root type '{root_ref['name']}' not found in schema types")


def extract_descriptors(schema_json: dict) -> list[FieldDescriptor]:
    """
    Build field descriptors for every query and mutation in a schema.

    Args:
        schema_json: Introspection result

    Returns:
        Query descriptors followed by mutation descriptors
    """
    descriptors = []
    for operation in (OperationKind.QUERY, OperationKind.MUTATION):
        for raw in root_fields(schema_json, operation):
            descriptors.append(FieldDescriptor.from_introspection(raw, operation))
    logger.info(f"Extracted {len(descriptors)} operations from schema")
    return descriptors
