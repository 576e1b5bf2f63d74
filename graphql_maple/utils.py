"""Utility functions for schema handling and client generation."""

import hashlib
import json
import keyword
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse

from graphql import get_introspection_query

# Standard GraphQL introspection query
INTROSPECTION_QUERY = get_introspection_query(descriptions=True)

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_NON_IDENTIFIER = re.compile(r"\W")


# File system utilities
def ensure_dir(path: str) -> None:
    """Ensure directory exists, creating it if necessary."""
    Path(path).mkdir(parents=True, exist_ok=True)


def exists(path: str) -> bool:
    """Check if file exists."""
    return Path(path).exists()


def dirname(path: str) -> str:
    """Get directory name from path."""
    return str(Path(path).parent)


def join(*parts: str) -> str:
    """Join path components."""
    return str(Path(*parts))


def expand_path(path: str) -> str:
    """Expand ~ in path."""
    return str(Path(path).expanduser())


# File I/O
def read_json(path: str) -> dict:
    """Read JSON file."""
    with open(path) as f:
        return json.load(f)


def write_json(path: str, data: Any) -> None:
    """Write JSON file with pretty formatting."""
    with open(path, "w") as f:
        json.dump(data, f, indent=2)


def to_json(data: Any) -> str:
    """Convert data to JSON string."""
    return json.dumps(data, indent=2)


# Hashing & timestamps
def now_iso() -> str:
    """Get current timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()


def sha256(obj: Any) -> str:
    """Calculate SHA-256 hash of object."""
    s = json.dumps(obj, sort_keys=True)
    return hashlib.sha256(s.encode()).hexdigest()[:16]


def sanitize_host(url: str) -> str:
    """Extract sanitized hostname from URL for use in filenames."""
    if url.startswith("file://"):
        return "file"
    parsed = urlparse(url)
    host = parsed.netloc or parsed.path
    # Remove port, replace special chars
    host = host.split(":")[0]
    return host.replace("/", "_").replace(":", "_")


# Naming
def underscore(name: str) -> str:
    """
    Convert a schema field name to a lower snake case Python identifier.

    Examples:
        createUser -> create_user
        HTTPStatus -> http_status
        getV2Data  -> get_v2_data

    Args:
        name: GraphQL field name

    Returns:
        Identifier usable as a Python attribute name
    """
    s = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    s = _WORD_BOUNDARY.sub(r"\1_\2", s)
    s = _NON_IDENTIFIER.sub("_", s.replace("-", "_")).lower()
    if not s or s[0].isdigit():
        s = f"_{s}"
    if keyword.iskeyword(s):
        s = f"{s}_"
    return s


# Introspection type-ref helpers
def is_non_null(type_ref: dict) -> bool:
    """Check if an introspection type ref is wrapped in NON_NULL."""
    return type_ref.get("kind") == "NON_NULL"


def named_type_name(type_ref: Optional[dict]) -> Optional[str]:
    """Unwrap NON_NULL/LIST wrappers of an introspection type ref to get the named type."""
    while type_ref is not None and type_ref.get("kind") in ("NON_NULL", "LIST"):
        type_ref = type_ref.get("ofType")
    if type_ref is None:
        return None
    return type_ref.get("name")


def schema_root(schema_json: dict) -> dict:
    """
    Return the ``__schema`` object from an introspection result.

    Args:
        schema_json: Introspection result, either {"__schema": {...}} or {"data": {"__schema": {...}}}

    Returns:
        The ``__schema`` dict
    """
    if "__schema" in schema_json:
        return schema_json["__schema"]
    return schema_json["data"]["__schema"]


# CLI helpers
def parse_params(pairs: list[str]) -> dict[str, str]:
    """
    Parse ``key=value`` pairs into an ordered dict.

    Raises:
        ValueError: If a pair has no ``=``
    """
    out = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid param '{pair}', expected key=value")
        out[key] = value
    return out


# HTTP response helpers
def safe_json_response(response, context: str = "API request") -> dict:
    """
    Safely parse JSON from HTTP response with helpful error messages.

    Args:
        response: requests.Response object
        context: Description of what operation failed (e.g., "GraphQL introspection")

    Returns:
        Parsed JSON as dict

    Raises:
        RuntimeError: If response is not valid JSON, with detailed diagnostic info
    """
    try:
        return response.json()
    except json.JSONDecodeError as e:
        url = response.url
        status = response.status_code
        content_type = response.headers.get("Content-Type", "unknown")

        # Preview response body (first 300 chars)
        body_preview = response.text[:300]
        if len(response.text) > 300:
            body_preview += "..."

        error_parts = [
            f"{context} failed - server returned non-JSON response",
            "",
            f"  URL: {url}",
            f"  Status: {status}",
            f"  Content-Type: {content_type}",
            "",
            "  Response preview:",
            f"  {body_preview}",
            "",
            "  Suggestions:",
            "  - Verify the URL points to the GraphQL endpoint",
            "  - Authentication may be required - try adding --token YOUR_TOKEN",
            "  - Verify the server is running and properly configured",
            "",
            f"  Original JSON error: {e}",
        ]

        raise RuntimeError("\n".join(error_parts))
