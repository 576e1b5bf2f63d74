"""Adapters that execute rendered GraphQL operations."""

import logging
from typing import Any, Optional, Protocol

import requests

from . import utils

logger = logging.getLogger(__name__)


class Adapter(Protocol):
    def query(self, text: str) -> Any: ...

    def mutate(self, text: str) -> Any: ...


class HttpAdapter:
    """Adapter that POSTs operations to a GraphQL endpoint over HTTP."""

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        auth_scheme: str = "Bearer",
        headers: Optional[dict[str, str]] = None,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = dict(headers or {})
        if token:
            self.headers["Authorization"] = f"{auth_scheme} {token}".strip()

    def _post(self, text: str) -> requests.Response:
        return self.session.post(self.url, json={"query": text}, headers=self.headers, timeout=self.timeout)

    def query(self, text: str) -> dict:
        """
        Execute a query.

        Returns:
            Decoded response payload; GraphQL ``errors`` are passed through
        """
        resp = self._post(text)
        return utils.safe_json_response(resp, context="GraphQL query")

    def mutate(self, text: str) -> dict:
        """Execute a mutation (the ``mutation`` keyword is prepended)."""
        resp = self._post(f"mutation {text}")
        return utils.safe_json_response(resp, context="GraphQL mutation")

    def schema(self) -> dict:
        """
        Fetch the schema via the standard introspection query.

        Returns:
            Introspection result as dict ({"__schema": {...}})

        Raises:
            RuntimeError: If introspection fails
        """
        logger.info(f"Introspecting {self.url}")
        resp = self._post(utils.INTROSPECTION_QUERY)

        if resp.status_code != 200:
            raise RuntimeError(f"Introspection failed with status {resp.status_code}")

        payload = utils.safe_json_response(resp, context="GraphQL introspection")

        if "errors" in payload:
            raise RuntimeError(f"Introspection errors: {payload['errors']}")

        return payload["data"]


class RecordingAdapter:
    """Adapter that records operations instead of sending them."""

    def __init__(self):
        self.queries: list[str] = []
        self.mutations: list[str] = []

    def query(self, text: str) -> dict:
        self.queries.append(text)
        return {"operation": "query", "text": text}

    def mutate(self, text: str) -> dict:
        self.mutations.append(text)
        return {"operation": "mutation", "text": text}
