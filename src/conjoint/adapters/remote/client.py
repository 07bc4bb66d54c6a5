"""Ontology service client.

Every query is a GET returning a small JSON document; the single write is a
POST of the accepted assertion. Query answers go through the resilient
client, so they are retried, rate limited and cached on disk. One client and
one event loop serve every query until ``close()``, so the rate limit holds
across the many small queries of a search.

Endpoints (relative to the configured base URL):
- ``GET disjoint?first=&second=`` -> ``{"result": bool}``
- ``GET subsumed?specific=&general=`` -> ``{"result": bool}``
- ``GET member?instance=&collection=`` -> ``{"result": bool}``
- ``GET specializes?relation=&base=`` -> ``{"result": bool}``
- ``GET informationless?relation=`` -> ``{"result": bool}``
- ``GET constraints?relation=&position=`` -> ``{"isa": [...], "genls": [...]}``
- ``POST assertions`` with ``{"relation": ..., "args": [...]}``
"""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel

from conjoint.adapters.http_resilience import ResilientClient
from conjoint.domain.model import Concept
from conjoint.domain.ports import ArgumentConstraints, OntologyError

from .schema import AssertionBody, BooleanAnswer, ConstraintsAnswer

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine
    from types import TracebackType
    from typing import Any, Self

    from conjoint.config.http_resilience import ResilienceConfig
    from conjoint.config.ontology import RemoteOntologyConfig
    from conjoint.domain.model import ConcreteAssertion

log = getLogger(__name__)


class RemoteOntologyError(OntologyError):
    """Raised when the ontology service cannot answer a query."""


class RemoteOntology:
    """``OntologyPort`` backed by an HTTP ontology service."""

    def __init__(
        self,
        *,
        config: RemoteOntologyConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None
        self._runner = asyncio.Runner()
        self.request_count = 0

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._client is not None:
            self._runner.run(self._client.aclose())
            self._client = None
        self._runner.close()

    def is_disjoint(self, first: Concept, second: Concept) -> bool:
        return self._ask("disjoint", first=str(first), second=str(second))

    def is_subsumed(self, specific: Concept, general: Concept) -> bool:
        return self._ask("subsumed", specific=str(specific), general=str(general))

    def is_member(self, instance: Concept, collection: Concept) -> bool:
        return self._ask("member", instance=str(instance), collection=str(collection))

    def specializes(self, relation: Concept, base_relation: Concept) -> bool:
        if relation == base_relation:
            return True
        return self._ask("specializes", relation=str(relation), base=str(base_relation))

    def is_informationless(self, relation: Concept) -> bool:
        return self._ask("informationless", relation=str(relation))

    def argument_constraints(self, relation: Concept, position: int) -> ArgumentConstraints:
        answer = self._run(
            self._get(
                "constraints",
                ConstraintsAnswer,
                {"relation": str(relation), "position": str(position)},
            )
        )
        return ArgumentConstraints(
            isa=frozenset(Concept(name) for name in answer.isa),
            genls=frozenset(Concept(name) for name in answer.genls),
        )

    def assert_fact(self, assertion: ConcreteAssertion) -> None:
        body = AssertionBody(
            relation=str(assertion.relation),
            args=[str(arg) for arg in assertion.args],
            origin=assertion.origin,
        )
        self._run(self._post("assertions", body))
        log.info("Asserted %s", assertion)

    def _ask(self, path: str, **params: str) -> bool:
        answer = self._run(self._get(path, BooleanAnswer, params))
        return answer.result

    def _run[T](self, coro: Coroutine[Any, Any, T]) -> T:
        return self._runner.run(coro)

    def _http(self) -> ResilientClient:
        # Built lazily so the client binds to the runner loop.
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        return self._client

    async def _get[ModelT: BaseModel](
        self,
        path: str,
        model: type[ModelT],
        params: dict[str, str],
    ) -> ModelT:
        self.request_count += 1
        client = self._http()
        try:
            payload = await client.get_json(path, params=params)
            return model.model_validate(payload)
        except httpx.HTTPError as exc:
            raise RemoteOntologyError(f"Ontology query {path} {params} failed: {exc}") from exc
        except ValueError as exc:  # JSON decoding and ValidationError
            raise RemoteOntologyError(f"Unexpected ontology response for {path} {params}") from exc

    async def _post(self, path: str, body: AssertionBody) -> None:
        self.request_count += 1
        try:
            response = await self._http().post(path, json=body.model_dump(exclude_none=True))
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise RemoteOntologyError(f"Ontology write {body} failed: {exc}") from exc
