"""
View query methods and their registry.

Turns the views declared in a definition source into QueryMethod callables,
one per view, collected in a ViewRegistry the repository dispatches through.

Dependencies: couchrepo.boundary.store, couchrepo.boundary.models
System role: Query method synthesis for declared views
"""

import inspect
import json
import logging
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Iterator

from couchrepo.boundary.models.view import OnQueryError, QueryResult
from couchrepo.boundary.store.protocol import DocumentStoreClient
from couchrepo.core.exceptions import (
    InvalidInvocationError,
    ViewDefinitionError,
    ViewExecutionError,
)
from couchrepo.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

QueryCallback = Callable[[BaseException | None, list[Any]], Any]


def method_name_for(view_name: str) -> str:
    """
    Derive the accessor name for a view.

    Args:
        view_name: Declared view name, e.g. "byName"

    Returns:
        str: "find" plus the view name with its first letter upper-cased
    """
    return "find" + view_name[:1].upper() + view_name[1:]


class QueryMethod:
    """
    Callable bound to one view of one database.

    Calling it with zero or more keys validates the call immediately and
    returns an awaitable that resolves to a QueryResult.
    """

    def __init__(
        self,
        client: DocumentStoreClient,
        database_name: str,
        view_name: str,
        on_query_error: OnQueryError = OnQueryError.RETURN_EMPTY,
    ) -> None:
        self._client = client
        self.database_name = database_name
        self.view_name = view_name
        self.method_name = method_name_for(view_name)
        self.on_query_error = on_query_error

    def __repr__(self) -> str:
        return f"QueryMethod({self.database_name!r}, {self.view_name!r})"

    def __call__(
        self,
        *keys: Any,
        callback: QueryCallback | None = None,
    ) -> Awaitable[QueryResult]:
        """
        Query the view, optionally restricted to the given keys.

        Argument checks run immediately; the view call itself runs only
        when the returned awaitable is awaited. Await it even when passing
        a callback, otherwise neither the query nor the callback runs.

        Args:
            *keys: Keys collected in order into the view's `keys` parameter
            callback: Optional continuation receiving (error, values)

        Returns:
            Awaitable[QueryResult]: Normalized row values and any swallowed error

        Raises:
            InvalidInvocationError: Immediately, before any I/O, when the
                callback is not callable or a key cannot be sent as JSON
        """
        if callback is not None and not callable(callback):
            raise InvalidInvocationError(
                f"Please specify a callback function to receive the result of {self.method_name}",
                method_name=self.method_name,
            )

        for key in keys:
            try:
                json.dumps(key)
            except (TypeError, ValueError) as exc:
                raise InvalidInvocationError(
                    f"Key {key!r} passed to {self.method_name} is not JSON serializable",
                    method_name=self.method_name,
                ) from exc

        params = {"keys": list(keys)} if keys else None
        return self._execute(params, callback)

    async def _execute(
        self,
        params: dict[str, Any] | None,
        callback: QueryCallback | None,
    ) -> QueryResult:
        try:
            if params is None:
                result = await self._client.view(self.database_name, self.view_name)
            else:
                result = await self._client.view(self.database_name, self.view_name, params)
            query_result = QueryResult(values=result.values())
        except Exception as exc:
            log_exception_with_context(
                logger,
                f"View query {self.view_name} failed",
                exc,
                database=self.database_name,
                view_name=self.view_name,
                policy=self.on_query_error.value,
            )
            if self.on_query_error is OnQueryError.PROPAGATE:
                raise ViewExecutionError(
                    f"View query {self.view_name} failed: {exc}",
                    view_name=self.view_name,
                ) from exc
            query_result = QueryResult(values=[], error=exc)

        if callback is not None:
            outcome = callback(query_result.error, query_result.values)
            if inspect.isawaitable(outcome):
                await outcome
        return query_result


class ViewRegistry(Mapping[str, QueryMethod]):
    """
    Read-only mapping of view name to QueryMethod.

    Also indexes each method by its accessor name (findAll, findByName, ...).
    """

    def __init__(self, methods: Mapping[str, QueryMethod] | None = None) -> None:
        self._methods: dict[str, QueryMethod] = dict(methods or {})
        self._by_method_name = {
            method.method_name: method for method in self._methods.values()
        }

    def __getitem__(self, view_name: str) -> QueryMethod:
        return self._methods[view_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)

    def by_method_name(self, method_name: str) -> QueryMethod:
        """
        Look up a query method by accessor name.

        Raises:
            KeyError: If no declared view maps to the accessor name
        """
        return self._by_method_name[method_name]

    def has_method(self, method_name: str) -> bool:
        return method_name in self._by_method_name

    def method_names(self) -> list[str]:
        return list(self._by_method_name)


def synthesize(
    views: Mapping[str, Any],
    database_name: str,
    client: DocumentStoreClient,
    on_query_error: OnQueryError = OnQueryError.RETURN_EMPTY,
) -> ViewRegistry:
    """
    Build one QueryMethod per declared view.

    Args:
        views: View name to opaque view body
        database_name: Database the design document belongs to
        client: Store client the methods execute against
        on_query_error: Error policy applied by every generated method

    Returns:
        ViewRegistry: Registry of the generated methods

    Raises:
        ViewDefinitionError: If a view name is empty or two names map to
            the same accessor name
    """
    methods: dict[str, QueryMethod] = {}
    seen: dict[str, str] = {}

    for view_name in views:
        if not view_name:
            raise ViewDefinitionError(
                "View names must be non-empty",
                details={"database": database_name},
            )

        method_name = method_name_for(view_name)
        if method_name in seen:
            raise ViewDefinitionError(
                f"Views {seen[method_name]!r} and {view_name!r} both map to {method_name}",
                details={"database": database_name, "method_name": method_name},
            )
        seen[method_name] = view_name

        log_with_context(
            logger,
            logging.INFO,
            f"Creating {method_name} method for database {database_name}",
            database=database_name,
            view_name=view_name,
        )
        methods[view_name] = QueryMethod(client, database_name, view_name, on_query_error)

    return ViewRegistry(methods)
