"""Per-invocation context: property rendering and collaborators."""

import logging
import os
import re
import uuid
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any, Final, TypeVar

from pydantic import TypeAdapter, ValidationError

from todoist_tasks.config import Settings
from todoist_tasks.errors import ErrorKind, TaskError
from todoist_tasks.http import HttpxClient
from todoist_tasks.protocols import HttpClient, Storage

T = TypeVar("T")

_EXPRESSION: Final = re.compile(r"\{\{\s*(.*?)\s*\}\}")
_SECRET: Final = re.compile(r"""^secret\(\s*(['"])(?P<name>[^'"]+)\1\s*\)$""")
_PATH: Final = re.compile(r"^[A-Za-z_][\w]*(\.[A-Za-z_][\w]*)*$")

run_logger: Final = logging.getLogger("todoist_tasks.run")


class RunContext:
    """State owned by one task invocation.

    Properties are either literal values or strings holding `{{ ... }}`
    expressions. An expression is a dotted variable path (`inputs.project`)
    or a secret lookup (`secret('TODOIST_API_TOKEN')`); secrets not given
    explicitly are read from the environment.
    """

    def __init__(
        self,
        variables: Mapping[str, Any] | None = None,
        secrets: Mapping[str, str] | None = None,
        *,
        settings: Settings | None = None,
        http: HttpClient | None = None,
        storage: Storage | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.variables: Mapping[str, Any] = variables or {}
        self.secrets: Mapping[str, str] = secrets or {}
        self.settings = settings or Settings()
        self.http = http
        self.storage = storage
        self.run_id = uuid.uuid4().hex[:8]
        self.logger = logging.LoggerAdapter(logger or run_logger, {"run_id": self.run_id})

    def render(self, value: Any) -> Any:
        """Render every expression in `value`. None stays None."""
        if isinstance(value, str):
            return self._render_str(value)
        if isinstance(value, list):
            return [self.render(v) for v in value]  # pyright: ignore[reportUnknownVariableType]
        return value

    def render_as(self, value: Any, tp: type[T]) -> T | None:
        """Render `value` and coerce it to `tp`, or return None when absent."""
        rendered = self.render(value)
        if rendered is None:
            return None
        if tp is str and isinstance(rendered, int | float) and not isinstance(rendered, bool):
            # IDs are often written unquoted in flow definitions.
            rendered = str(rendered)
        try:
            return TypeAdapter(tp).validate_python(rendered)
        except ValidationError as e:
            msg = f"Cannot render {value!r} as {getattr(tp, '__name__', tp)}: {e}"
            raise TaskError(msg, kind=ErrorKind.CONFIGURATION, source=e) from e

    def render_required(self, value: Any, name: str, tp: type[T] = str) -> T:
        """Render a required property, failing when it is absent or blank."""
        rendered = self.render_as(value, tp)
        if rendered is None or (isinstance(rendered, str) and not rendered.strip()):
            msg = f"Property '{name}' is required"
            raise TaskError(msg, kind=ErrorKind.CONFIGURATION)
        return rendered

    @asynccontextmanager
    async def http_client(self) -> AsyncIterator[HttpClient]:
        """Yield the injected HTTP client, or one scoped to this block."""
        if self.http is not None:
            yield self.http
            return
        client = await HttpxClient.connect(self.settings)
        try:
            yield client
        finally:
            await client.disconnect()

    def _render_str(self, template: str) -> Any:
        whole = _EXPRESSION.fullmatch(template.strip())
        if whole:
            # A lone expression keeps the type of the value it resolves to.
            return self._evaluate(whole.group(1))
        return _EXPRESSION.sub(lambda m: self._interpolate(m.group(1)), template)

    def _interpolate(self, expression: str) -> str:
        value = self._evaluate(expression)
        return "" if value is None else str(value)

    def _evaluate(self, expression: str) -> Any:
        secret = _SECRET.match(expression)
        if secret:
            return self._secret(secret.group("name"))
        if not _PATH.match(expression):
            msg = f"Unsupported expression '{{{{ {expression} }}}}'"
            raise TaskError(msg, kind=ErrorKind.CONFIGURATION)

        current: Any = self.variables
        for part in expression.split("."):
            if not isinstance(current, Mapping) or part not in current:
                msg = f"Variable '{expression}' is not defined"
                raise TaskError(msg, kind=ErrorKind.CONFIGURATION)
            current = current[part]  # pyright: ignore[reportUnknownVariableType]
        return current  # pyright: ignore[reportUnknownVariableType]

    def _secret(self, name: str) -> str:
        if name in self.secrets:
            return self.secrets[name]
        value = os.environ.get(name)
        if value is None:
            msg = f"Secret '{name}' is not defined"
            raise TaskError(msg, kind=ErrorKind.CONFIGURATION)
        return value
