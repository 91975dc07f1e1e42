"""Declarative endpoint descriptors consumed by one generic executor.

Each façade declares its upstream calls as class attributes::

    class WorkspaceAPI(ResourceAPI):
        create_folder = Endpoint("POST", "/folders", params=("folder_name",), returns="folderId")

Accessing ``workspace.create_folder`` yields a bound method with a real signature
(``folder_name, config=None``). Calling it validates the identifiers, builds the
path and ``CONFIG`` map, delegates to :class:`~zanalytics.http_client.AnalyticsHttpClient`
and projects the unwrapped payload down to the declared field.
"""

from __future__ import annotations

import inspect
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from .errors import ValidationError
from .http_client import AnalyticsHttpClient

ORG_ID_HEADER = "ZANALYTICS-ORGID"
DEST_ORG_ID_HEADER = "ZANALYTICS-DEST-ORGID"

JSON = "json"
IMPORT = "import"
EXPORT = "export"

# Arguments that carry the payload or the export target rather than CONFIG values.
_PAYLOAD_PARAMS = frozenset({"file_path", "data"})
_PATH_FIELD = re.compile(r"{(\w+)}")


class _Whole:
    def __repr__(self) -> str:
        return "WHOLE"


WHOLE: Any = _Whole()
"""Projection marker: return the full unwrapped payload."""


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _is_empty(value: Any) -> bool:
    if _is_blank(value):
        return True
    return isinstance(value, (list, tuple, dict)) and not value


def project(result: Any, returns: Any) -> Any:
    if returns is None:
        return None
    if returns is WHOLE:
        return result
    if isinstance(result, Mapping):
        return result.get(returns)
    return None


@dataclass(eq=False)
class Endpoint:
    method: str
    path: str = ""
    params: tuple[str, ...] = ()
    returns: Any = None
    rename: Mapping[str, str] = field(default_factory=dict)
    optional: frozenset[str] = frozenset()
    accepts_config: bool = True
    dest_org: bool = False
    kind: str = JSON
    scope: str = "default"
    doc: str | None = None
    name: str = field(default="", init=False)

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        self.optional = frozenset(self.optional)
        self.path_params = frozenset(_PATH_FIELD.findall(self.path))
        unknown = self.path_params.difference(self.params)
        if unknown:
            raise ValueError(f"Path fields {sorted(unknown)} are not declared params")
        if self.kind == EXPORT and "file_path" not in self.params:
            raise ValueError("Export endpoints need a file_path param")
        if self.kind == IMPORT and not _PAYLOAD_PARAMS.intersection(self.params):
            raise ValueError("Import endpoints need a file_path or data param")
        self.signature = self._build_signature()

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: ResourceAPI | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        endpoint = self

        def bound(*args: Any, **kwargs: Any) -> Any:
            return endpoint.invoke(instance, *args, **kwargs)

        bound.__name__ = self.name
        bound.__qualname__ = f"{type(instance).__name__}.{self.name}"
        bound.__doc__ = self.doc
        bound.__signature__ = self.signature  # type: ignore[attr-defined]
        return bound

    def _build_signature(self) -> inspect.Signature:
        kind = inspect.Parameter.POSITIONAL_OR_KEYWORD
        parameters: list[inspect.Parameter] = []
        for index, name in enumerate(self.params):
            trailing = all(rest in self.optional for rest in self.params[index:])
            default = None if trailing else inspect.Parameter.empty
            parameters.append(inspect.Parameter(name, kind, default=default))
        if self.accepts_config:
            parameters.append(inspect.Parameter("config", kind, default=None))
        if self.dest_org:
            parameters.append(inspect.Parameter("dest_org_id", kind, default=None))
        return inspect.Signature(parameters)

    def invoke(self, facade: ResourceAPI, *args: Any, **kwargs: Any) -> Any:
        try:
            bound = self.signature.bind(*args, **kwargs)
        except TypeError as exc:
            raise TypeError(f"{self.name}(): {exc}") from None
        bound.apply_defaults()
        arguments = bound.arguments

        for name in self.params:
            if name not in self.optional and _is_blank(arguments[name]):
                raise ValidationError(f"{self.name}: '{name}' is required")

        path = facade.base_path(self.scope) + self.path.format(
            **{name: quote(str(arguments[name]), safe="") for name in self.path_params}
        )
        config = self.build_config(arguments)
        headers = facade.headers(dest_org_id=arguments.get("dest_org_id"))

        if self.kind == EXPORT:
            facade.http.export(
                path,
                config=config,
                headers=headers,
                target=arguments["file_path"],
                method=self.method,
            )
            return None
        result = facade.http.request(
            self.method,
            path,
            config=config,
            headers=headers,
            file_path=arguments.get("file_path"),
            data=arguments.get("data"),
        )
        return project(result, self.returns)

    def build_config(self, arguments: Mapping[str, Any]) -> dict[str, Any] | None:
        config: dict[str, Any] = dict(arguments.get("config") or {})
        for name in self.params:
            if name in self.path_params or name in _PAYLOAD_PARAMS:
                continue
            value = arguments[name]
            if name in self.optional and _is_empty(value):
                continue
            config[self.rename.get(name, to_camel(name))] = value
        return config or None


class ResourceAPI:
    """Base for façades: owns the shared pipeline and the per-resource headers."""

    def __init__(self, http: AnalyticsHttpClient, org_id: str | None = None) -> None:
        self.http = http
        self.org_id = org_id
        self._base = "/restapi/v2"

    def base_path(self, scope: str = "default") -> str:
        return self._base

    def headers(self, dest_org_id: str | None = None) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.org_id:
            headers[ORG_ID_HEADER] = str(self.org_id)
        if dest_org_id:
            headers[DEST_ORG_ID_HEADER] = str(dest_org_id)
        return headers

    @classmethod
    def endpoints(cls) -> dict[str, Endpoint]:
        """Return the declared endpoint table, keyed by method name."""

        table: dict[str, Endpoint] = {}
        for klass in reversed(cls.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, Endpoint):
                    table[name] = value
        return table


def require(value: Any, name: str) -> Any:
    if _is_blank(value):
        raise ValidationError(f"'{name}' is required")
    return value
