"""Route and RouteMatch frozen dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from perch.routing.resolver import RouteResolver


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/d``       (is_param=False)
    Param:   ``/{id}``    (is_param=True, param_name="id")
    Typed:   ``/{n:int}`` (is_param=True, param_name="n", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Binds a path pattern to a page component and the resolver that decides
    how the component is mounted. Created during app setup, compiled into
    the router at freeze time.
    """

    path: str
    component: type[Any]
    name: str
    resolver: RouteResolver


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, Any]
