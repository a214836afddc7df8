"""Routing — compiled route table and the resolvers that turn matches into pages.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes.
"""

from perch.routing.resolver import SKIP, GatedResolver, ResolvedNode, RouteResolver, Skip
from perch.routing.route import Route, RouteMatch
from perch.routing.router import Router

__all__ = [
    "SKIP",
    "GatedResolver",
    "ResolvedNode",
    "Route",
    "RouteMatch",
    "RouteResolver",
    "Router",
    "Skip",
]
