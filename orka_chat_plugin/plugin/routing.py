"""Model-name based backend selection.

The routing table is an ordered list of ``Route`` entries; the first route
whose matcher accepts the lower-cased model identifier builds the backend.
Adding a vendor means registering one more route.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence

from ..base.errors import ErrorCode
from ..base.factory import ProviderFactory
from ..base.interfaces import LLMProvider
from .errors import RequestError
from .normalizer import get_string

Matcher = Callable[[str], bool]
Builder = Callable[[Mapping[str, Any]], LLMProvider]


@dataclass(frozen=True)
class Route:
    """One routing table entry.

    Attributes:
        name: Canonical provider name, used in logs.
        matches: Predicate over the lower-cased model identifier.
        build: Creates the backend from the call's ``args``; may raise
            ``RequestError`` (e.g. missing credentials).
    """

    name: str
    matches: Matcher
    build: Builder


def marker_matcher(*, prefixes: Sequence[str] = (), substrings: Sequence[str] = ()) -> Matcher:
    """Build a matcher accepting models that start with or contain a marker token."""

    def _match(model: str) -> bool:
        return any(model.startswith(p) for p in prefixes) or any(s in model for s in substrings)

    return _match


def _build_openai(args: Mapping[str, Any]) -> LLMProvider:
    api_key = get_string(args, "apiKey")
    if not api_key:
        raise RequestError("missing OpenAI API key: pass apiKey argument", ErrorCode.AUTH)
    return ProviderFactory.create("openai", api_key=api_key)


OPENAI_ROUTE = Route(
    name="openai",
    matches=marker_matcher(prefixes=("gpt-", "o1"), substrings=("gpt",)),
    build=_build_openai,
)

DEFAULT_ROUTES: tuple[Route, ...] = (OPENAI_ROUTE,)


class ModelRouter:
    """Resolve a backend for a model identifier."""

    def __init__(self, routes: Optional[Sequence[Route]] = None) -> None:
        self._routes: List[Route] = list(DEFAULT_ROUTES if routes is None else routes)

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes)

    def register(self, route: Route, *, first: bool = False) -> None:
        """Append ``route`` (or put it ahead of existing routes when ``first``)."""
        if first:
            self._routes.insert(0, route)
        else:
            self._routes.append(route)

    def match(self, model: str) -> Optional[Route]:
        lowered = model.lower()
        for route in self._routes:
            if route.matches(lowered):
                return route
        return None

    def resolve(self, model: str, args: Mapping[str, Any]) -> LLMProvider:
        """Return a backend for ``model``.

        Raises:
            RequestError: No route matches (``unsupported model: <model>``)
                or the matched route rejects ``args``.
        """
        route = self.match(model)
        if route is None:
            raise RequestError(f"unsupported model: {model}", ErrorCode.UNSUPPORTED)
        return route.build(args)


__all__ = [
    "Route",
    "ModelRouter",
    "marker_matcher",
    "OPENAI_ROUTE",
    "DEFAULT_ROUTES",
]
