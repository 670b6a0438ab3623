from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type

from .chain import WordPredicate
from .engines import ENGINES_BY_SPEC, BaseEngine
from .types import PuzzleSpec, Verdict

logger = logging.getLogger(__name__)


class UnknownPuzzleKind(KeyError):
    """Raised when no engine is registered for a puzzle kind."""


# PUBLIC_INTERFACE
class EngineRegistry:
    """Registry mapping puzzle kind identifiers to engine classes."""

    _registry: Dict[str, Type[BaseEngine]] = {
        spec_cls.kind: engine_cls for spec_cls, engine_cls in ENGINES_BY_SPEC.items()
    }

    @classmethod
    def get(cls, kind: str) -> Type[BaseEngine]:
        """Return the engine class for a kind, or raise UnknownPuzzleKind."""
        key = (kind or "").strip().lower()
        if key not in cls._registry:
            raise UnknownPuzzleKind(f"Unknown puzzle kind: {kind!r}")
        return cls._registry[key]

    @classmethod
    def register(cls, kind: str, engine_cls: Type[BaseEngine]) -> None:
        """Register or override an engine class for a given kind."""
        key = (kind or "").strip().lower()
        if not key:
            raise ValueError("kind must be a non-empty string")
        cls._registry[key] = engine_cls

    @classmethod
    def kinds(cls) -> List[str]:
        return sorted(cls._registry)


# PUBLIC_INTERFACE
def get_engine(kind: str) -> Type[BaseEngine]:
    """Convenience lookup of the engine class for ``kind``.

    Example:
        engine = get_engine("word")()
        verdict = engine.evaluate(WordSpec(secret="apple"), "apply")
    """
    return EngineRegistry.get(kind)


# PUBLIC_INTERFACE
def evaluate(spec: Any, player_input: Any, dictionary: Optional[WordPredicate] = None) -> Verdict:
    """Judge one player action. Never raises.

    Dispatches on the spec's kind. An unknown kind, or a spec too malformed
    for its engine, produces a failure verdict with no feedback.
    """
    if not isinstance(spec, PuzzleSpec):
        logger.warning("Refusing to evaluate non-puzzle spec of type %s", type(spec).__name__)
        return Verdict.failure()

    try:
        engine_cls = EngineRegistry.get(spec.kind)
    except UnknownPuzzleKind:
        logger.warning("No engine for puzzle kind %r", spec.kind)
        return Verdict.failure(spec.kind)

    logger.debug("Evaluating %s puzzle with %s", spec.kind, engine_cls.__name__)
    try:
        return engine_cls(dictionary=dictionary).evaluate(spec, player_input)
    except (TypeError, ValueError, KeyError, IndexError, AttributeError):
        logger.warning("Malformed %s puzzle spec; returning failure verdict", spec.kind, exc_info=True)
        return Verdict.failure(spec.kind)
