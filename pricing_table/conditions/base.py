from __future__ import annotations

from typing import Callable, Dict, Optional, Type, TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import Condition
    from ..engine.context import Viewer


class ConditionEvaluator:
    """
    Base class for condition types. evaluate() returns True/False when it can
    decide, or None to hand the condition to the fallback hook.
    """

    type_name: str = "base"

    def evaluate(self, condition: "Condition", viewer: "Viewer") -> Optional[bool]:
        raise NotImplementedError


FallbackHook = Callable[["Condition", "Viewer"], bool]


def default_fallback(condition: "Condition", viewer: "Viewer") -> bool:
    return False


# Registry: condition type -> evaluator class
condition_registry: Dict[str, Type[ConditionEvaluator]] = {}


def register(evaluator_cls: Type[ConditionEvaluator]) -> Type[ConditionEvaluator]:
    """
    Decorator to register an evaluator by its type_name.
    Fails fast on duplicate registrations.
    """
    key = getattr(evaluator_cls, "type_name", None)
    if not key:
        raise ValueError(f"Evaluator class {evaluator_cls.__name__} has no type_name")

    if key in condition_registry and condition_registry[key] is not evaluator_cls:
        raise ValueError(
            f"Duplicate condition registration for type '{key}': "
            f"{condition_registry[key].__name__} vs {evaluator_cls.__name__}"
        )

    condition_registry[key] = evaluator_cls
    return evaluator_cls


def evaluate_condition(
    condition: "Condition",
    viewer: "Viewer",
    fallback: FallbackHook = default_fallback,
) -> bool:
    if not condition.type:
        return False

    evaluator_cls = condition_registry.get(condition.type)
    if evaluator_cls is not None:
        result = evaluator_cls().evaluate(condition, viewer)
        if result is not None:
            return bool(result)

    return bool(fallback(condition, viewer))
