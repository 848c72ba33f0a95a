# Ensure registration happens by importing modules
from .base import (  # noqa
    ConditionEvaluator,
    FallbackHook,
    condition_registry,
    default_fallback,
    evaluate_condition,
    register,
)
from . import apply_to  # noqa
