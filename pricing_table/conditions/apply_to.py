from __future__ import annotations

from typing import Optional

from .base import ConditionEvaluator, register


@register
class ApplyToCondition(ConditionEvaluator):
    """
    Audience targeting: everyone / unauthenticated / authenticated / roles.
    """

    type_name = "apply_to"

    def evaluate(self, condition, viewer) -> Optional[bool]:
        applies_to = condition.args.get("applies_to")

        if applies_to == "everyone":
            return True
        if applies_to == "unauthenticated":
            return not viewer.is_authenticated
        if applies_to == "authenticated":
            return viewer.is_authenticated
        if applies_to == "roles":
            if not viewer.is_authenticated:
                return False
            roles = condition.args.get("roles") or []
            if isinstance(roles, str):
                roles = [roles]
            elif isinstance(roles, dict):
                roles = list(roles.values())
            for role in roles:
                if viewer.has_role(role):
                    return True
            return False

        # missing / unknown applies_to -> fallback hook
        return None
