from .models import (  # noqa
    CATEGORY_COLLECTOR,
    CONDITIONS_ALL,
    CONDITIONS_ANY,
    MODE_CONTINUOUS,
    Condition,
    Product,
    RuleSet,
    Tier,
)
