from .loader import CatalogLoader  # noqa
from .stores import InMemoryCatalog, ProductStore, RuleStorage  # noqa
