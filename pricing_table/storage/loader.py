from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yaml

from pricing_table.core.logging_config import logger
from pricing_table.domain.models import Product

from .stores import InMemoryCatalog


@dataclass(frozen=True)
class LoadedCatalog:
    catalog: InMemoryCatalog
    mtime_ns: int


class CatalogLoader:
    """
    Hot reload of the product/pricing catalog from a YAML file (thread-safe).

    - Keeps last known-good catalog active
    - On each access: checks mtime_ns; if changed -> reload + parse
    - If reload fails: logs error and keeps old catalog
    """

    def __init__(self, yaml_path: str):
        self.yaml_path = yaml_path
        self._lock = threading.Lock()
        self._loaded: Optional[LoadedCatalog] = None

        # eager initial load (fail-fast if missing)
        self._loaded = self._load_from_disk_or_raise()

    def get(self) -> InMemoryCatalog:
        """
        Returns the current active (last-known-good) catalog.
        Performs cheap mtime check and reloads if needed.
        """
        try:
            current_mtime = self._stat_mtime_ns()
        except FileNotFoundError:
            if self._loaded is None:
                raise
            logger.error("catalog_missing", path=self.yaml_path, keeping="previous")
            return self._loaded.catalog

        loaded = self._loaded
        if loaded is not None and current_mtime == loaded.mtime_ns:
            return loaded.catalog

        # Changed -> reload under lock
        with self._lock:
            loaded = self._loaded
            # double-check after acquiring lock
            try:
                current_mtime = self._stat_mtime_ns()
            except FileNotFoundError:
                if loaded is None:
                    raise
                logger.error("catalog_missing", path=self.yaml_path, keeping="previous")
                return loaded.catalog

            if loaded is not None and current_mtime == loaded.mtime_ns:
                return loaded.catalog

            try:
                new_loaded = self._load_from_disk_or_raise(
                    expected_mtime_ns=current_mtime
                )
            except Exception as e:
                # Invalid YAML -> keep old active
                if loaded is None:
                    raise
                logger.error("catalog_reload_failed", path=self.yaml_path, error=repr(e))
                return loaded.catalog

            self._loaded = new_loaded
            logger.info(
                "catalog_reloaded",
                path=self.yaml_path,
                mtime_ns=new_loaded.mtime_ns,
                products=len(new_loaded.catalog.products),
            )
            return new_loaded.catalog

    # ProductStore / RuleStorage, always against the current snapshot

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.get().get_product(product_id)

    def get_rule_sets(self, product_id: int) -> List[tuple[str, Dict[str, Any]]]:
        return self.get().get_rule_sets(product_id)

    # -----------------
    # internals
    # -----------------

    def _stat_mtime_ns(self) -> int:
        return os.stat(self.yaml_path).st_mtime_ns

    def _load_from_disk_or_raise(
        self, expected_mtime_ns: Optional[int] = None
    ) -> LoadedCatalog:
        if expected_mtime_ns is None:
            expected_mtime_ns = self._stat_mtime_ns()

        with open(self.yaml_path, "r", encoding="utf-8") as f:
            raw: Dict[str, Any] = yaml.safe_load(f) or {}

        if not isinstance(raw, dict):
            raise ValueError(f"catalog root must be a mapping, got {type(raw).__name__}")

        return LoadedCatalog(catalog=InMemoryCatalog.from_dict(raw), mtime_ns=expected_mtime_ns)
