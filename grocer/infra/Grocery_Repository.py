"""Grocery repository (JSON file persistence)."""
import json
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from grocer.domain.Grocery import Grocery
from grocer.domain.Location import LocationRegistry
from grocer.infra.paths import GROCERIES_FILE

logger = logging.getLogger(__name__)


class GroceryRepository:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else GROCERIES_FILE

    def save(self, groceries: List[Grocery]) -> None:
        """Write the full ordered collection. OSError propagates to the caller."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump([g.to_dict() for g in groceries], f, indent=2, ensure_ascii=False)

    def load(self, registry: Optional[LocationRegistry] = None) -> Tuple[List[Grocery], LocationRegistry]:
        """Read groceries and rebuild the location registry (graceful error handling)."""
        registry = registry or LocationRegistry()
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.warning(f"Groceries file not found: {self.path}. Starting with an empty list.")
            return [], registry
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in groceries file: {e}")
            return [], registry
        except OSError as e:
            logger.error(f"Error reading groceries: {e}")
            return [], registry

        if not isinstance(data, list):
            logger.error(f"Groceries file {self.path} does not hold a list")
            return [], registry

        groceries: List[Grocery] = []
        seen = set()
        for entry in data:
            if not isinstance(entry, dict) or not str(entry.get("name") or "").strip():
                logger.warning(f"Skipping malformed grocery entry: {entry!r}")
                continue
            try:
                grocery = Grocery.from_dict(entry)
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping grocery entry {entry.get('name')!r}: {e}")
                continue
            if grocery.key in seen:
                logger.warning(f"Skipping duplicate grocery {grocery.name}")
                continue
            seen.add(grocery.key)
            location_name = entry.get("location")
            if location_name:
                location, _ = registry.get_or_create(location_name)
                registry.assign(grocery, location)
            groceries.append(grocery)
        logger.info(f"Loaded {len(groceries)} groceries from {self.path}")
        return groceries, registry
