import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Tuple

from app.core.settings import CHECKLIST_TEMPLATE_PATH
from app.models.checklist_item import CATEGORIES

class InvalidTemplate(Exception): ...

@dataclass(frozen=True)
class TemplateItem:
    key: str
    name: str
    category: str
    order: int
    overdue_days: Optional[int] = None   # None -> nunca genera alerta de atraso
    severity: str = "warning"
    priority: int = 99

def parse_template(raw: list) -> Tuple[TemplateItem, ...]:
    items = []
    seen = set()
    for entry in raw:
        item = TemplateItem(
            key=entry["key"],
            name=entry["name"],
            category=entry["category"],
            order=int(entry["order"]),
            overdue_days=entry.get("overdue_days"),
            severity=entry.get("severity", "warning"),
            priority=int(entry.get("priority", 99)),
        )
        if item.category not in CATEGORIES:
            raise InvalidTemplate(f"unknown category {item.category!r} for {item.key}")
        if item.key in seen:
            raise InvalidTemplate(f"duplicated key {item.key}")
        seen.add(item.key)
        items.append(item)
    return tuple(sorted(items, key=lambda i: i.order))

@lru_cache(maxsize=None)
def load_template(path: Path = CHECKLIST_TEMPLATE_PATH) -> Tuple[TemplateItem, ...]:
    """Carga (una sola vez por proceso) la plantilla ordenada del checklist."""
    with open(path, encoding="utf-8") as fh:
        return parse_template(json.load(fh))

def template_by_key(path: Path = CHECKLIST_TEMPLATE_PATH) -> Dict[str, TemplateItem]:
    return {t.key: t for t in load_template(path)}
