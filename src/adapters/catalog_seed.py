"""Catalog seeding from a JSON document.

The seed file mirrors the catalog tables with a flat, hand-editable schema::

    {
      "articles": [{"type": "News", "name": "...", "content": "..."}],
      "messages": [{"text": "...", "timestamp": "2024-01-01T10:00:00"}],
      "routes": [{"start": "Minsk", "end": "Brest", "name": "...", "link": ""}],
      "admin_settings": {"CompanyFormText": "..."},
      "company_settings": {"Phone": "..."}
    }
"""

from __future__ import annotations

import json
import logging
from datetime import datetime

from adapters.sqlite_storage import SQLiteStorage
from core.models import Article, ArticleType, RouteEndpoint, RouteInfo

LOGGER = logging.getLogger(__name__)


def load_seed_file(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _route_from_entry(entry: dict) -> RouteInfo:
    return RouteInfo(
        start=RouteEndpoint(entry.get("start", "")),
        end=RouteEndpoint(entry.get("end", "")),
        name=entry["name"],
        link=entry.get("link") or "",
        content=entry.get("content", ""),
        meta_keywords=entry.get("meta_keywords", ""),
        meta_description=entry.get("meta_description", ""),
    )


def seed_catalog(storage: SQLiteStorage, data: dict) -> dict[str, int]:
    """Upsert every entry of ``data`` into ``storage`` and return counts per section.

    Entries without their key field are skipped with a warning. Messages
    already in the feed are left alone and not counted, so a seed file can be
    loaded more than once.
    """

    counts = {"articles": 0, "messages": 0, "routes": 0, "admin_settings": 0, "company_settings": 0}

    for entry in data.get("articles", []):
        if not entry.get("name") or not entry.get("type"):
            LOGGER.warning("Skipping article without type or name: %s", entry)
            continue
        storage.add_article(
            Article(type=ArticleType(entry["type"]), name=entry["name"], content=entry.get("content", ""))
        )
        counts["articles"] += 1

    for entry in data.get("messages", []):
        if not entry.get("text"):
            continue
        raw_timestamp = entry.get("timestamp")
        timestamp = datetime.fromisoformat(raw_timestamp) if raw_timestamp else datetime.now()
        if storage.add_published_message(entry["text"], timestamp) is not None:
            counts["messages"] += 1

    for entry in data.get("routes", []):
        if not entry.get("name"):
            LOGGER.warning("Skipping route without name: %s", entry)
            continue
        storage.add_route(_route_from_entry(entry))
        counts["routes"] += 1

    for name, value in data.get("admin_settings", {}).items():
        storage.set_admin_setting(name, str(value))
        counts["admin_settings"] += 1

    for name, value in data.get("company_settings", {}).items():
        storage.set_company_setting(name, str(value))
        counts["company_settings"] += 1

    return counts
