"""SQLite storage adapter.

Implements the core CatalogPort using a simple SQLite database.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import List, Optional

from core.models import (
    Article,
    ArticleType,
    Form,
    FormStatus,
    PublishedMessage,
    RouteEndpoint,
    RouteInfo,
    Setting,
)


class SQLiteStorage:
    """Thin SQLite wrapper that satisfies the CatalogPort contract."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create tables if they do not exist.

        Tables:
        - articles: editorial content keyed by (type, name)
        - published_messages: short announcements shown in the site feed
        - routes: route pages, including alias entries for endpoint pairs
        - admin_settings / company_settings: flat key-value catalogs
        - forms: append-only log of submitted inquiries
        """

        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS articles (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    type TEXT NOT NULL,
                    name TEXT NOT NULL,
                    content TEXT NOT NULL DEFAULT '',
                    UNIQUE (type, name)
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS published_messages (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    text TEXT NOT NULL,
                    timestamp TIMESTAMP NOT NULL
                )
                """
            )
            # One row per (text, timestamp) so seeding can be repeated.
            conn.execute(
                """
                CREATE UNIQUE INDEX IF NOT EXISTS published_messages_text_timestamp
                ON published_messages (text, timestamp)
                """
            )
            # Fields:
            # - start_name / end_name: endpoint names used by pair lookups
            # - name: unique route identifier used in page URLs
            # - link: name of the authoritative route, empty for real pages
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS routes (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    start_name TEXT NOT NULL DEFAULT '',
                    end_name TEXT NOT NULL DEFAULT '',
                    name TEXT NOT NULL UNIQUE,
                    link TEXT NOT NULL DEFAULT '',
                    content TEXT NOT NULL DEFAULT '',
                    meta_keywords TEXT NOT NULL DEFAULT '',
                    meta_description TEXT NOT NULL DEFAULT ''
                )
                """
            )
            for table in ("admin_settings", "company_settings"):
                conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {table} (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        name TEXT NOT NULL,
                        value TEXT NOT NULL DEFAULT ''
                    )
                    """
                )
            # Phones and routes are stored as the same delimited strings that
            # go into the notification body.
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS forms (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    date_time TIMESTAMP NOT NULL,
                    company_name TEXT,
                    additional_info TEXT,
                    site TEXT,
                    status TEXT NOT NULL,
                    phones TEXT,
                    routes TEXT
                )
                """
            )

    # Catalog reads

    def get_articles(self, article_type: ArticleType) -> List[Article]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT type, name, content FROM articles WHERE type = ? ORDER BY id",
                (ArticleType(article_type).value,),
            ).fetchall()
        return [_row_to_article(row) for row in rows]

    def get_article(self, article_type: ArticleType, name: str) -> Optional[Article]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT type, name, content FROM articles WHERE type = ? AND name = ?",
                (ArticleType(article_type).value, name),
            ).fetchone()
        return _row_to_article(row) if row else None

    def get_contacts(self) -> Optional[Article]:
        """Return the first Contacts article, if any."""

        articles = self.get_articles(ArticleType.CONTACTS)
        return articles[0] if articles else None

    def get_published_messages(self) -> List[PublishedMessage]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, text, timestamp FROM published_messages ORDER BY timestamp DESC, id DESC"
            ).fetchall()
        return [
            PublishedMessage(id=row["id"], text=row["text"], timestamp=datetime.fromisoformat(row["timestamp"]))
            for row in rows
        ]

    def get_route_infos(self) -> List[RouteInfo]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM routes ORDER BY id").fetchall()
        return [_row_to_route(row) for row in rows]

    def get_route_info(self, name: str) -> Optional[RouteInfo]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM routes WHERE name = ?", (name,)).fetchone()
        return _row_to_route(row) if row else None

    def get_admin_settings(self) -> List[Setting]:
        return self._list_settings("admin_settings")

    def get_company_settings(self) -> List[Setting]:
        return self._list_settings("company_settings")

    def _list_settings(self, table: str) -> List[Setting]:
        with self._connect() as conn:
            rows = conn.execute(f"SELECT name, value FROM {table} ORDER BY id").fetchall()
        return [Setting(name=row["name"], value=row["value"]) for row in rows]

    # Writes

    def add_application_form(self, form: Form) -> None:
        """Persist an inquiry to the append-only forms table."""

        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO forms (
                    date_time,
                    company_name,
                    additional_info,
                    site,
                    status,
                    phones,
                    routes
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    form.date_time.isoformat(),
                    form.company_name,
                    form.additional_info,
                    form.site,
                    FormStatus(form.status).value,
                    form.phones,
                    form.routes,
                ),
            )

    def list_forms(self) -> List[Form]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM forms ORDER BY id").fetchall()
        return [
            Form(
                date_time=datetime.fromisoformat(row["date_time"]),
                company_name=row["company_name"],
                additional_info=row["additional_info"],
                site=row["site"],
                status=FormStatus(row["status"]),
                phones=row["phones"],
                routes=row["routes"],
            )
            for row in rows
        ]

    def add_article(self, article: Article) -> None:
        """Upsert an article by (type, name)."""

        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO articles (type, name, content)
                VALUES (?, ?, ?)
                ON CONFLICT(type, name) DO UPDATE SET content = excluded.content
                """,
                (ArticleType(article.type).value, article.name, article.content),
            )

    def add_published_message(self, text: str, timestamp: datetime) -> Optional[int]:
        """Insert a message unless the same text already exists at that timestamp.

        Returns the new row id, or None when the message was already stored.
        """

        with self._connect() as conn:
            cur = conn.execute(
                """
                INSERT INTO published_messages (text, timestamp)
                VALUES (?, ?)
                ON CONFLICT(text, timestamp) DO NOTHING
                """,
                (text, timestamp.isoformat()),
            )
            if cur.rowcount == 0:
                return None
            return int(cur.lastrowid)

    def add_route(self, route: RouteInfo) -> None:
        """Upsert a route by name."""

        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO routes (
                    start_name,
                    end_name,
                    name,
                    link,
                    content,
                    meta_keywords,
                    meta_description
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(name) DO UPDATE SET
                    start_name = excluded.start_name,
                    end_name = excluded.end_name,
                    link = excluded.link,
                    content = excluded.content,
                    meta_keywords = excluded.meta_keywords,
                    meta_description = excluded.meta_description
                """,
                (
                    route.start.name,
                    route.end.name,
                    route.name,
                    route.link,
                    route.content,
                    route.meta_keywords,
                    route.meta_description,
                ),
            )

    def set_admin_setting(self, name: str, value: str) -> None:
        self._set_setting("admin_settings", name, value)

    def set_company_setting(self, name: str, value: str) -> None:
        self._set_setting("company_settings", name, value)

    def _set_setting(self, table: str, name: str, value: str) -> None:
        # No unique constraint on name: lookups take the first row, so an
        # existing row is updated in place instead of adding a duplicate.
        with self._connect() as conn:
            cur = conn.execute(f"UPDATE {table} SET value = ? WHERE name = ?", (value, name))
            if cur.rowcount == 0:
                conn.execute(f"INSERT INTO {table} (name, value) VALUES (?, ?)", (name, value))


def _row_to_article(row: sqlite3.Row) -> Article:
    return Article(type=ArticleType(row["type"]), name=row["name"], content=row["content"])


def _row_to_route(row: sqlite3.Row) -> RouteInfo:
    return RouteInfo(
        start=RouteEndpoint(row["start_name"]),
        end=RouteEndpoint(row["end_name"]),
        name=row["name"],
        link=row["link"],
        content=row["content"],
        meta_keywords=row["meta_keywords"],
        meta_description=row["meta_description"],
    )
