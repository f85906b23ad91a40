"""Ports (interfaces) used by the core.

Ports define the minimal contracts for catalog, mail, and error reporting
adapters so that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from core.models import Article, ArticleType, Form, PublishedMessage, RouteInfo, Setting


class CatalogPort(Protocol):
    """Database operations required by the core.

    Reads return fully materialized sequences in the catalog's own order.
    """

    def get_articles(self, article_type: ArticleType) -> Sequence[Article]:
        ...

    def get_article(self, article_type: ArticleType, name: str) -> Optional[Article]:
        ...

    def get_published_messages(self) -> Sequence[PublishedMessage]:
        ...

    def get_route_infos(self) -> Sequence[RouteInfo]:
        ...

    def get_route_info(self, name: str) -> Optional[RouteInfo]:
        ...

    def get_contacts(self) -> Optional[Article]:
        ...

    def get_admin_settings(self) -> Sequence[Setting]:
        ...

    def get_company_settings(self) -> Sequence[Setting]:
        ...

    def add_application_form(self, form: Form) -> None:
        ...


class MailPort(Protocol):
    """Delivery of inquiry notifications."""

    def send_mail(self, body: str) -> None:
        ...


class ErrorReporterPort(Protocol):
    """Records failures with a short context message."""

    def log_exception(self, exc: BaseException, context: str) -> None:
        ...
