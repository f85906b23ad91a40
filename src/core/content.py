"""Article, message, and settings lookups (core domain)."""

from __future__ import annotations

from typing import Iterable, List, Optional

from core.models import Article, ArticleType, PublishedMessage, Setting
from core.ports import CatalogPort

COMPANY_FORM_TEXT_KEY = "CompanyFormText"


def find_setting_value(settings: Iterable[Setting], name: str) -> str:
    """Return the first value stored under ``name``, or an empty string."""

    for setting in settings:
        if setting.name == name:
            return setting.value
    return ""


class ContentResolver:
    """Read-only access to editorial content held by the catalog."""

    def __init__(self, catalog: CatalogPort) -> None:
        self._catalog = catalog

    def get_home_landing(self) -> Optional[str]:
        """Return the landing page content, or None when none is published."""

        for article in self._catalog.get_articles(ArticleType.HOME_PAGE_LANDING):
            return article.content
        return None

    def get_articles(self, article_type: ArticleType) -> List[Article]:
        return list(self._catalog.get_articles(article_type))

    def get_article(self, article_type: ArticleType, name: str) -> Optional[Article]:
        if not name or not name.strip():
            return None
        return self._catalog.get_article(article_type, name)

    def get_published_messages(self) -> List[PublishedMessage]:
        return list(self._catalog.get_published_messages())

    def get_contacts(self) -> Optional[Article]:
        return self._catalog.get_contacts()

    def get_application_form_text(self) -> str:
        """Return the boilerplate shown above the inquiry form."""

        return find_setting_value(self._catalog.get_admin_settings(), COMPANY_FORM_TEXT_KEY)

    def get_company_setting(self, name: str) -> str:
        return find_setting_value(self._catalog.get_company_settings(), name)
