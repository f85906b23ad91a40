from __future__ import annotations

from datetime import datetime
from typing import Optional

from core.content import COMPANY_FORM_TEXT_KEY, ContentResolver
from core.models import Article, ArticleType, PublishedMessage, Setting


class FakeCatalog:
    def __init__(
        self,
        articles: Optional[list[Article]] = None,
        admin_settings: Optional[list[Setting]] = None,
        company_settings: Optional[list[Setting]] = None,
    ) -> None:
        self.articles = articles or []
        self.admin_settings = admin_settings or []
        self.company_settings = company_settings or []
        self.article_lookups = 0

    def get_articles(self, article_type: ArticleType) -> list[Article]:
        return [article for article in self.articles if article.type == article_type]

    def get_article(self, article_type: ArticleType, name: str) -> Optional[Article]:
        self.article_lookups += 1
        for article in self.articles:
            if article.type == article_type and article.name == name:
                return article
        return None

    def get_published_messages(self) -> list[PublishedMessage]:
        return [PublishedMessage(id=1, text="Holiday timetable", timestamp=datetime(2024, 1, 1))]

    def get_contacts(self) -> Optional[Article]:
        return Article(ArticleType.CONTACTS, "contacts", "Call us")

    def get_admin_settings(self) -> list[Setting]:
        return self.admin_settings

    def get_company_settings(self) -> list[Setting]:
        return self.company_settings


def test_home_landing_uses_first_article() -> None:
    catalog = FakeCatalog(
        [
            Article(ArticleType.NEWS, "n1", "news"),
            Article(ArticleType.HOME_PAGE_LANDING, "first", "Welcome"),
            Article(ArticleType.HOME_PAGE_LANDING, "second", "Other"),
        ]
    )

    assert ContentResolver(catalog).get_home_landing() == "Welcome"


def test_home_landing_missing_returns_none() -> None:
    assert ContentResolver(FakeCatalog()).get_home_landing() is None


def test_get_article_not_found_returns_none() -> None:
    catalog = FakeCatalog([Article(ArticleType.FAQ, "price", "It depends")])
    resolver = ContentResolver(catalog)

    assert resolver.get_article(ArticleType.FAQ, "price").content == "It depends"
    assert resolver.get_article(ArticleType.NEWS, "price") is None
    assert resolver.get_article(ArticleType.FAQ, "missing") is None


def test_blank_article_name_skips_catalog() -> None:
    catalog = FakeCatalog()

    assert ContentResolver(catalog).get_article(ArticleType.NEWS, " ") is None
    assert catalog.article_lookups == 0


def test_get_articles_keeps_catalog_order() -> None:
    catalog = FakeCatalog(
        [
            Article(ArticleType.NEWS, "b", "second"),
            Article(ArticleType.NEWS, "a", "first"),
        ]
    )

    names = [article.name for article in ContentResolver(catalog).get_articles(ArticleType.NEWS)]

    assert names == ["b", "a"]


def test_application_form_text_first_match_wins() -> None:
    catalog = FakeCatalog(
        admin_settings=[
            Setting("Other", "x"),
            Setting(COMPANY_FORM_TEXT_KEY, "Fill in the form"),
            Setting(COMPANY_FORM_TEXT_KEY, "Duplicate"),
        ]
    )

    assert ContentResolver(catalog).get_application_form_text() == "Fill in the form"


def test_application_form_text_missing_is_empty() -> None:
    assert ContentResolver(FakeCatalog()).get_application_form_text() == ""


def test_company_setting_lookup() -> None:
    catalog = FakeCatalog(company_settings=[Setting("Phone", "+375 17 000 00 00")])
    resolver = ContentResolver(catalog)

    assert resolver.get_company_setting("Phone") == "+375 17 000 00 00"
    assert resolver.get_company_setting("Fax") == ""


def test_pass_through_lookups() -> None:
    resolver = ContentResolver(FakeCatalog())

    assert resolver.get_contacts().content == "Call us"
    assert resolver.get_published_messages()[0].text == "Holiday timetable"
