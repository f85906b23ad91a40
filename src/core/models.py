"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any storage- or delivery-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Sequence, Tuple

from core.errors import InvalidSubmissionError


class ArticleType(str, Enum):
    """Article categories known to the site."""

    HOME_PAGE_LANDING = "HomePageLanding"
    NEWS = "News"
    FAQ = "FAQ"
    HEADER_ARTICLE = "HeaderArticle"
    CONTACTS = "Contacts"


class FormStatus(str, Enum):
    NEW = "New"
    PROCESSED = "Processed"


@dataclass(frozen=True)
class Article:
    """A piece of editorial content, unique by (type, name)."""

    type: ArticleType
    name: str
    content: str


@dataclass(frozen=True)
class PublishedMessage:
    id: int
    text: str
    timestamp: datetime


@dataclass(frozen=True)
class RouteEndpoint:
    """Origin or destination point of a route."""

    name: str = ""


@dataclass(frozen=True)
class RouteInfo:
    """Route page content.

    A route with a non-blank ``link`` is an alias: its content lives on the
    route named by ``link``. ``RouteInfo()`` with every field empty is the
    "no match" value returned by endpoint lookups.
    """

    start: RouteEndpoint = field(default_factory=RouteEndpoint)
    end: RouteEndpoint = field(default_factory=RouteEndpoint)
    name: str = ""
    link: str = ""
    content: str = ""
    meta_keywords: str = ""
    meta_description: str = ""

    @property
    def is_alias(self) -> bool:
        return bool(self.link and self.link.strip())

    @property
    def is_empty(self) -> bool:
        return self == RouteInfo()


@dataclass(frozen=True)
class Setting:
    """Key-value entry of the admin or company settings catalog."""

    name: str
    value: str


@dataclass(frozen=True)
class Form:
    """Persisted inquiry record."""

    date_time: datetime
    company_name: str
    additional_info: str
    site: str
    status: FormStatus
    phones: str
    routes: str


@dataclass(frozen=True)
class PhoneNumber:
    """Operator dialing code paired with a subscriber number."""

    code: str
    number: str


@dataclass(frozen=True)
class CreateFormRequest:
    """Inbound inquiry submission."""

    company_name: str
    site: str
    additional_info: str
    routes: Tuple[str, ...] = ()
    phones: Tuple[PhoneNumber, ...] = ()

    @classmethod
    def from_parallel(
        cls,
        *,
        company_name: str,
        site: str,
        additional_info: str,
        routes: Iterable[str],
        operator_codes: Sequence[str],
        numbers: Sequence[str],
    ) -> "CreateFormRequest":
        """Build a request from the form's parallel code/number lists.

        Raises InvalidSubmissionError when the lists cannot be paired.
        """

        if len(operator_codes) != len(numbers):
            raise InvalidSubmissionError(
                f"Got {len(numbers)} phone number(s) but {len(operator_codes)} operator code(s)"
            )
        return cls(
            company_name=company_name,
            site=site,
            additional_info=additional_info,
            routes=tuple(routes),
            phones=tuple(PhoneNumber(code=code, number=number) for code, number in zip(operator_codes, numbers)),
        )
