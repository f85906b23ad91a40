"""Page-level contract for the public site.

Maps each site page to a view name and model without depending on any web
framework, so a request layer only has to render ``PageResult`` values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence, Tuple

from core.config import InquiryConfig
from core.content import ContentResolver
from core.inquiry import InquirySubmission
from core.models import ArticleType, CreateFormRequest, RouteInfo
from core.ports import ErrorReporterPort
from core.routes import RouteResolver

INDEX_VIEW = "Index"
SEARCH_VIEW = "Search"
ERROR_VIEW = "Error"

ARTICLE_VIEWS = {
    ArticleType.NEWS: "News",
    ArticleType.FAQ: "FAQ",
    ArticleType.HEADER_ARTICLE: "HeaderArticles",
}


@dataclass(frozen=True)
class PageResult:
    view: str
    model: Any = None


@dataclass
class SearchView:
    """Search page model: requested endpoints plus the route's page content."""

    origin: str = ""
    destination: str = ""
    date: Optional[str] = None
    content: str = ""
    meta_keywords: str = ""
    meta_description: str = ""

    def fill_from(self, route: RouteInfo) -> "SearchView":
        self.content = route.content
        self.meta_keywords = route.meta_keywords
        self.meta_description = route.meta_description
        return self


@dataclass(frozen=True)
class FormView:
    content: str
    operator_codes: Tuple[str, ...] = field(default_factory=tuple)


class HomePages:
    """Home section of the site: landing, articles, routes, and inquiry form."""

    def __init__(
        self,
        content: ContentResolver,
        routes: RouteResolver,
        error_reporter: ErrorReporterPort,
        config: InquiryConfig,
        inquiries: Optional[InquirySubmission] = None,
    ) -> None:
        # Read-only callers can skip inquiries; only submit_form needs them.
        self._content = content
        self._routes = routes
        self._inquiries = inquiries
        self._error_reporter = error_reporter
        self._config = config

    def index(self) -> PageResult:
        return PageResult(INDEX_VIEW, self._content.get_home_landing())

    def about(self) -> PageResult:
        return PageResult("About")

    def contacts(self) -> PageResult:
        return PageResult("Contacts", self._content.get_contacts())

    def article_page(self, article_type: ArticleType, name: str) -> PageResult:
        """Show one article, falling back to the index when it is missing."""

        view = ARTICLE_VIEWS.get(article_type)
        if view is None:
            raise ValueError(f"Article type {article_type.value} has no page")
        article = self._content.get_article(article_type, name)
        if article is None:
            return self.index()
        return PageResult(view, article)

    def route_page(self, name: str, date: Optional[str] = None) -> PageResult:
        route = self._routes.get_route(name)
        if route is None:
            return self.index()
        model = SearchView(origin=route.start.name, destination=route.end.name, date=date)
        return PageResult(SEARCH_VIEW, model.fill_from(route))

    def search(self, origin: str, destination: str, date: Optional[str] = None) -> PageResult:
        # An unknown pair still renders the search page, just without content.
        route = self._routes.get_route_between(origin, destination)
        model = SearchView(origin=origin, destination=destination, date=date)
        return PageResult(SEARCH_VIEW, model.fill_from(route))

    def form_page(self) -> PageResult:
        model = FormView(
            content=self._content.get_application_form_text(),
            operator_codes=tuple(self._config.operator_codes),
        )
        return PageResult("Form", model)

    def submit_form(
        self,
        *,
        company_name: str,
        site: str,
        additional_info: str,
        routes: Sequence[str],
        operator_codes: Sequence[str],
        numbers: Sequence[str],
    ) -> PageResult:
        if self._inquiries is None:
            raise RuntimeError("HomePages was built without an inquiry pipeline")
        request = CreateFormRequest.from_parallel(
            company_name=company_name,
            site=site,
            additional_info=additional_info,
            routes=routes,
            operator_codes=operator_codes,
            numbers=numbers,
        )
        self._inquiries.submit(request)
        return PageResult("FormSent")

    def render(self, action: Callable[..., PageResult], *args: Any, **kwargs: Any) -> PageResult:
        """Run a page action, turning any failure into the error page."""

        try:
            return action(*args, **kwargs)
        except Exception as exc:
            self._error_reporter.log_exception(exc, "Exception was caught in the home pages.")
            return PageResult(ERROR_VIEW)
