"""Inquiry submission pipeline.

The pipeline enforces a strict order:
1) Compose and validate phone numbers
2) Persist the form record
3) Notify by mail

Persisting first guarantees that every notified inquiry is also recorded. A
failed notification leaves the stored form in place and is raised as
NotificationFailedError so unsent inquiries can be found.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from core.config import InquiryConfig
from core.errors import NotificationFailedError
from core.formatting import format_inquiry_body, format_phone_numbers, join_values
from core.models import CreateFormRequest, Form, FormStatus
from core.ports import CatalogPort, ErrorReporterPort, MailPort

LOGGER = logging.getLogger(__name__)


class InquirySubmission:
    """Orchestrates validation, persistence, and notification of inquiries."""

    def __init__(
        self,
        catalog: CatalogPort,
        mailer: MailPort,
        error_reporter: ErrorReporterPort,
        config: InquiryConfig,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._catalog = catalog
        self._mailer = mailer
        self._error_reporter = error_reporter
        self._config = config
        self._clock = clock

    def submit(self, request: CreateFormRequest) -> Form:
        """Store one inquiry and send its notification.

        Not idempotent: every call stores a new form and sends a new mail.
        """

        # Validation happens here so a malformed phone never reaches storage.
        phones = format_phone_numbers(request.phones, self._config.phone_template, self._config.separator)
        routes = join_values(request.routes, self._config.separator)

        form = Form(
            date_time=self._clock(),
            company_name=request.company_name,
            additional_info=request.additional_info,
            site=request.site,
            status=FormStatus.NEW,
            phones=phones,
            routes=routes,
        )
        self._catalog.add_application_form(form)
        LOGGER.info("Inquiry saved for %s", request.company_name)

        body = format_inquiry_body(request, phones, routes)
        try:
            self._mailer.send_mail(body)
        except Exception as exc:
            self._error_reporter.log_exception(exc, f"Inquiry from {request.company_name} was saved but not sent.")
            raise NotificationFailedError(form, exc) from exc

        LOGGER.info("Inquiry notification sent for %s", request.company_name)
        return form
