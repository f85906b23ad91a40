from __future__ import annotations

from datetime import datetime

import pytest

from core.config import InquiryConfig
from core.errors import InvalidSubmissionError, NotificationFailedError
from core.inquiry import InquirySubmission
from core.models import CreateFormRequest, Form, FormStatus, PhoneNumber

NOW = datetime(2024, 5, 1, 12, 30)


class FakeCatalog:
    def __init__(self, events: list[str]) -> None:
        self.events = events
        self.forms: list[Form] = []

    def add_application_form(self, form: Form) -> None:
        self.events.append("persist")
        self.forms.append(form)


class FakeMailer:
    def __init__(self, events: list[str], fail: bool = False) -> None:
        self.events = events
        self.fail = fail
        self.bodies: list[str] = []

    def send_mail(self, body: str) -> None:
        self.events.append("mail")
        if self.fail:
            raise RuntimeError("SMTP error via localhost:587: connection refused")
        self.bodies.append(body)


class FakeReporter:
    def __init__(self) -> None:
        self.reported: list[tuple[BaseException, str]] = []

    def log_exception(self, exc: BaseException, context: str) -> None:
        self.reported.append((exc, context))


def _pipeline(fail_mail: bool = False, config: InquiryConfig = InquiryConfig()):
    events: list[str] = []
    catalog = FakeCatalog(events)
    mailer = FakeMailer(events, fail=fail_mail)
    reporter = FakeReporter()
    pipeline = InquirySubmission(catalog, mailer, reporter, config, clock=lambda: NOW)
    return pipeline, catalog, mailer, reporter, events


def _request(**overrides) -> CreateFormRequest:
    values = dict(
        company_name="Acme Logistics",
        site="acme.example",
        additional_info="Weekly trips",
        routes=["minsk-brest", "minsk-grodno"],
        operator_codes=["17", "29"],
        numbers=["111", "222"],
    )
    values.update(overrides)
    return CreateFormRequest.from_parallel(**values)


def test_submit_persists_then_notifies() -> None:
    pipeline, catalog, mailer, reporter, events = _pipeline()

    form = pipeline.submit(_request())

    assert events == ["persist", "mail"]
    assert catalog.forms == [form]
    assert form.status is FormStatus.NEW
    assert form.date_time == NOW
    assert form.phones == "+375-(17)-111;+375-(29)-222"
    assert form.routes == "minsk-brest;minsk-grodno"
    assert reporter.reported == []


def test_notification_body_lines_in_order() -> None:
    pipeline, _, mailer, _, _ = _pipeline()

    pipeline.submit(_request())

    assert mailer.bodies == [
        "Acme Logistics\n"
        "+375-(17)-111;+375-(29)-222\n"
        "acme.example\n"
        "minsk-brest;minsk-grodno\n"
        "Weekly trips\n"
    ]


def test_phone_template_comes_from_config() -> None:
    config = InquiryConfig(phone_template="+48 {code} {number}", separator=", ")
    pipeline, catalog, _, _, _ = _pipeline(config=config)

    pipeline.submit(_request())

    assert catalog.forms[0].phones == "+48 17 111, +48 29 222"
    assert catalog.forms[0].routes == "minsk-brest, minsk-grodno"


def test_more_numbers_than_codes_is_rejected() -> None:
    with pytest.raises(InvalidSubmissionError):
        _request(operator_codes=["17"], numbers=["111", "222"])


def test_incomplete_phone_stores_and_sends_nothing() -> None:
    pipeline, catalog, mailer, _, events = _pipeline()
    request = CreateFormRequest(
        company_name="Acme",
        site="",
        additional_info="",
        phones=(PhoneNumber(code="", number="111"),),
    )

    with pytest.raises(InvalidSubmissionError):
        pipeline.submit(request)

    assert events == []
    assert catalog.forms == []
    assert mailer.bodies == []


def test_failed_notification_keeps_form_and_raises() -> None:
    pipeline, catalog, _, reporter, events = _pipeline(fail_mail=True)

    with pytest.raises(NotificationFailedError) as excinfo:
        pipeline.submit(_request())

    assert events == ["persist", "mail"]
    assert excinfo.value.form is catalog.forms[0]
    assert isinstance(excinfo.value.cause, RuntimeError)
    assert len(reporter.reported) == 1
    assert "Acme Logistics" in reporter.reported[0][1]


def test_each_submit_creates_a_new_form() -> None:
    pipeline, catalog, mailer, _, _ = _pipeline()

    pipeline.submit(_request())
    pipeline.submit(_request())

    assert len(catalog.forms) == 2
    assert len(mailer.bodies) == 2


def test_submission_without_phones_or_routes() -> None:
    pipeline, catalog, mailer, _, _ = _pipeline()

    pipeline.submit(_request(routes=[], operator_codes=[], numbers=[]))

    assert catalog.forms[0].phones == ""
    assert catalog.forms[0].routes == ""
    assert mailer.bodies[0] == "Acme Logistics\n\nacme.example\n\nWeekly trips\n"
