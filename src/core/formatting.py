"""Text formatting for inquiry records and notifications.

Keeping formatting here prevents drift between the stored form and the
notification body, regardless of delivery channel.
"""

from __future__ import annotations

from typing import Iterable

from core.errors import InvalidSubmissionError
from core.models import CreateFormRequest, PhoneNumber


def format_phone_number(phone: PhoneNumber, template: str) -> str:
    """Render one phone with the configured template.

    The template receives ``code`` and ``number`` as named fields. A phone
    with a blank code or a blank number raises InvalidSubmissionError, so one
    half-filled phone row rejects the whole inquiry.
    """

    code = phone.code.strip()
    number = phone.number.strip()
    if not code or not number:
        raise InvalidSubmissionError(f"Phone number is incomplete: code={phone.code!r}, number={phone.number!r}")
    return template.format(code=code, number=number)


def format_phone_numbers(phones: Iterable[PhoneNumber], template: str, separator: str = ";") -> str:
    return separator.join(format_phone_number(phone, template) for phone in phones)


def join_values(values: Iterable[str], separator: str = ";") -> str:
    return separator.join(values)


def format_inquiry_body(request: CreateFormRequest, phones: str, routes: str) -> str:
    """Create the plain-text notification body, one field per line."""

    lines = [
        request.company_name,
        phones,
        request.site,
        routes,
        request.additional_info,
    ]
    return "".join(f"{line or ''}\n" for line in lines)
