"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

DEFAULT_PHONE_TEMPLATE = "+375-({code})-{number}"


@dataclass(frozen=True)
class InquiryConfig:
    """Inquiry form settings consumed by the submission pipeline and pages."""

    phone_template: str = DEFAULT_PHONE_TEMPLATE
    separator: str = ";"
    operator_codes: Tuple[str, ...] = ()
