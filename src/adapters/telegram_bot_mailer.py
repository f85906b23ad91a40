"""Telegram Bot API mail adapter.

Uses the Bot API for delivery so inquiry notifications can be routed to a
staff chat instead of a mailbox.
"""

from __future__ import annotations

import html
import json
import urllib.error
import urllib.request


class TelegramBotMailer:
    """Mail adapter that posts inquiry bodies via the Telegram Bot API."""

    def __init__(self, bot_token: str, chat_id: str, subject: str, timeout: float = 10) -> None:
        self._bot_token = bot_token
        self._chat_id = chat_id
        self._subject = subject
        self._timeout = timeout

    def _endpoint(self) -> str:
        # The Bot API endpoint is deterministic and derived from the token.
        return f"https://api.telegram.org/bot{self._bot_token}/sendMessage"

    def build_payload(self, body: str) -> dict:
        text = f"<b>{html.escape(self._subject)}</b>\n{html.escape(body)}"
        return {
            "chat_id": self._chat_id,
            "text": text,
            "parse_mode": "HTML",
            "disable_web_page_preview": True,
        }

    def send_mail(self, body: str) -> None:
        """Send the inquiry body via the Bot API."""

        data = json.dumps(self.build_payload(body)).encode("utf-8")
        request = urllib.request.Request(self._endpoint(), data=data, method="POST")
        request.add_header("Content-Type", "application/json")
        try:
            with urllib.request.urlopen(request, timeout=self._timeout):
                pass
        except urllib.error.HTTPError as e:
            body_text = e.read().decode("utf-8", errors="replace")
            raise RuntimeError(f"Bot API error {e.code}: {body_text}") from e
        except (urllib.error.URLError, OSError) as e:
            raise RuntimeError(f"Bot API request failed: {e}") from e
