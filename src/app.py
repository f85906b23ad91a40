"""Command line entry point for the transit site core."""

from __future__ import annotations

import argparse
import json
import logging
import os
from dataclasses import asdict, is_dataclass
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from art import tprint
from dotenv import load_dotenv

import settings
from adapters.catalog_seed import load_seed_file, seed_catalog
from adapters.logging_reporter import LoggingErrorReporter
from adapters.smtp_mailer import SmtpMailer
from adapters.sqlite_storage import SQLiteStorage
from adapters.telegram_bot_mailer import TelegramBotMailer
from core.config import InquiryConfig
from core.content import ContentResolver
from core.errors import InvalidSubmissionError, NotificationFailedError
from core.inquiry import InquirySubmission
from core.models import ArticleType
from core.pages import HomePages
from core.routes import RouteResolver

NAME = "TRANSIT"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    """Return secret values to mask: the named env vars plus mail credentials."""

    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = [os.getenv(name) for name in redact_cfg.get("patterns", [])]
    values.extend([settings.SMTP_USERNAME, os.getenv("SMTP_PASSWORD"), os.getenv("BOT_API")])
    return sorted({value for value in values if value}, key=len, reverse=True)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/transit.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _build_mailer():
    """Select the mail adapter from configuration."""

    if settings.NOTIFICATION_METHOD == "bot":
        bot_token = os.getenv("BOT_API")
        if not bot_token:
            raise RuntimeError("BOT_API is required when notification_method=bot")
        if not settings.BOT_CHAT_ID:
            raise RuntimeError("notifications.bot_chat_id is required for bot notifications")
        return TelegramBotMailer(
            bot_token=bot_token,
            chat_id=str(settings.BOT_CHAT_ID),
            subject=settings.MAIL_SUBJECT,
        )
    if settings.NOTIFICATION_METHOD == "smtp":
        if not settings.SMTP_SENDER or not settings.SMTP_RECIPIENTS:
            raise RuntimeError("notifications.smtp.sender and recipients are required for smtp notifications")
        return SmtpMailer(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            sender=settings.SMTP_SENDER,
            recipients=settings.SMTP_RECIPIENTS,
            subject=settings.MAIL_SUBJECT,
            username=settings.SMTP_USERNAME,
            password=os.getenv("SMTP_PASSWORD"),
            use_tls=settings.SMTP_USE_TLS,
        )
    raise RuntimeError("notification_method must be 'smtp' or 'bot'")


def _inquiry_config() -> InquiryConfig:
    return InquiryConfig(
        phone_template=settings.PHONE_TEMPLATE,
        separator=settings.FIELD_SEPARATOR,
        operator_codes=settings.OPERATOR_CODES,
    )


def _storage() -> SQLiteStorage:
    storage = SQLiteStorage(settings.DB_PATH)
    storage.init_db()
    return storage


def _to_jsonable(value: Any) -> Any:
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    return value


def _print_json(value: Any) -> None:
    print(json.dumps(_to_jsonable(value), ensure_ascii=False, indent=2, default=str))


def _article_type(raw: str) -> ArticleType:
    try:
        return ArticleType(raw)
    except ValueError:
        choices = ", ".join(item.value for item in ArticleType)
        raise argparse.ArgumentTypeError(f"unknown article type {raw!r} (choose from {choices})")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="transit")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create the catalog tables")
    seed = subparsers.add_parser("seed", help="Load articles, routes, and settings from a JSON file")
    seed.add_argument("path")

    subparsers.add_parser("landing", help="Print the landing page content")
    articles = subparsers.add_parser("articles", help="List articles of a type")
    articles.add_argument("type", type=_article_type)
    article = subparsers.add_parser("article", help="Show one article")
    article.add_argument("type", type=_article_type)
    article.add_argument("name")
    subparsers.add_parser("messages", help="List published messages")
    subparsers.add_parser("contacts", help="Show the contacts article")
    subparsers.add_parser("form-text", help="Print the inquiry form text")

    subparsers.add_parser("routes", help="List all routes")
    route = subparsers.add_parser("route", help="Show a route page by name")
    route.add_argument("name")
    route.add_argument("--date")
    search = subparsers.add_parser("search", help="Resolve the route page for an origin and destination")
    search.add_argument("origin")
    search.add_argument("destination")
    search.add_argument("--date")

    submit = subparsers.add_parser("submit", help="Submit an inquiry")
    submit.add_argument("--company", required=True)
    submit.add_argument("--site", default="")
    submit.add_argument("--info", default="")
    submit.add_argument("--route", action="append", default=[], dest="routes")
    submit.add_argument("--code", action="append", default=[], dest="codes", help="Operator code, once per phone")
    submit.add_argument("--number", action="append", default=[], dest="numbers", help="Subscriber number")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    load_dotenv()
    _configure_logging()
    logger = logging.getLogger(__name__)

    storage = _storage()
    if args.command == "init-db":
        _print_banner()
        logger.info("Catalog ready at %s", settings.DB_PATH)
        return
    if args.command == "seed":
        counts = seed_catalog(storage, load_seed_file(args.path))
        logger.info("Seeded catalog: %s", counts)
        _print_json(counts)
        return

    content = ContentResolver(storage)
    routes = RouteResolver(storage)

    if args.command == "landing":
        print(content.get_home_landing() or "")
    elif args.command == "articles":
        _print_json(content.get_articles(args.type))
    elif args.command == "article":
        _print_json(content.get_article(args.type, args.name))
    elif args.command == "messages":
        _print_json(content.get_published_messages())
    elif args.command == "contacts":
        _print_json(content.get_contacts())
    elif args.command == "form-text":
        print(content.get_application_form_text())
    elif args.command == "routes":
        _print_json(routes.get_all_routes())
    elif args.command in {"route", "search"}:
        pages = HomePages(content, routes, LoggingErrorReporter(), _inquiry_config())
        if args.command == "route":
            _print_json(pages.render(pages.route_page, args.name, args.date))
        else:
            _print_json(pages.render(pages.search, args.origin, args.destination, args.date))
    elif args.command == "submit":
        reporter = LoggingErrorReporter()
        config = _inquiry_config()
        inquiries = InquirySubmission(storage, _build_mailer(), reporter, config)
        pages = HomePages(content, routes, reporter, config, inquiries=inquiries)
        try:
            pages.submit_form(
                company_name=args.company,
                site=args.site,
                additional_info=args.info,
                routes=args.routes,
                operator_codes=args.codes,
                numbers=args.numbers,
            )
        except InvalidSubmissionError as exc:
            parser.exit(2, f"transit: invalid inquiry: {exc}\n")
        except NotificationFailedError as exc:
            parser.exit(1, f"transit: {exc}\n")
        logger.info("Inquiry from %s submitted", args.company)


if __name__ == "__main__":
    main()
