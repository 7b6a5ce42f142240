"""Logging for BTC Quick Wallet.

Records may carry a ``context`` mapping (attached by ``ContextAdapter``) that
both formatters render. Every formatted line passes through the redaction
rules below, so private keys, PINs and one-time codes never reach
``~/.btc-quick-wallet/wallet.log``.
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

ENV_PREFIX = "BTC_WALLET_"
DEFAULT_LOG_DIR = Path.home() / ".btc-quick-wallet"
TRUTHY = ("1", "true", "yes", "on")

REDACTED = "[REDACTED]"
KEY_REDACTED = "[KEY_REDACTED]"
ADDRESS_REDACTED = "[ADDRESS_REDACTED]"


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LogFormat(Enum):
    HUMAN = "human"
    JSON = "json"


def _env(name: str, default: str = "") -> str:
    return os.getenv(f"{ENV_PREFIX}{name}", default).strip()


def _enum_or_default(enum_cls: type[Enum], raw: str, default: Any) -> Any:
    try:
        return enum_cls(raw)
    except ValueError:
        return default


@dataclass
class LoggingConfig:
    log_level: LogLevel = LogLevel.INFO
    log_format: LogFormat = LogFormat.HUMAN
    log_to_file: bool = True
    log_to_stdout: bool = False
    log_dir: Path = field(default_factory=lambda: DEFAULT_LOG_DIR)
    log_filename: str = "wallet.log"
    # Capped at WARNING regardless of log_level.
    quiet_loggers: tuple[str, ...] = ("urllib3", "asyncio")

    @classmethod
    def from_environment(cls) -> "LoggingConfig":
        config = cls(
            log_level=_enum_or_default(
                LogLevel, _env("LOG_LEVEL", "INFO").upper(), LogLevel.INFO
            ),
            log_format=_enum_or_default(
                LogFormat, _env("LOG_FORMAT", "human").lower(), LogFormat.HUMAN
            ),
            log_to_stdout=_env("LOG_STDOUT").lower() in TRUTHY,
        )
        log_dir = _env("LOG_DIR")
        if log_dir:
            config.log_dir = Path(log_dir).expanduser()
        return config


REDACTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    # private_key=..., pin: 1234, otp="123456"
    (
        re.compile(
            r"((?:private[_-]?key|pin|otp|code|password|seed)['\"]?\s*[:=]\s*['\"]?)"
            r"[^\s'\",}]+",
            re.IGNORECASE,
        ),
        rf"\1{REDACTED}",
    ),
    # BIP32 extended private keys
    (re.compile(r"\b[xtyz]prv[1-9A-HJ-NP-Za-km-z]{100,112}\b"), KEY_REDACTED),
    # WIF
    (re.compile(r"\b[5KLc9][1-9A-HJ-NP-Za-km-z]{50,51}\b"), KEY_REDACTED),
)

SENSITIVE_KEYS = frozenset(
    {"private_key", "privatekey", "pin", "otp", "secret", "password", "seed", "mnemonic"}
)

ADDRESS_PATTERN = re.compile(r"\b(?:bc1|[13])[a-zA-HJ-NP-Z0-9]{25,39}\b")


def sanitize_message(message: str, preserve_addresses: bool = True) -> str:
    for pattern, replacement in REDACTIONS:
        message = pattern.sub(replacement, message)
    if not preserve_addresses:
        message = ADDRESS_PATTERN.sub(ADDRESS_REDACTED, message)
    return message


def _is_sensitive_key(key: object) -> bool:
    name = str(key).lower()
    return any(word in name for word in SENSITIVE_KEYS)


def _sanitize_value(value: Any, preserve_addresses: bool) -> Any:
    if isinstance(value, str):
        return sanitize_message(value, preserve_addresses)
    if isinstance(value, dict):
        return sanitize_dict(value, preserve_addresses)
    if isinstance(value, (list, tuple)):
        return [_sanitize_value(item, preserve_addresses) for item in value]
    return value


def sanitize_dict(
    data: dict[str, Any], preserve_addresses: bool = True
) -> dict[str, Any]:
    return {
        key: REDACTED
        if _is_sensitive_key(key)
        else _sanitize_value(value, preserve_addresses)
        for key, value in data.items()
    }


# Keyed by SubmissionFailed.reason.
REASON_MESSAGES: dict[str, tuple[str, str | None]] = {
    "timeout": (
        "The submission timed out.",
        "Check your connection and try sending again.",
    ),
    "network": (
        "The network could not be reached.",
        "Check your internet connection and try again.",
    ),
    "rejected": (
        "The transaction was rejected.",
        "Review the transaction details and try again.",
    ),
    "unexpected": (
        "Something went wrong while sending.",
        "Try again. Details were written to the log.",
    ),
}

ERROR_PATTERNS: tuple[tuple[re.Pattern[str], str, str | None], ...] = (
    (
        re.compile(r"timeout|timed out"),
        "The request timed out.",
        "Try again later or check your network connection.",
    ),
    (
        re.compile(r"connection (?:refused|reset|error)|cannot connect"),
        "Unable to connect to the server.",
        "Check your internet connection and try again.",
    ),
    (
        re.compile(r"insufficient (?:balance|funds)"),
        "Insufficient balance for this transaction.",
        "Lower the amount or pick a cheaper fee tier.",
    ),
    (
        re.compile(r"invalid.*address"),
        "The recipient address is not valid.",
        "Check the address format.",
    ),
    (
        re.compile(r"rate limit|too many requests|\b429\b"),
        "Too many requests.",
        "Wait a moment and try again.",
    ),
    (
        re.compile(r"rejected"),
        "The transaction was rejected.",
        "Review the transaction details and try again.",
    ),
)

UNKNOWN_ERROR: tuple[str, str | None] = ("An unexpected error occurred.", None)


def get_user_friendly_error(error: Exception | str) -> tuple[str, str | None]:
    """Return ``(message, suggestion)`` suitable for showing in the TUI."""
    reason = getattr(error, "reason", None)
    if isinstance(reason, str) and reason in REASON_MESSAGES:
        return REASON_MESSAGES[reason]

    text = str(error).lower()
    for pattern, message, suggestion in ERROR_PATTERNS:
        if pattern.search(text):
            return message, suggestion
    return UNKNOWN_ERROR


def format_error_for_user(error: Exception | str) -> str:
    message, suggestion = get_user_friendly_error(error)
    return f"{message} {suggestion}" if suggestion else message


class _RedactingFormatter(logging.Formatter):
    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        redact: bool = True,
    ):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.redact = redact

    def _clean(self, text: str) -> str:
        return sanitize_message(text) if self.redact else text

    def _context(self, record: logging.LogRecord) -> dict[str, Any]:
        context = getattr(record, "context", None)
        if not isinstance(context, dict):
            return {}
        return sanitize_dict(context) if self.redact else context


class HumanReadableFormatter(_RedactingFormatter):
    """``2025-10-25 14:00:00 INFO    btc_wallet.x: message [key=value ...]``"""

    def __init__(self, redact: bool = True):
        super().__init__(
            "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
            "%Y-%m-%d %H:%M:%S",
            redact,
        )

    def format(self, record: logging.LogRecord) -> str:
        line = self._clean(super().format(record))
        context = self._context(record)
        if context:
            pairs = " ".join(f"{key}={value}" for key, value in context.items())
            line = f"{line} [{pairs}]"
        return line


class StructuredFormatter(_RedactingFormatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": self._clean(record.getMessage()),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        context = self._context(record)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self._clean(self.formatException(record.exc_info))
        return json.dumps(payload, default=str)


class ContextAdapter(logging.LoggerAdapter):
    """Logger adapter that attaches a ``context`` mapping to every record."""

    def __init__(self, logger: logging.Logger, context: dict[str, Any] | None = None):
        super().__init__(logger, dict(context or {}))

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = {**self.extra, **extra.get("context", {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **context: Any) -> "ContextAdapter":
        return ContextAdapter(self.logger, {**self.extra, **context})


def get_logger(name: str, context: dict[str, Any] | None = None) -> ContextAdapter:
    return ContextAdapter(logging.getLogger(name), context)


def _with_formatter(handler: logging.Handler, config: LoggingConfig) -> logging.Handler:
    if config.log_format is LogFormat.JSON:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter())
    return handler


def setup_logging(config: LoggingConfig | None = None) -> list[logging.Handler]:
    """Install the wallet's handlers on the root logger, replacing any others."""
    config = config or LoggingConfig.from_environment()

    handlers: list[logging.Handler] = []
    if config.log_to_file:
        config.log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _with_formatter(
                logging.FileHandler(
                    config.log_dir / config.log_filename, encoding="utf-8"
                ),
                config,
            )
        )
    if config.log_to_stdout:
        handlers.append(_with_formatter(logging.StreamHandler(sys.stdout), config))
    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(level=config.log_level.value, handlers=handlers, force=True)
    for name in config.quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handlers


__all__ = [
    "LogLevel",
    "LogFormat",
    "LoggingConfig",
    "ContextAdapter",
    "StructuredFormatter",
    "HumanReadableFormatter",
    "sanitize_message",
    "sanitize_dict",
    "get_user_friendly_error",
    "format_error_for_user",
    "setup_logging",
    "get_logger",
]
