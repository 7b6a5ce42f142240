"""Runtime configuration for BTC Quick Wallet."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_RATE_URL = "https://api.coingecko.com/api/v3"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    if value < 0:
        logger.warning("Ignoring negative %s=%r, using %s", name, raw, default)
        return default
    return value


@dataclass
class WalletConfig:
    submit_delay: float = 1.5
    submit_timeout: float | None = 30.0
    rate_url: str = DEFAULT_RATE_URL
    fetch_exchange_rate: bool = True

    @classmethod
    def from_environment(cls) -> "WalletConfig":
        submit_delay = _env_float("BTC_WALLET_SUBMIT_DELAY", 1.5)
        if submit_delay == 0:
            logger.warning("BTC_WALLET_SUBMIT_DELAY must be positive, using 1.5")
            submit_delay = 1.5

        submit_timeout: float | None = _env_float("BTC_WALLET_SUBMIT_TIMEOUT", 30.0)
        if submit_timeout == 0:
            submit_timeout = None

        fetch_exchange_rate = os.getenv("BTC_WALLET_FETCH_RATE", "1").lower() not in (
            "0",
            "false",
            "no",
        )

        return cls(
            submit_delay=submit_delay,
            submit_timeout=submit_timeout,
            rate_url=os.getenv("BTC_WALLET_RATE_URL", DEFAULT_RATE_URL),
            fetch_exchange_rate=fetch_exchange_rate,
        )
