"""Collaborators used by the send workflow: submission and exchange rate."""

from __future__ import annotations

import asyncio
import secrets
from decimal import Decimal, InvalidOperation

from btc_wallet.features.send.workflow import SubmissionReceipt, TransactionDraft
from btc_wallet.shared.config import WalletConfig
from btc_wallet.shared.logging import get_logger
from btc_wallet.shared.network import NetworkClient, NetworkError, RetryConfig

logger = get_logger(__name__)

USD_FORMAT = "≈ ${:,.2f} USD"


class SimulatedSubmitter:
    """Pretends to sign and broadcast a transaction.

    Nothing leaves the process; the call only waits ``delay`` seconds and
    hands back a receipt with a random transaction id.
    """

    def __init__(self, delay: float = 1.5):
        if delay <= 0:
            raise ValueError("Submission delay must be positive")
        self.delay = delay
        self.submitted: list[SubmissionReceipt] = []

    async def submit(self, draft: TransactionDraft) -> SubmissionReceipt:
        amount = draft.amount
        if amount is None:
            raise ValueError("Cannot submit a draft without a valid amount")

        logger.info("Submitting %s BTC (fee %s)", amount, draft.fee)
        await asyncio.sleep(self.delay)

        receipt = SubmissionReceipt(
            tx_id=secrets.token_hex(32),
            recipient_address=draft.recipient_address,
            amount=amount,
            fee=draft.fee,
        )
        self.submitted.append(receipt)
        return receipt


class ExchangeRateService:
    PRICE_ENDPOINT = "/simple/price"

    def __init__(
        self, config: WalletConfig | None = None, client: NetworkClient | None = None
    ):
        self.config = config or WalletConfig()
        self.client = client or NetworkClient(
            self.config.rate_url, retry_config=RetryConfig(max_retries=1)
        )

    def fetch_btc_usd(self) -> Decimal | None:
        """Return the BTC/USD rate, or ``None`` when it cannot be fetched."""
        if not self.config.fetch_exchange_rate:
            return None

        try:
            data = self.client.get(
                self.PRICE_ENDPOINT,
                context="BTC price fetch",
                params={"ids": "bitcoin", "vs_currencies": "usd"},
            )
        except NetworkError as e:
            logger.warning("Failed to fetch BTC price: %s", e)
            return None

        try:
            rate = Decimal(str(data["bitcoin"]["usd"]))
        except (KeyError, TypeError, InvalidOperation):
            logger.warning("Unexpected BTC price payload: %r", data)
            return None

        if not rate.is_finite() or rate <= 0:
            logger.warning("Ignoring non-positive BTC price: %s", rate)
            return None

        return rate


def format_btc(value: Decimal) -> str:
    return f"{value:.8f} BTC"


def format_usd(value: Decimal | None) -> str:
    if value is None:
        return ""
    return USD_FORMAT.format(value)


def shorten_address(address: str, keep: int = 8) -> str:
    if len(address) <= keep * 2 + 3:
        return address
    return f"{address[:keep]}...{address[-keep:]}"


def describe_receipt(receipt: SubmissionReceipt) -> str:
    """Multi-line summary shown on the result step."""
    submitted_at = receipt.submitted_at.strftime("%Y-%m-%d %H:%M:%S %Z")
    return (
        f"Sent {format_btc(receipt.amount)} + {format_btc(receipt.fee)} fee\n"
        f"Total: {format_btc(receipt.total)}\n"
        f"To: {receipt.recipient_address}\n"
        f"Submitted: {submitted_at}"
    )
