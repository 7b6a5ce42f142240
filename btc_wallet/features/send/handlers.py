"""Send event handlers for the BTC Quick Wallet TUI."""

from __future__ import annotations

import threading
from decimal import Decimal
from typing import TYPE_CHECKING

from btc_wallet.features.send.screen import SendScreen
from btc_wallet.features.send.service import ExchangeRateService, SimulatedSubmitter
from btc_wallet.features.send.workflow import SendWorkflow, SubmissionReceipt
from btc_wallet.shared.config import WalletConfig
from btc_wallet.shared.logging import get_logger
from btc_wallet.wallet import Wallet

if TYPE_CHECKING:
    from btc_wallet.__main__ import WalletApp

logger = get_logger(__name__)


class SendHandlersMixin:
    """Mixin class providing send-flow handlers for WalletApp."""

    wallet: Wallet
    config: WalletConfig
    exchange_rate: Decimal | None
    _rate_service: ExchangeRateService | None = None

    def create_send_workflow(self) -> SendWorkflow:
        return SendWorkflow(
            balance=self.wallet.balance,
            sender_address=self.wallet.address,
            submitter=SimulatedSubmitter(delay=self.config.submit_delay),
            exchange_rate=self.exchange_rate,
            submit_timeout=self.config.submit_timeout,
        )

    def open_send_flow(self: "WalletApp") -> None:
        if isinstance(self.screen, SendScreen):
            return
        self.push_screen(SendScreen(self.create_send_workflow()), self._on_send_flow_closed)

    def _on_send_flow_closed(self: "WalletApp", receipt: SubmissionReceipt | None) -> None:
        if receipt is None:
            return
        self.notify(
            f"Transaction {receipt.tx_id[:16]}... submitted",
            severity="information",
        )

    def refresh_exchange_rate_async(self: "WalletApp") -> None:
        if not self.config.fetch_exchange_rate:
            return
        if self._rate_service is None:
            self._rate_service = ExchangeRateService(self.config)
        service = self._rate_service

        def worker() -> None:
            rate = service.fetch_btc_usd()
            self.call_from_thread(self._on_exchange_rate_fetched, rate)

        threading.Thread(target=worker, daemon=True).start()

    def _on_exchange_rate_fetched(self: "WalletApp", rate: Decimal | None) -> None:
        self.exchange_rate = rate
        if rate is None:
            logger.info("BTC price unavailable, hiding USD values")
        self.update_dashboard()
