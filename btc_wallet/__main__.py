"""Main application entry point for BTC Quick Wallet."""

from __future__ import annotations

from decimal import Decimal
from typing import cast

from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Button, DataTable, Footer, Header, Label, Static

from btc_wallet.features.send.handlers import SendHandlersMixin
from btc_wallet.features.send.service import format_btc, format_usd, shorten_address
from btc_wallet.features.send.workflow import to_usd
from btc_wallet.shared.clipboard import copy_text
from btc_wallet.shared.config import WalletConfig
from btc_wallet.shared.logging import get_logger, setup_logging
from btc_wallet.styles import CSS
from btc_wallet.wallet import Wallet

logger = get_logger(__name__)


class WalletApp(SendHandlersMixin, App):
    CSS = CSS
    TITLE = "BTC Quick Wallet"

    BINDINGS = [
        ("s", "send", "Send"),
        ("c", "copy_address", "Copy address"),
        ("r", "refresh_rate", "Refresh price"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, wallet: Wallet | None = None, config: WalletConfig | None = None):
        super().__init__()
        self.wallet = wallet or Wallet.demo()
        self.config = config or WalletConfig.from_environment()
        self.exchange_rate: Decimal | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="dashboard"):
            yield Label("📊 Dashboard", id="dashboard-title")
            yield Static(id="balance-info")
            yield Static(id="address-info")
            yield Horizontal(
                Button("📤 Send", id="open-send-button", variant="primary"),
                Button("📋 Copy Address", id="copy-address-button"),
            )
            yield Label("📜 Recent Transactions", id="history-title")
            yield DataTable(id="history-table")
        yield Footer()

    def on_mount(self) -> None:
        logger.info("Wallet opened for %s", self.wallet.address)
        self.update_dashboard()
        self.update_history()
        self.refresh_exchange_rate_async()

    def update_dashboard(self) -> None:
        balance = self.wallet.balance
        usd = format_usd(to_usd(balance, self.exchange_rate))
        balance_text = f"Balance: [b]{format_btc(balance)}[/b]"
        if usd:
            balance_text += f"\n[dim]{usd}[/dim]"
        cast(Static, self.query_one("#balance-info")).update(balance_text)
        address_text = f"Address: {self.wallet.address}"
        if self.wallet.display_name:
            address_text = f"Account: [b]{self.wallet.display_name}[/b]\n{address_text}"
        cast(Static, self.query_one("#address-info")).update(address_text)

    def update_history(self) -> None:
        table = cast(DataTable, self.query_one("#history-table"))
        table.clear(columns=True)
        table.add_column("Date", key="date")
        table.add_column("Description", key="description")
        table.add_column("Counterparty", key="counterparty")
        table.add_column("Amount", key="amount")
        table.add_column("Fee", key="fee")
        table.add_column("Status", key="status")

        for entry in self.wallet.recent_history():
            color = "green" if entry.is_incoming else "red"
            table.add_row(
                f"{entry.date} {entry.time}",
                entry.description,
                shorten_address(entry.counterparty) if entry.counterparty else "",
                f"[{color}]{entry.amount:+.8f}[/{color}]",
                f"{entry.fee:.8f}" if entry.fee is not None else "",
                entry.status,
                key=entry.tx_id,
            )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "open-send-button":
            self.action_send()
        elif event.button.id == "copy-address-button":
            self.action_copy_address()

    def action_send(self) -> None:
        self.open_send_flow()

    def action_copy_address(self) -> None:
        result = copy_text(self.wallet.address)
        if result.success:
            self.notify("Address copied to clipboard!", severity="information")
        else:
            self.notify("Clipboard is not available", severity="warning")

    def action_refresh_rate(self) -> None:
        self.refresh_exchange_rate_async()


def main():
    """Entry point for the application."""
    setup_logging()
    app = WalletApp()
    app.run()


if __name__ == "__main__":
    main()
