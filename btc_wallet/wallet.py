"""In-memory demo account for BTC Quick Wallet.

The account is read-only from the send workflow's point of view: it supplies
the spendable balance, the wallet's own address and a short history list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class HistoryEntry:
    tx_id: str
    date: str
    time: str
    description: str
    amount: Decimal
    status: str = "Done"
    fee: Decimal | None = None
    counterparty: str | None = None

    @property
    def is_incoming(self) -> bool:
        return self.amount > 0


DEMO_ADDRESS = "bc1q9wukxzkeegx5mjgukyl4ghvvyrz3s8rh78cze6"

DEMO_HISTORY = [
    HistoryEntry("tx-17", "2025-10-25", "14:00", "Received", Decimal("0.75"),
                 counterparty="bc1qxy2kgdygjrsqtzq2n0yrf2493p83kkfjhx0wlh"),
    HistoryEntry("tx-1", "2025-10-22", "07:31", "Received", Decimal("1"),
                 counterparty="bc1qfgeupj23f50koryxbdvxj7e4362vcth423w6h4"),
    HistoryEntry("tx-10", "2025-10-15", "11:45", "Received", Decimal("0.05"),
                 counterparty="1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa"),
    HistoryEntry("tx-2", "2025-09-10", "05:28", "Sent", Decimal("-0.014668")),
    HistoryEntry("tx-11", "2025-09-01", "18:02", "Received", Decimal("0.1"),
                 counterparty="1BvBMSEYstWetqTFn5Au4m4GFg7xJaNVN2"),
    HistoryEntry("tx-3", "2025-08-27", "07:50", "Sent", Decimal("-0.007304")),
    HistoryEntry("tx-13", "2022-01-26", "03:46", "Sent", Decimal("-0.83"),
                 fee=Decimal("0.00004403"),
                 counterparty="bc1qljt2x3jamnakj98m74kuxufdtrk2svtmfa0u6k"),
]


@dataclass
class Wallet:
    address: str
    balance: Decimal
    display_name: str = ""
    history: list[HistoryEntry] = field(default_factory=list)

    @classmethod
    def demo(cls) -> "Wallet":
        return cls(
            address=DEMO_ADDRESS,
            balance=Decimal("1.80000000"),
            display_name="BTCSG LTD",
            history=sorted(DEMO_HISTORY, key=lambda e: (e.date, e.time), reverse=True),
        )

    def recent_history(self, limit: int = 10) -> list[HistoryEntry]:
        return self.history[:limit]
