"""BTC Quick Wallet - a terminal-first TUI for reviewing a balance and sending bitcoin.

This package is organized into feature-based modules:
- features.send: the guided send flow (validation and workflow state machine)
- shared: logging, configuration, HTTP and clipboard helpers
"""

from btc_wallet.features.send import (
    FeeTier,
    SendStep,
    SendWorkflow,
    SimulatedSubmitter,
    SubmissionFailed,
    TransactionDraft,
)
from btc_wallet.shared import NetworkClient, NetworkError, WalletConfig
from btc_wallet.wallet import Wallet

__version__ = "0.1.0"
__all__ = [
    "Wallet",
    "WalletConfig",
    "NetworkClient",
    "NetworkError",
    "FeeTier",
    "SendStep",
    "SendWorkflow",
    "SimulatedSubmitter",
    "SubmissionFailed",
    "TransactionDraft",
]
