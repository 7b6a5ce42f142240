"""Send feature module for BTC Quick Wallet."""

from btc_wallet.features.send.handlers import SendHandlersMixin
from btc_wallet.features.send.screen import SendScreen
from btc_wallet.features.send.service import ExchangeRateService, SimulatedSubmitter
from btc_wallet.features.send.validators import (
    ErrorKind,
    FeeTier,
    FieldError,
    SendValidationResult,
    fee_for_tier,
    validate_address,
    validate_amount,
    validate_draft,
)
from btc_wallet.features.send.workflow import (
    SendStep,
    SendWorkflow,
    SubmissionFailed,
    SubmissionReceipt,
    TransactionDraft,
)

__all__ = [
    "SendHandlersMixin",
    "SendScreen",
    "ExchangeRateService",
    "SimulatedSubmitter",
    "ErrorKind",
    "FeeTier",
    "FieldError",
    "SendValidationResult",
    "fee_for_tier",
    "validate_address",
    "validate_amount",
    "validate_draft",
    "SendStep",
    "SendWorkflow",
    "SubmissionFailed",
    "SubmissionReceipt",
    "TransactionDraft",
]
