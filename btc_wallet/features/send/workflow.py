"""Send-transaction workflow state machine.

A ``SendWorkflow`` lives for exactly one opening of the send dialog and moves
through three steps::

    COMPOSE --request_confirm--> CONFIRM --confirm_send--> RESULT
       ^                            |
       +----------go_back-----------+

The draft is an immutable value; every edit swaps in a new ``TransactionDraft``.
Validation always runs on ``request_confirm``. While the form is being edited,
only fields that already show an error are re-validated.
"""

from __future__ import annotations

import asyncio
import secrets
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Protocol

from btc_wallet.features.send.validators import (
    FIELD_AMOUNT,
    FIELD_RECIPIENT,
    FeeTier,
    FieldError,
    SendValidationResult,
    btc_sum,
    fee_for_tier,
    parse_amount,
    validate_amount,
    validate_draft,
    validate_recipient,
)
from btc_wallet.shared.logging import ContextAdapter, get_logger
from btc_wallet.shared.network import NetworkError

logger = get_logger(__name__)

USD_QUANT = Decimal("0.01")


class SendStep(Enum):
    COMPOSE = "compose"
    CONFIRM = "confirm"
    RESULT = "result"


class SubmissionFailed(Exception):
    """The submission collaborator did not complete the send."""

    TIMEOUT = "timeout"
    NETWORK = "network"
    REJECTED = "rejected"
    UNEXPECTED = "unexpected"

    def __init__(self, message: str, reason: str = REJECTED):
        super().__init__(message)
        self.reason = reason


@dataclass(frozen=True)
class TransactionDraft:
    recipient_address: str = ""
    amount_text: str = ""
    fee_tier: FeeTier = FeeTier.NORMAL

    @property
    def fee(self) -> Decimal:
        return fee_for_tier(self.fee_tier)

    @property
    def amount(self) -> Decimal | None:
        return parse_amount(self.amount_text)

    @property
    def total(self) -> Decimal:
        return btc_sum(self.amount or Decimal(0), self.fee)

    def with_changes(self, **changes: Any) -> "TransactionDraft":
        return replace(self, **changes)


@dataclass(frozen=True)
class SubmissionReceipt:
    tx_id: str
    recipient_address: str
    amount: Decimal
    fee: Decimal
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total(self) -> Decimal:
        return btc_sum(self.amount, self.fee)


class Submitter(Protocol):
    async def submit(self, draft: TransactionDraft) -> SubmissionReceipt: ...


def to_usd(value: Decimal, rate: Decimal | None) -> Decimal | None:
    if rate is None:
        return None
    return (value * rate).quantize(USD_QUANT, rounding=ROUND_HALF_UP)


class SendWorkflow:
    def __init__(
        self,
        balance: Decimal,
        sender_address: str,
        submitter: Submitter,
        exchange_rate: Decimal | None = None,
        submit_timeout: float | None = None,
    ):
        self.balance = Decimal(balance)
        self.sender_address = sender_address
        self.exchange_rate = exchange_rate
        self.submit_timeout = submit_timeout
        self._submitter = submitter

        self.step = SendStep.COMPOSE
        self.draft = TransactionDraft()
        self.validation = SendValidationResult()
        self.confirmed_draft: TransactionDraft | None = None
        self.is_submitting = False
        self.submission_error: SubmissionFailed | None = None
        self.receipt: SubmissionReceipt | None = None
        self.closed = False
        self.session_id = secrets.token_hex(4)
        self._session_log = logger.with_context(session=self.session_id)

        self.log.debug("Send workflow opened (balance=%s)", self.balance)

    @property
    def log(self) -> ContextAdapter:
        return self._session_log.with_context(step=self.step.value)

    @property
    def fee(self) -> Decimal:
        return self.draft.fee

    @property
    def total(self) -> Decimal:
        return self.draft.total

    @property
    def field_errors(self) -> dict[str, FieldError]:
        return self.validation.field_errors

    def _editable(self, operation: str) -> bool:
        if self.closed or self.step is not SendStep.COMPOSE:
            self.log.debug("Ignoring %s outside compose step (%s)", operation, self.step.value)
            return False
        return True

    def _set_field_error(self, field_name: str, error: FieldError | None) -> None:
        errors = dict(self.validation.field_errors)
        if error is None:
            errors.pop(field_name, None)
        else:
            errors[field_name] = error
        self.validation = SendValidationResult(field_errors=errors)

    def _revalidate_amount(self) -> None:
        self._set_field_error(
            FIELD_AMOUNT,
            validate_amount(self.draft.amount_text, self.draft.fee, self.balance),
        )

    def update_recipient(self, address: str) -> bool:
        if not self._editable("recipient edit"):
            return False
        self.draft = self.draft.with_changes(recipient_address=address)
        if self.validation.has_error(FIELD_RECIPIENT):
            self._set_field_error(FIELD_RECIPIENT, validate_recipient(address))
        return True

    def update_amount(self, amount_text: str) -> bool:
        if not self._editable("amount edit"):
            return False
        self.draft = self.draft.with_changes(amount_text=amount_text)
        if self.validation.has_error(FIELD_AMOUNT):
            self._revalidate_amount()
        return True

    def select_fee_tier(self, tier: FeeTier | str) -> bool:
        if not self._editable("fee tier change"):
            return False
        tier = FeeTier.from_value(tier)
        self.draft = self.draft.with_changes(fee_tier=tier)
        self.log.debug("Fee tier set to %s (fee=%s)", tier.value, self.draft.fee)
        if self.validation.has_error(FIELD_AMOUNT):
            self._revalidate_amount()
        return True

    def request_confirm(self) -> bool:
        if not self._editable("confirm request"):
            return False

        self.validation = validate_draft(self.draft, self.balance)
        if not self.validation.is_valid:
            self.log.info(
                "Send draft rejected: %s",
                ", ".join(
                    f"{name}={error.kind.value}"
                    for name, error in self.validation.field_errors.items()
                ),
            )
            return False

        self.confirmed_draft = self.draft
        self.submission_error = None
        self.step = SendStep.CONFIRM
        self.log.info(
            "Send draft confirmed: amount=%s fee=%s total=%s",
            self.draft.amount,
            self.draft.fee,
            self.draft.total,
        )
        return True

    def go_back(self) -> bool:
        if self.closed or self.step is not SendStep.CONFIRM or self.is_submitting:
            return False
        self.step = SendStep.COMPOSE
        self.confirmed_draft = None
        self.submission_error = None
        self.log.debug("Returned to compose step")
        return True

    async def confirm_send(self) -> bool:
        if self.closed or self.step is not SendStep.CONFIRM:
            return False
        if self.is_submitting:
            self.log.debug("Submission already in flight, ignoring confirm")
            return False

        draft = self.confirmed_draft or self.draft
        self.is_submitting = True
        self.submission_error = None
        try:
            receipt = await asyncio.wait_for(
                self._submitter.submit(draft), timeout=self.submit_timeout
            )
        except asyncio.TimeoutError:
            self.submission_error = SubmissionFailed(
                "Submission timed out", reason=SubmissionFailed.TIMEOUT
            )
        except NetworkError as e:
            self.submission_error = SubmissionFailed(
                str(e), reason=SubmissionFailed.NETWORK
            )
        except SubmissionFailed as e:
            self.submission_error = e
        except Exception as e:
            self.log.exception("Unexpected error from submitter")
            self.submission_error = SubmissionFailed(
                str(e) or type(e).__name__, reason=SubmissionFailed.UNEXPECTED
            )
        finally:
            self.is_submitting = False

        if self.submission_error is not None:
            self.log.error(
                "Submission failed (%s): %s",
                self.submission_error.reason,
                self.submission_error,
            )
            return False

        if self.closed:
            return False

        self.receipt = receipt
        self.step = SendStep.RESULT
        self.log.info("Transaction submitted: %s", receipt.tx_id)
        return True

    def usd_value(self, value: Decimal) -> Decimal | None:
        return to_usd(value, self.exchange_rate)

    def close(self) -> None:
        if self.is_submitting:
            self.log.warning("Send workflow closed while a submission is in flight")
        self.closed = True
        self.draft = TransactionDraft()
        self.validation = SendValidationResult()
        self.confirmed_draft = None
        self.receipt = None
        self.submission_error = None
        self.log.debug("Send workflow closed at %s step", self.step.value)
