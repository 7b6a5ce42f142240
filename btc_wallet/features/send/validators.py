"""Send-flow validators for BTC Quick Wallet.

Every check here is a pure function over its arguments. Failures are returned
as ``FieldError`` values keyed by form field, never raised.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import MAX_EMAX, Decimal, getcontext, localcontext
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from btc_wallet.features.send.workflow import TransactionDraft

BTC_DECIMALS = 8
BTC_QUANT = Decimal(1).scaleb(-BTC_DECIMALS)

# Structural filter only: prefix, length and character set. No checksum.
BTC_ADDRESS_PATTERN = re.compile(r"^(bc1|[13])[a-zA-HJ-NP-Z0-9]{25,39}$")

# Plain decimal notation only; exponents such as "1e6" are not amounts.
AMOUNT_PATTERN = re.compile(r"(?P<whole>[0-9]*)(?:\.(?P<fraction>[0-9]*))?")

FIELD_RECIPIENT = "recipient"
FIELD_AMOUNT = "amount"

ADDRESS_FORMAT_MESSAGE = "Invalid Bitcoin address format."
INVALID_AMOUNT_MESSAGE = "Please enter a valid amount greater than 0."
INSUFFICIENT_BALANCE_MESSAGE = "Insufficient balance for this transaction."


class FeeTier(Enum):
    ECONOMY = "economy"
    NORMAL = "normal"
    PRIORITY = "priority"

    @property
    def label(self) -> str:
        return self.value.title()

    @classmethod
    def from_value(cls, value: "str | FeeTier") -> "FeeTier":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


FEE_RATES: dict[FeeTier, Decimal] = {
    FeeTier.ECONOMY: Decimal("0.00001000"),
    FeeTier.NORMAL: Decimal("0.00003200"),
    FeeTier.PRIORITY: Decimal("0.00010000"),
}


class ErrorKind(Enum):
    INVALID_FORMAT = "invalid_format"
    ADDRESS_FORMAT = "address_format"
    INSUFFICIENT_BALANCE = "insufficient_balance"


@dataclass(frozen=True)
class FieldError:
    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class SendValidationResult:
    field_errors: dict[str, FieldError] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.field_errors

    def get(self, field_name: str) -> FieldError | None:
        return self.field_errors.get(field_name)

    def has_error(self, field_name: str) -> bool:
        return field_name in self.field_errors

    def messages(self) -> dict[str, str]:
        return {name: error.message for name, error in self.field_errors.items()}


def fee_for_tier(tier: FeeTier) -> Decimal:
    return FEE_RATES[tier]


def _btc_context(*values: Decimal):
    # Enough precision to keep eight places on every operand, however large.
    context = getcontext().copy()
    widest = max((value.adjusted() for value in values if value), default=0)
    context.prec = max(context.prec, widest + BTC_DECIMALS + 2)
    context.Emax = MAX_EMAX
    return localcontext(context)


def btc_sum(*values: Decimal) -> Decimal:
    with _btc_context(*values):
        return sum(values, Decimal(0)).quantize(BTC_QUANT)


def validate_address(address: str) -> bool:
    if not isinstance(address, str):
        return False
    return BTC_ADDRESS_PATTERN.fullmatch(address) is not None


def parse_amount(amount_text: str) -> Decimal | None:
    """Parse user input into a positive BTC amount.

    Accepts plain decimal notation (``1``, ``0.5``, ``.5``) and returns
    ``None`` for anything else, for non-positive values, and for values with
    more than eight significant fractional digits. Trailing zeros after the
    point do not count.
    """
    if not amount_text:
        return None

    text = amount_text.strip()
    match = AMOUNT_PATTERN.fullmatch(text)
    if match is None or not (match["whole"] or match["fraction"]):
        return None

    if len((match["fraction"] or "").rstrip("0")) > BTC_DECIMALS:
        return None

    amount = Decimal(text)
    if amount <= 0:
        return None
    return amount


def validate_amount(
    amount_text: str, fee: Decimal, balance: Decimal
) -> FieldError | None:
    amount = parse_amount(amount_text)
    if amount is None:
        return FieldError(ErrorKind.INVALID_FORMAT, INVALID_AMOUNT_MESSAGE)

    # balance - fee is exact; amount itself may be arbitrarily long.
    if amount > balance - fee:
        return FieldError(
            ErrorKind.INSUFFICIENT_BALANCE, INSUFFICIENT_BALANCE_MESSAGE
        )

    return None


def validate_recipient(address: str) -> FieldError | None:
    if validate_address(address):
        return None
    return FieldError(ErrorKind.ADDRESS_FORMAT, ADDRESS_FORMAT_MESSAGE)


def validate_draft(draft: "TransactionDraft", balance: Decimal) -> SendValidationResult:
    errors: dict[str, FieldError] = {}

    recipient_error = validate_recipient(draft.recipient_address)
    if recipient_error is not None:
        errors[FIELD_RECIPIENT] = recipient_error

    amount_error = validate_amount(draft.amount_text, draft.fee, balance)
    if amount_error is not None:
        errors[FIELD_AMOUNT] = amount_error

    return SendValidationResult(field_errors=errors)
