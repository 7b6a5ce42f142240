import asyncio
import secrets
from decimal import Decimal

import pytest

from btc_wallet.features.send.workflow import (
    SendWorkflow,
    SubmissionFailed,
    SubmissionReceipt,
)

SEGWIT_ADDRESS = "bc1q9wukxzkeegx5mjgukyl4ghvvyrz3s8rh78cze6"
LEGACY_ADDRESS = "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa"
SCRIPT_ADDRESS = "3J98t1WpEZ73CNmQviecrnyiWrnqRhWNLy"


class RecordingSubmitter:
    """Test double that records every submitted draft."""

    def __init__(self, delay: float = 0.01):
        self.delay = delay
        self.calls = []

    async def submit(self, draft):
        self.calls.append(draft)
        await asyncio.sleep(self.delay)
        return SubmissionReceipt(
            tx_id=secrets.token_hex(32),
            recipient_address=draft.recipient_address,
            amount=draft.amount,
            fee=draft.fee,
        )


class FailingSubmitter:
    def __init__(self, error: Exception):
        self.error = error
        self.calls = 0

    async def submit(self, draft):
        self.calls += 1
        await asyncio.sleep(0)
        raise self.error


@pytest.fixture
def balance():
    """Fixture providing the demo account balance"""
    return Decimal("1.80000000")


@pytest.fixture
def segwit_address():
    return SEGWIT_ADDRESS


@pytest.fixture
def submitter():
    return RecordingSubmitter()


@pytest.fixture
def workflow(balance, submitter):
    """Fixture providing a freshly opened send workflow"""
    return SendWorkflow(
        balance=balance,
        sender_address=SEGWIT_ADDRESS,
        submitter=submitter,
    )


@pytest.fixture
def rejected_error():
    return SubmissionFailed("Transaction rejected by node", reason=SubmissionFailed.REJECTED)


@pytest.fixture(autouse=True)
def isolate_wallet_environment(monkeypatch):
    """Keep developer BTC_WALLET_* settings out of the tests."""
    for name in (
        "BTC_WALLET_SUBMIT_DELAY",
        "BTC_WALLET_SUBMIT_TIMEOUT",
        "BTC_WALLET_RATE_URL",
        "BTC_WALLET_FETCH_RATE",
        "BTC_WALLET_LOG_LEVEL",
        "BTC_WALLET_LOG_STDOUT",
        "BTC_WALLET_LOG_FORMAT",
        "BTC_WALLET_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def make_workflow(balance):
    """Fixture providing a factory for workflows with a custom submitter"""

    def factory(submitter=None, **kwargs):
        kwargs.setdefault("balance", balance)
        kwargs.setdefault("sender_address", SEGWIT_ADDRESS)
        return SendWorkflow(submitter=submitter or RecordingSubmitter(), **kwargs)

    return factory


@pytest.fixture
def failing_submitter(rejected_error):
    return FailingSubmitter(rejected_error)
