"""Drives the send dialog through the Textual test pilot."""

import asyncio

from textual.widgets import Button, ContentSwitcher, DataTable, Input

from btc_wallet.__main__ import WalletApp
from btc_wallet.features.send.screen import SendScreen
from btc_wallet.features.send.workflow import SendStep
from btc_wallet.shared.config import WalletConfig

RECIPIENT = "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa"


def make_app():
    return WalletApp(config=WalletConfig(submit_delay=0.01, fetch_exchange_rate=False))


def current_step(screen):
    return screen.query_one("#send-steps", ContentSwitcher).current


async def open_send_screen(app, pilot):
    app.action_send()
    await pilot.pause()
    assert isinstance(app.screen, SendScreen)
    return app.screen


async def fill_compose(screen, pilot, recipient, amount):
    screen.query_one("#recipient-input", Input).value = recipient
    screen.query_one("#amount-input", Input).value = amount
    await pilot.pause()


def test_send_flow_reaches_result():
    async def scenario():
        app = make_app()
        async with app.run_test(size=(120, 50)) as pilot:
            screen = await open_send_screen(app, pilot)
            await fill_compose(screen, pilot, RECIPIENT, "0.1")

            screen.query_one("#continue-button", Button).press()
            await pilot.pause()
            assert screen.workflow.step is SendStep.CONFIRM
            assert current_step(screen) == "confirm-step"

            screen.query_one("#send-button", Button).press()
            await pilot.pause()
            await screen.workers.wait_for_complete()
            await pilot.pause()

            assert screen.workflow.step is SendStep.RESULT
            assert current_step(screen) == "result-step"
            assert screen.workflow.receipt.recipient_address == RECIPIENT

            await pilot.press("escape")
            await pilot.pause()
            assert not isinstance(app.screen, SendScreen)
            assert screen.workflow.closed is True

    asyncio.run(scenario())


def test_invalid_input_stays_on_compose():
    async def scenario():
        app = make_app()
        async with app.run_test(size=(120, 50)) as pilot:
            screen = await open_send_screen(app, pilot)
            await fill_compose(screen, pilot, "xyz123", "abc")

            screen.query_one("#continue-button", Button).press()
            await pilot.pause()

            assert screen.workflow.step is SendStep.COMPOSE
            assert current_step(screen) == "compose-step"
            assert set(screen.workflow.field_errors) == {"recipient", "amount"}

    asyncio.run(scenario())


def test_fee_tier_buttons_update_draft():
    async def scenario():
        app = make_app()
        async with app.run_test(size=(120, 50)) as pilot:
            screen = await open_send_screen(app, pilot)

            screen.query_one("#tier-priority", Button).press()
            await pilot.pause()

            assert screen.workflow.draft.fee_tier.value == "priority"
            assert screen.query_one("#tier-priority", Button).variant == "primary"
            assert screen.query_one("#tier-normal", Button).variant == "default"

    asyncio.run(scenario())


def test_send_flow_opens_once():
    async def scenario():
        app = make_app()
        async with app.run_test(size=(120, 50)) as pilot:
            screen = await open_send_screen(app, pilot)
            app.action_send()
            await pilot.pause()
            assert app.screen is screen
            assert len(app.screen_stack) == 2

    asyncio.run(scenario())


def test_dashboard_history_table():
    async def scenario():
        app = make_app()
        async with app.run_test(size=(120, 50)) as pilot:
            await pilot.pause()
            table = app.query_one("#history-table", DataTable)

            assert [key.value for key in table.columns] == [
                "date",
                "description",
                "counterparty",
                "amount",
                "fee",
                "status",
            ]
            assert table.row_count == len(app.wallet.recent_history())

    asyncio.run(scenario())
