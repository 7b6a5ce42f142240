"""Send dialog for BTC Quick Wallet: compose, confirm and result steps."""

from __future__ import annotations

from decimal import Decimal
from typing import cast

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, ContentSwitcher, Input, Label, Static

from btc_wallet.features.send.service import describe_receipt, format_btc, format_usd
from btc_wallet.features.send.validators import FIELD_AMOUNT, FIELD_RECIPIENT, FeeTier
from btc_wallet.features.send.workflow import SendStep, SendWorkflow, SubmissionReceipt
from btc_wallet.shared.clipboard import copy_text
from btc_wallet.shared.logging import format_error_for_user, get_logger

logger = get_logger(__name__)

STEP_IDS = {
    SendStep.COMPOSE: "compose-step",
    SendStep.CONFIRM: "confirm-step",
    SendStep.RESULT: "result-step",
}


class BaseModalScreen(ModalScreen):
    BINDINGS = [
        ("escape", "close", "Close"),
        ("tab", "app.focus_next", "Next"),
        ("shift+tab", "app.focus_previous", "Previous"),
    ]


class SendScreen(BaseModalScreen):
    def __init__(self, workflow: SendWorkflow):
        super().__init__()
        self.workflow = workflow

    def compose(self) -> ComposeResult:
        with ContentSwitcher(initial=STEP_IDS[SendStep.COMPOSE], id="send-steps"):
            with Vertical(id=STEP_IDS[SendStep.COMPOSE]):
                yield Label("📤 Send Bitcoin", id="send-title")
                yield Label("Recipient Address")
                yield Input(placeholder="Enter Bitcoin address", id="recipient-input")
                yield Static("", id="recipient-error", classes="field-error")
                yield Label("Amount (BTC)")
                yield Input(placeholder="0.00000000", id="amount-input")
                yield Static("", id="amount-error", classes="field-error")
                yield Label("Transaction Speed")
                yield Horizontal(
                    *(
                        Button(tier.label, id=f"tier-{tier.value}")
                        for tier in FeeTier
                    ),
                    id="tier-buttons",
                )
                yield Static("", id="estimated-fee")
                yield Button("Continue", id="continue-button", variant="primary")
            with Vertical(id=STEP_IDS[SendStep.CONFIRM]):
                yield Label("✅ Confirm Transaction", id="confirm-title")
                yield Static("", id="confirm-from")
                yield Static("", id="confirm-recipient")
                yield Static("", id="confirm-amount")
                yield Static("", id="confirm-fee")
                yield Static("", id="confirm-total")
                yield Static("", id="submission-error", classes="field-error")
                yield Horizontal(
                    Button("Back", id="back-button"),
                    Button("Confirm & Send", id="send-button", variant="primary"),
                )
            with Vertical(id=STEP_IDS[SendStep.RESULT]):
                yield Label("✅ Transaction Submitted", id="result-title")
                yield Static(
                    "Your transaction has been submitted for signing and "
                    "broadcasting to the network."
                )
                yield Static("", id="result-tx-id")
                yield Static("", id="result-summary")
                yield Horizontal(
                    Button("📋 Copy ID", id="copy-tx-button"),
                    Button("Done", id="done-button", variant="primary"),
                )

    def on_mount(self) -> None:
        self._refresh_compose()

    def _show_step(self, step: SendStep) -> None:
        cast(ContentSwitcher, self.query_one("#send-steps")).current = STEP_IDS[step]

    def _refresh_compose(self) -> None:
        errors = self.workflow.validation
        for field_name, widget_id in (
            (FIELD_RECIPIENT, "#recipient-error"),
            (FIELD_AMOUNT, "#amount-error"),
        ):
            error = errors.get(field_name)
            cast(Static, self.query_one(widget_id)).update(
                f"[red]{error.message}[/red]" if error else ""
            )

        selected = self.workflow.draft.fee_tier
        for tier in FeeTier:
            button = cast(Button, self.query_one(f"#tier-{tier.value}"))
            button.variant = "primary" if tier is selected else "default"

        cast(Static, self.query_one("#estimated-fee")).update(
            f"Estimated Fee: {format_btc(self.workflow.fee)}"
        )

    def _btc_line(self, label: str, value: Decimal) -> str:
        usd = format_usd(self.workflow.usd_value(value))
        line = f"{label}: {format_btc(value)}"
        return f"{line}  [dim]{usd}[/dim]" if usd else line

    def _refresh_confirm(self) -> None:
        draft = self.workflow.confirmed_draft or self.workflow.draft
        amount = draft.amount or Decimal(0)
        cast(Static, self.query_one("#confirm-from")).update(
            f"Sending from: {self.workflow.sender_address}"
        )
        cast(Static, self.query_one("#confirm-recipient")).update(
            f"Recipient: {draft.recipient_address}"
        )
        cast(Static, self.query_one("#confirm-amount")).update(
            self._btc_line("Amount", amount)
        )
        cast(Static, self.query_one("#confirm-fee")).update(
            self._btc_line("Fee", draft.fee)
        )
        cast(Static, self.query_one("#confirm-total")).update(
            f"[b]{self._btc_line('Total', draft.total)}[/b]"
        )
        self._refresh_submission_state()

    def _refresh_submission_state(self) -> None:
        submitting = self.workflow.is_submitting
        cast(Button, self.query_one("#back-button")).disabled = submitting
        send_button = cast(Button, self.query_one("#send-button"))
        send_button.disabled = submitting
        send_button.label = "Sending..." if submitting else "Confirm & Send"

        error = self.workflow.submission_error
        cast(Static, self.query_one("#submission-error")).update(
            f"[red]{format_error_for_user(error)}[/red]" if error else ""
        )

    def _refresh_result(self) -> None:
        receipt = self.workflow.receipt
        if receipt is None:
            return
        cast(Static, self.query_one("#result-tx-id")).update(
            f"Transaction ID: {receipt.tx_id}"
        )
        cast(Static, self.query_one("#result-summary")).update(describe_receipt(receipt))

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "recipient-input":
            self.workflow.update_recipient(event.value)
        elif event.input.id == "amount-input":
            self.workflow.update_amount(event.value)
        else:
            return
        self._refresh_compose()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id in ("recipient-input", "amount-input"):
            self._continue()

    def _continue(self) -> None:
        if self.workflow.request_confirm():
            self._refresh_confirm()
            self._show_step(SendStep.CONFIRM)
        self._refresh_compose()

    async def _send(self) -> None:
        sent = await self.workflow.confirm_send()
        if sent:
            self._refresh_result()
            self._show_step(SendStep.RESULT)
        else:
            self._refresh_submission_state()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("tier-"):
            self.workflow.select_fee_tier(button_id.removeprefix("tier-"))
            self._refresh_compose()
        elif button_id == "continue-button":
            self._continue()
        elif button_id == "back-button":
            if self.workflow.go_back():
                self._show_step(SendStep.COMPOSE)
                self._refresh_compose()
        elif button_id == "send-button":
            if self.workflow.step is SendStep.CONFIRM and not self.workflow.is_submitting:
                cast(Button, self.query_one("#back-button")).disabled = True
                send_button = cast(Button, self.query_one("#send-button"))
                send_button.disabled = True
                send_button.label = "Sending..."
                self.run_worker(self._send(), group="send-submit")
        elif button_id == "copy-tx-button":
            self._copy_tx_id()
        elif button_id == "done-button":
            self.action_close()

    def _copy_tx_id(self) -> None:
        receipt = self.workflow.receipt
        if receipt is None:
            return
        result = copy_text(receipt.tx_id)
        if result.success:
            self.notify("Transaction ID copied to clipboard!", severity="information")
        else:
            self.notify("Clipboard is not available", severity="warning")

    def action_close(self) -> None:
        receipt: SubmissionReceipt | None = self.workflow.receipt
        self.workflow.close()
        self.dismiss(receipt)
