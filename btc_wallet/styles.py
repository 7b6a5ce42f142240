"""CSS styles for the BTC Quick Wallet application."""

CSS = """
Screen {
    background: #1e1e2e;
}

Header {
    background: #181825;
    text-style: bold;
    padding: 0 1;
    height: 3;
}

Footer {
    background: #181825;
    height: 2;
}

DataTable {
    background: #1e1e2e;
    border: solid #f7931a;
    height: auto;
    max-height: 14;
}

Button {
    background: transparent;
    color: #f7931a;
    border: none;
    height: 3;
    min-height: 3;
    min-width: 14;
    padding: 0 1;
    margin: 0;
    content-align: center middle;
}

Button:hover {
    background: #2a2a3c;
}

Button:focus {
    background: #f7931a;
    color: #0f172a;
    text-style: bold;
}

Button.-primary {
    background: #f7931a;
    color: #0f172a;
    text-style: bold;
}

Horizontal {
    height: auto;
    margin: 0 0 1 0;
}

Horizontal > * {
    height: auto;
}

Vertical {
    height: auto;
}

#dashboard-title, #history-title, #send-title, #confirm-title, #result-title {
    text-style: bold;
    color: #fbbf24;
    margin-bottom: 1;
    border-bottom: solid #f7931a;
    padding-bottom: 0;
}

#balance-info, #address-info {
    padding: 0 1;
    background: #181825;
    border: solid #f7931a;
    margin: 0 0 1 0;
}

#confirm-total {
    border-top: solid #3b3b52;
    padding-top: 1;
}

Label {
    color: #e2e8f0;
}

Input {
    background: #181825;
    border: solid #f7931a;
    color: #e2e8f0;
    padding: 0 1;
    min-height: 1;
}

Static {
    color: #a6adc8;
}

.field-error {
    height: auto;
    margin: 0 0 1 0;
}

ModalScreen {
    align: center middle;
}

#send-steps {
    width: 72;
    height: auto;
    border: solid #f7931a;
    background: #181825;
    padding: 1 2;
}

#result-tx-id {
    background: #181825;
    border: solid #3b82f6;
    padding: 0 1;
    margin: 1 0;
    color: #e2e8f0;
}
"""
