"""Feature modules for BTC Quick Wallet.

- send: compose, confirm and submit an outbound payment
"""

from btc_wallet.features import send

__all__ = ["send"]
