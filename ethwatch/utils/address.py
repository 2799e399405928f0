from __future__ import annotations

import re


def validate_evm_address(address: str) -> bool:
    return bool(re.match(r"^0x[0-9a-fA-F]{40}$", address))


def addresses_match(a: str | None, b: str | None, case_sensitive: bool = True) -> bool:
    if a is None or b is None:
        return False
    if case_sensitive:
        return a == b
    return a.lower() == b.lower()


def tx_touches(tx, address: str, case_sensitive: bool = True) -> bool:
    """True if the transaction was sent from or to ``address``."""
    return addresses_match(tx.from_address, address, case_sensitive) or addresses_match(
        tx.to_address, address, case_sensitive
    )
