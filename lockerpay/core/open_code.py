from __future__ import annotations

import secrets

OPEN_CODE_MIN = 100000
OPEN_CODE_MAX = 999999


def generate_open_code() -> str:
    """Six decimal digits, uniform over [100000, 999999], so never a leading zero."""
    return str(OPEN_CODE_MIN + secrets.randbelow(OPEN_CODE_MAX - OPEN_CODE_MIN + 1))
