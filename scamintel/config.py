"""
Configuration Module
=====================
Loads environment variables from .env file for:
- MIN_BANK_ACCOUNT_DIGITS: Shortest digit run accepted as a bank account
- MAX_INPUT_CHARS: Messages are truncated to this length before scanning
- SESSION_FILE: Optional JSON file backing the session store
- LOG_LEVEL: Logging level used by the command-line entry point

The bank-account threshold defaults to 9 digits (the permissive policy).
Some deployments prefer 12; set MIN_BANK_ACCOUNT_DIGITS=12 to get it.

Raises RuntimeError at import if a value is malformed, preventing the
engine from starting in a misconfigured state.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r} — check .env file")


MIN_BANK_ACCOUNT_DIGITS: int = _int_env("MIN_BANK_ACCOUNT_DIGITS", 9)
MAX_INPUT_CHARS: int = _int_env("MAX_INPUT_CHARS", 10000)
SESSION_FILE: str = os.getenv("SESSION_FILE", "")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

if not 1 <= MIN_BANK_ACCOUNT_DIGITS <= 18:
    raise RuntimeError("MIN_BANK_ACCOUNT_DIGITS must be between 1 and 18 — check .env file")

if MAX_INPUT_CHARS <= 0:
    raise RuntimeError("MAX_INPUT_CHARS must be positive — check .env file")
