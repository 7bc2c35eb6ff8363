"""Centralized configuration for the UV Drafts core.

Typed constants with environment overrides. Safe defaults mean nothing has to
be configured for the pure helpers to work; a local ``.env`` is honoured the
same way the dashboard glue reads it.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# --- Links ---
DEFAULT_SORA_ORIGIN: str = "https://sora.chatgpt.com"
SORA_ORIGIN: str = os.getenv("UVDRAFTS_SORA_ORIGIN", DEFAULT_SORA_ORIGIN)

# --- Cards ---
PREVIEW_MAX_LEN: int = int(os.getenv("UVDRAFTS_PREVIEW_MAX_LEN", "60"))
PREVIEW_FALLBACK_TEXT: str = "Untitled"

# --- Composer ---
GENS_COUNT_MIN: int = 1
GENS_COUNT_MAX_DEFAULT: int = 10
GENS_COUNT_MAX_ULTRA: int = 40
SEED_MAX_DIGITS: int = 10

# --- Search ---
DURATION_EPSILON: float = 0.01

# --- Extension ---
DASHBOARD_PAGE: str = "dashboard.html"
