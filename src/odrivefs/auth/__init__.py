"""Public auth exports for odrivefs."""

from __future__ import annotations

from .token_source import CachedToken, StaticTokenSource, TokenSource

__all__ = ["TokenSource", "StaticTokenSource", "CachedToken"]
