"""Shared helpers: HTTP envelopes and time handling."""
