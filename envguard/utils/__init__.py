"""Utility helpers for EnvGuard."""
