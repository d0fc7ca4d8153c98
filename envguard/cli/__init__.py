"""Command line interface for EnvGuard."""
