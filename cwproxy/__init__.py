"""In-memory whitelist and subkey proxy contracts with allowances and permissions."""

__version__ = "0.1.0"
__all__ = ["chain", "errors", "state", "subkeys", "whitelist"]