"""Record-account program model: keys, errors, record state, instructions and processing."""

__version__ = "0.3.0"

__all__ = ["errors", "instruction", "processor", "pubkey", "state"]