"""Twiddle Logging — structlog setup driven by ``twiddle.logging``."""

from twiddle.logging.structlog_adapter import StructlogAdapter, configure_logging

__all__ = ["StructlogAdapter", "configure_logging"]
