"""Packaged resources for Twiddle (default configuration)."""
