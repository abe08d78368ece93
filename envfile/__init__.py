"""Load environment variables from .env files, and run commands with them."""

__version__ = "0.1.0"
__all__ = ["cli", "errors", "find", "iter", "loader", "parse"]