"""Check pack management utilities."""

from .check_pack_manager import CheckPack, CheckPackError, CheckPackManager

__all__ = [
    "CheckPack",
    "CheckPackError",
    "CheckPackManager",
]
