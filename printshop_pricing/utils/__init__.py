from .logger import setup_logging
from .money import to_money, format_amount, format_delta

__all__ = ["setup_logging", "to_money", "format_amount", "format_delta"]
