"""
Helper utilities
"""

import random
import time


def current_millis() -> int:
    """Current Unix time in milliseconds"""
    return int(time.time() * 1000)


def generate_order_number(prefix: str = "QC") -> str:
    """
    Generate order number

    Format: <prefix><ms timestamp><3-digit random suffix>. Uniqueness is
    probabilistic only.

    Args:
        prefix: Order number prefix

    Returns:
        Order number
    """
    return f"{prefix}{current_millis()}{random.randint(0, 999):03d}"


def generate_record_name(label: str) -> str:
    """Display name for records that have no natural name"""
    return f"{label} {current_millis()}"
