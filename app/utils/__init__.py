"""Utilities package"""

from .helpers import current_millis, generate_order_number, generate_record_name

__all__ = [
    "current_millis",
    "generate_order_number",
    "generate_record_name"
]
