"""
Utility package initialization and exports
"""

# DateTime utilities
from .datetime_utils import DateTimeHelper

# Validators
from .validators import PhoneValidator

__all__ = [
    "DateTimeHelper",
    "PhoneValidator",
]
