"""
Validation utilities for the reservation engine
"""

import re
from typing import List


class PhoneValidator:
    """Phone number utilities for Vietnamese numbers"""

    @classmethod
    def extract_digits(cls, phone: str) -> str:
        """Extract only digits from phone number"""
        if not phone:
            return ""

        return re.sub(r'\D', '', phone)

    @classmethod
    def lookup_variants(cls, phone: str) -> List[str]:
        """
        Every stored form a guest's number may take.

        ``0912345678``, ``84912345678`` and ``+84912345678`` all name the
        same subscriber, so lookups match against all three.
        """
        digits = cls.extract_digits(phone)
        if not digits:
            return []

        if digits.startswith('84'):
            local = digits[2:]
        elif digits.startswith('0'):
            local = digits[1:]
        else:
            local = digits

        variants = [f"0{local}", f"84{local}", f"+84{local}"]
        stripped = phone.strip()
        if stripped not in variants:
            variants.append(stripped)
        return variants
