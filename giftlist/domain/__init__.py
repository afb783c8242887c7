"""Domain models and types for giftlist.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Validation and money rules separated from the HTTP client and CLI
"""

from giftlist.domain.models import Cpf, DisplayDate, IsoInstant, Money, Slug

__all__ = ["Money", "Cpf", "DisplayDate", "IsoInstant", "Slug"]
