"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol

from .models import FundDetails


class FundDetailsRepository(Protocol):
    """Provides one fund's metadata and raw NAV history."""

    def load_fund_details(self) -> FundDetails:
        ...
