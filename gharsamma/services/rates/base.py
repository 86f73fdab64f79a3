from __future__ import annotations

"""Rate source abstraction.

A rate source hands out a complete NPR-relative rate table plus the matching
symbol table. Conversion functions stay pure and take the table as input.
"""
from abc import ABC, abstractmethod
from typing import Mapping


class RateSource(ABC):
    base_currency: str = "NPR"

    @abstractmethod
    def get_rates(self) -> Mapping[str, float]:
        """Return units of each currency per 1 NPR."""
        raise NotImplementedError

    @abstractmethod
    def get_symbols(self) -> Mapping[str, str]:
        raise NotImplementedError
