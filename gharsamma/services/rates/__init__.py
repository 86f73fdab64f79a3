from .base import RateSource
from .providers import DatabaseRateSource, StaticRateSource, make_rate_source

__all__ = ["RateSource", "StaticRateSource", "DatabaseRateSource", "make_rate_source"]
