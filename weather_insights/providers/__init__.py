from .base import ProviderError, QuotaExceeded, RequestCancelled, RequestConfig, UpstreamError, WeatherProvider
from .weatherapi import WeatherApiProvider

__all__ = [
    "ProviderError",
    "QuotaExceeded",
    "RequestCancelled",
    "RequestConfig",
    "UpstreamError",
    "WeatherApiProvider",
    "WeatherProvider",
]
