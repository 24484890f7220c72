from __future__ import annotations

import pytest

from weather_insights.providers.weatherapi import WeatherApiProvider
from tests.factories import BASE_URL


@pytest.fixture
def provider() -> WeatherApiProvider:
    """Provider pointed at the stub host; pair with the ``requests_mock`` fixture."""
    return WeatherApiProvider(api_key="test-key", base_url=BASE_URL)
