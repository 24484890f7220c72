from __future__ import annotations

import os


os.environ.setdefault("WEATHERAPI_KEY", "test-key")
os.environ.setdefault("WEATHER_INSIGHTS_LOG_LEVEL", "DEBUG")
