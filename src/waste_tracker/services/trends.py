"""Trend classification and next-week forecasting."""

import math
from collections.abc import Mapping, Sequence

from waste_tracker.domain.analytics import TrendForecast
from waste_tracker.domain.enums import Trend, WasteType

TREND_WINDOW_DAYS = 14
FORECAST_DAYS = 7
TREND_THRESHOLD = 0.05
MIN_DATA_POINTS = 2
MIN_CONFIDENCE = 40
MAX_CONFIDENCE = 95


def predict_trend(
    series_per_type: Mapping[WasteType, Sequence[float]],
) -> dict[WasteType, TrendForecast]:
    """Forecast next week's weight and classify the trend per waste type.

    Each series holds daily weights in ascending date order. Only the most
    recent ``TREND_WINDOW_DAYS`` values are used and types with fewer than two
    values are left out of the result.
    """
    forecasts: dict[WasteType, TrendForecast] = {}
    for waste_type, series in series_per_type.items():
        window = [float(value) for value in series][-TREND_WINDOW_DAYS:]
        if len(window) < MIN_DATA_POINTS:
            continue
        forecasts[waste_type] = TrendForecast(
            next_week=_forecast_next_week(window),
            trend=_classify_trend(window),
            confidence=_confidence(window),
            data_points=len(window),
        )
    return forecasts


def _linear_regression(y: list[float]) -> tuple[float, float]:
    """Return (slope, intercept) of the least-squares fit over x = 0..n-1."""
    n = len(y)
    x = range(n)
    sum_x = sum(x)
    sum_y = sum(y)
    sum_xx = sum(xi * xi for xi in x)
    sum_xy = sum(xi * yi for xi, yi in zip(x, y, strict=True))
    denom = n * sum_xx - sum_x * sum_x
    if denom == 0:
        return 0.0, sum_y / n
    slope = (n * sum_xy - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def _forecast_next_week(window: list[float]) -> float:
    slope, intercept = _linear_regression(window)
    n = len(window)
    projected = (
        max(0.0, slope * (n + offset) + intercept) for offset in range(FORECAST_DAYS)
    )
    return round(sum(projected), 2)


def _classify_trend(window: list[float]) -> Trend:
    half = len(window) // 2
    earlier = _mean(window[:half])
    later = _mean(window[half:])
    if earlier == 0:
        return Trend.INCREASING if later > 0 else Trend.STABLE
    change = (later - earlier) / earlier
    if change > TREND_THRESHOLD:
        return Trend.INCREASING
    if change < -TREND_THRESHOLD:
        return Trend.DECREASING
    return Trend.STABLE


def _confidence(window: list[float]) -> int:
    n = len(window)
    mean = _mean(window)
    if mean == 0:
        variation = 0.0
    else:
        variance = sum((value - mean) ** 2 for value in window) / n
        variation = math.sqrt(variance) / abs(mean)
    coverage = min(n, TREND_WINDOW_DAYS) / TREND_WINDOW_DAYS
    raw = MIN_CONFIDENCE + (MAX_CONFIDENCE - MIN_CONFIDENCE) * coverage / (
        1 + variation
    )
    return int(min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, round(raw))))


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0
