"""Ride-hail commute cost estimates.

Cost model: base fare + per-mile * miles + per-minute * minutes, with the
high estimate scaled by a surge multiplier. Distance and duration come
from the caller; looking them up against a maps service is not done here.
"""

from typing import Dict

import yaml

from .config import get_package_data_dir
from .schemas import CityCostModel, CommuteEstimate


class UnknownCityError(LookupError):
    """Raised when no cost model exists for a city."""
    pass


def load_city_cost_models() -> Dict[str, CityCostModel]:
    """Load city cost models from data/city-cost-models.yaml."""
    path = get_package_data_dir() / "city-cost-models.yaml"
    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}
    return {city: CityCostModel(city=city, **values) for city, values in raw.items()}


def get_city_cost_model(city: str) -> CityCostModel:
    """Look up a city's cost model (case-insensitive)."""
    models = load_city_cost_models()
    for name, model in models.items():
        if name.lower() == city.strip().lower():
            return model
    raise UnknownCityError(f"No commute cost model for '{city}'. Known: {', '.join(sorted(models))}")


def estimate_commute(miles: float, minutes: float, model: CityCostModel, surge: float = 1.0) -> CommuteEstimate:
    """Estimate a trip's cost range in cents (truncated).

    Raises:
        ValueError: negative distance/duration or non-positive surge
    """
    if miles < 0 or minutes < 0:
        raise ValueError("distance and duration must not be negative")
    if surge <= 0:
        raise ValueError("surge must be positive")

    low = model.base_fare_cents + model.per_mile_cents * miles + model.per_minute_cents * minutes
    high = low * surge
    return CommuteEstimate(
        distance_miles=miles,
        duration_minutes=minutes,
        est_cost_low_cents=int(low),
        est_cost_high_cents=int(high),
    )
