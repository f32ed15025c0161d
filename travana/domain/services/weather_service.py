from __future__ import annotations

import logging
import random
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List

from travana.api.models.schemas import CurrentWeather, DailyForecast, WeatherData, WeatherRecommendations
from travana.core.config import settings
from travana.external import openweather_api

logger = logging.getLogger(__name__)

# The forecast endpoint returns 8 three-hour slots per day
SLOTS_PER_DAY = 8

MAX_FORECAST_DAYS = 16


def parse_current(data: Dict[str, Any]) -> CurrentWeather:
    main = data["main"]
    weather = data["weather"][0]
    return CurrentWeather(
        temperature=round(main["temp"]),
        feelsLike=round(main["feels_like"]),
        humidity=main["humidity"],
        # m/s -> km/h
        windSpeed=round(data.get("wind", {}).get("speed", 0) * 3.6),
        description=weather["description"],
        icon=weather["icon"],
    )


def parse_forecast(data: Dict[str, Any], days: int) -> List[DailyForecast]:
    daily = (data.get("list") or [])[::SLOTS_PER_DAY][:days]
    return [
        DailyForecast(
            date=datetime.fromtimestamp(item["dt"], tz=timezone.utc).date().isoformat(),
            high=round(item["main"]["temp_max"]),
            low=round(item["main"]["temp_min"]),
            description=item["weather"][0]["description"],
            icon=item["weather"][0]["icon"],
            precipitation=item.get("pop", 0) * 100,
        )
        for item in daily
    ]


def generate_recommendations(current: CurrentWeather, forecast: List[DailyForecast]) -> WeatherRecommendations:
    if forecast:
        avg_high = sum(day.high for day in forecast) / len(forecast)
        avg_temp = (current.temperature + avg_high) / 2
    else:
        avg_temp = current.temperature
    has_rain = any(day.precipitation > 30 for day in forecast)

    if avg_temp < 10:
        clothing = ["Warm jacket", "Scarf", "Gloves", "Thermal underwear"]
    elif avg_temp < 20:
        clothing = ["Light jacket", "Long sleeves", "Comfortable pants"]
    else:
        clothing = ["T-shirts", "Shorts", "Light clothing"]
    if has_rain:
        clothing += ["Rain jacket", "Umbrella", "Waterproof shoes"]

    if avg_temp > 20 and not has_rain:
        activities = ["Outdoor dining", "Walking tours", "Beach activities", "Hiking"]
    elif avg_temp > 15:
        activities = ["Museum visits", "Indoor attractions", "Shopping", "Café hopping"]
    else:
        activities = ["Indoor activities", "Spa visits", "Shopping malls", "Restaurants"]

    packing = ["Phone charger", "Camera", "Travel documents", "Medications"]
    if has_rain:
        packing += ["Waterproof bag", "Extra socks"]
    if avg_temp > 25:
        packing += ["Sunscreen", "Hat", "Sunglasses"]

    return WeatherRecommendations(clothing=clothing, activities=activities, packing=packing)


def fallback_weather(location: str, days: int) -> WeatherData:
    today = date.today()
    forecast = [
        DailyForecast(
            date=(today + timedelta(days=i)).isoformat(),
            high=22 + random.randint(0, 9),
            low=15 + random.randint(0, 7),
            description="Partly cloudy",
            icon="02d",
            precipitation=random.random() * 30,
        )
        for i in range(max(days, 0))
    ]
    return WeatherData(
        location=location,
        current=CurrentWeather(
            temperature=24, feelsLike=26, humidity=65, windSpeed=12, description="Partly cloudy", icon="02d"
        ),
        forecast=forecast,
        recommendations=WeatherRecommendations(
            clothing=["Light jacket", "Comfortable shoes", "T-shirts"],
            activities=["Walking tours", "Museum visits", "Outdoor dining"],
            packing=["Phone charger", "Camera", "Travel documents"],
        ),
    )


class WeatherService:
    async def get_weather_forecast(self, location: str, days: int = 7) -> WeatherData:
        days = max(0, min(days, MAX_FORECAST_DAYS))
        if not settings.openweather_api_key:
            logger.info("OpenWeather API key not configured; using fallback weather for '%s'", location)
            return fallback_weather(location, days)

        coords = await openweather_api.geocode(location)
        if not coords:
            return fallback_weather(location, days)

        try:
            current = parse_current(await openweather_api.current_weather(*coords))
            forecast = parse_forecast(await openweather_api.forecast(*coords), days)
        except Exception as exc:  # pragma: no cover - network dependent
            logger.warning("Weather lookup failed for '%s': %s", location, exc)
            return fallback_weather(location, days)

        return WeatherData(
            location=location,
            current=current,
            forecast=forecast,
            recommendations=generate_recommendations(current, forecast),
        )
