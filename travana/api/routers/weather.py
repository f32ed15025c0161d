from typing import Optional

from fastapi import APIRouter, Depends, Query

from travana.api.models.schemas import WeatherData
from travana.core.errors import ValidationError
from travana.dependencies import get_weather_service
from travana.domain.services.weather_service import MAX_FORECAST_DAYS, WeatherService

router = APIRouter(prefix="/weather", tags=["weather"])


@router.get("", response_model=WeatherData)
async def weather(
    location: Optional[str] = None,
    days: int = Query(7, ge=1, le=MAX_FORECAST_DAYS),
    svc: WeatherService = Depends(get_weather_service),
):
    if not location:
        raise ValidationError("Location parameter is required")
    return await svc.get_weather_forecast(location, days)
