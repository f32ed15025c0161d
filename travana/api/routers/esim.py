from typing import Optional

from fastapi import APIRouter, Depends

from travana.core.errors import ValidationError
from travana.dependencies import get_esim_service
from travana.domain.services.esim_service import ESIMService

router = APIRouter(prefix="/esim", tags=["esim"])


@router.get("")
async def esim(
    action: Optional[str] = None,
    country: Optional[str] = None,
    destination: Optional[str] = None,
    duration: int = 7,
    svc: ESIMService = Depends(get_esim_service),
):
    if action == "plans":
        if not country:
            raise ValidationError("Country parameter is required")
        return svc.get_esim_plans(country)

    if action == "recommendations":
        if not destination:
            raise ValidationError("Destination parameter is required")
        return svc.get_recommendations(destination, duration)

    if action == "global":
        return svc.get_global_plans()

    raise ValidationError("Invalid action parameter")
