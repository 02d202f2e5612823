# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Helper key-update endpoint.
Thin HTTP layer — delegates ALL logic to KeyUpdateService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from app.core.dependencies import get_key_update_service
from app.core.exceptions import NotFoundError, ValidationError
from app.models.domain import BOSS_TYPES
from app.schemas.reminders import KeyUpdateResponse
from app.services.key_update_service import KeyUpdateService

router = APIRouter(tags=["Members"])


@router.get("/updateDataFromHelper", response_model=KeyUpdateResponse)
def update_data_from_helper(
    request: Request,
    umid: Optional[str] = None,
    service: KeyUpdateService = Depends(get_key_update_service),
):
    """Store used-key counts derived from the helper's remaining-key report."""
    remaining = {boss.remaining_param: request.query_params.get(boss.remaining_param) for boss in BOSS_TYPES}
    try:
        return service.apply(umid, remaining)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
