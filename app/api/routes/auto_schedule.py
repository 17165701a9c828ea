import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_campaign_or_404
from app.db.models.campaigns import Campaigns
from app.schemas.campaign_schedules import (
    AutoScheduleApplyRequest,
    AutoScheduleApplyResponse,
    AutoScheduleResponse,
    CampaignScheduleResponse,
    PlacedStoreResponse,
    UnplacedStoreResponse,
)
from app.services.scheduling import (
    ScheduleInputError,
    ScheduleResult,
    format_schedule_summary,
    generate_schedule,
    replace_campaign_schedules,
)

router = APIRouter(prefix="/campaigns", tags=["auto-schedule"])

logger = logging.getLogger(__name__)


def _run_scheduler(db: Session, campaign: Campaigns) -> ScheduleResult:
    try:
        return generate_schedule(db, campaign.id)
    except ScheduleInputError as e:
        raise HTTPException(status_code=422, detail=str(e))


def _unplaced_response(result: ScheduleResult) -> list[UnplacedStoreResponse]:
    return [
        UnplacedStoreResponse(
            store_id=u.store.id,
            store_name=u.store.name,
            reason=u.reason,
            reason_code=u.reason_code,
            strict_reason=u.strict_reason,
        )
        for u in result.unplaced
    ]


@router.post("/{campaign_id}/auto-schedule", response_model=AutoScheduleResponse)
def preview_auto_schedule(
    campaign: Campaigns = Depends(get_campaign_or_404),
    db: Session = Depends(get_db),
):
    """Run the scheduler and return its proposal. Nothing is saved."""
    result = _run_scheduler(db, campaign)

    return AutoScheduleResponse(
        campaign_id=campaign.id,
        success=result.success,
        error=result.error,
        candidate_dates=result.candidate_dates,
        placed=[
            PlacedStoreResponse(store_id=a.store_id, activity_date=a.activity_date, relaxed=a.relaxed)
            for a in result.placed
        ],
        unplaced=_unplaced_response(result),
        summary=format_schedule_summary(result),
    )


@router.post("/{campaign_id}/auto-schedule/apply", response_model=AutoScheduleApplyResponse)
def apply_auto_schedule(
    payload: Optional[AutoScheduleApplyRequest] = None,
    campaign: Campaigns = Depends(get_campaign_or_404),
    db: Session = Depends(get_db),
):
    """
    Run the scheduler and replace the campaign's schedules with the result.
    A partial result is only saved when the operator confirmed it.
    """
    payload = payload or AutoScheduleApplyRequest()
    result = _run_scheduler(db, campaign)
    summary = format_schedule_summary(result)

    if result.error:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=summary)
    if result.unplaced and not payload.confirm_partial:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=summary)

    rows = replace_campaign_schedules(db, campaign.id, result.placed)
    db.commit()
    for row in rows:
        db.refresh(row)

    logger.info(
        f"Applied auto-schedule for campaign {campaign.id}: "
        f"{len(rows)} placed, {len(result.unplaced)} unplaced"
    )
    return AutoScheduleApplyResponse(
        campaign_id=campaign.id,
        saved=[CampaignScheduleResponse.model_validate(r) for r in rows],
        unplaced=_unplaced_response(result),
        summary=summary,
    )
