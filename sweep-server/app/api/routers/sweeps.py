"""Balance and sweep endpoints for custodied accounts."""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_sweep_service
from app.core.security import get_current_operator
from app.domain.sweeps import SweepService
from app.schemas import AccountRequest, BalanceResponse, ConnectResponse, ErrorResponse, TokenData, TransferResponse

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


@router.post("/connect", response_model=ConnectResponse, responses=ERROR_RESPONSES, summary="Report account balances")
async def connect(
    payload: AccountRequest,
    operator: TokenData = Depends(get_current_operator),
    service: SweepService = Depends(get_sweep_service),
) -> ConnectResponse:
    report = await service.balances(payload.account)
    return ConnectResponse(success=True, balance=BalanceResponse.from_report(report))


@router.post("/transfer", response_model=TransferResponse, responses=ERROR_RESPONSES, summary="Sweep every asset to the destination")
async def transfer(
    payload: AccountRequest,
    operator: TokenData = Depends(get_current_operator),
    service: SweepService = Depends(get_sweep_service),
):
    logger.info("Operator %s requested sweep of %s", operator.subject, payload.account)
    batch = await service.sweep(payload.account)
    response = TransferResponse.from_batch(batch)
    if not batch.overall_success:
        return JSONResponse(status_code=503, content=response.model_dump(mode="json", by_alias=True))
    return response
