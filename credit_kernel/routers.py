# routers.py
from typing import Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from credit_kernel.chains import CHAIN_PROFILES
from credit_kernel.config import settings
from credit_kernel.data_aggregator import DataAggregator
from credit_kernel.exceptions import InvalidWalletAddressError
from credit_kernel.kernel_logging import get_logger
from credit_kernel.models import WalletRequest, validate_wallet_address

logger = get_logger(__name__)

api_router = APIRouter()


def get_aggregator() -> DataAggregator:
    return DataAggregator(profiles=CHAIN_PROFILES)


def _invalid_address() -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid wallet address"})


def _internal_error(exc: Exception) -> JSONResponse:
    message = str(exc) if settings.DEBUG else "Failed to calculate wallet score"
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": message},
    )


async def _score_wallet(wallet_address, aggregator: DataAggregator):
    try:
        wallet_address = validate_wallet_address(wallet_address)
    except InvalidWalletAddressError:
        return _invalid_address()

    logger.info("processing_wallet", wallet=wallet_address)
    try:
        result = await aggregator.compute_score(wallet_address)
    except Exception as e:
        logger.exception("wallet_score_failed", wallet=wallet_address)
        return _internal_error(e)
    return result.score


@api_router.get("/wallet-score/{wallet_address}")
async def get_wallet_score(wallet_address: str, aggregator: DataAggregator = Depends(get_aggregator)):
    """Credit score for a wallet, as a bare integer"""
    return await _score_wallet(wallet_address, aggregator)


@api_router.post("/wallet-score")
async def post_wallet_score(
    request: Optional[WalletRequest] = Body(None),
    aggregator: DataAggregator = Depends(get_aggregator),
):
    """Same as GET, with the address in the JSON body"""
    wallet_address = request.wallet_address if request is not None else None
    return await _score_wallet(wallet_address, aggregator)
