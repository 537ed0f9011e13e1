"""
Instrument Search Endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import get_instrument_service
from api.schemas import InstrumentResponse
from core.constants import API_PREFIX
from reference_data.instruments import InstrumentService

router = APIRouter(prefix=f"{API_PREFIX}/instrument", tags=["Instruments"])


@router.get("/search/{query}", response_model=List[InstrumentResponse])
async def search_instruments(
    query: str,
    service: InstrumentService = Depends(get_instrument_service),
):
    """
    Search instruments by ticker or name.

    Queries shorter than 3 characters (after trimming) return an
    empty list.
    """
    instruments = await service.search(query)
    return [InstrumentResponse.from_domain(i) for i in instruments]
