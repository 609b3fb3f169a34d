"""
API Router: all endpoint definitions for the deal service.
"""

import logging

from fastapi import APIRouter, HTTPException, Query

from deal_engine import INDUSTRY_PROFILES
from deal_service.api.schemas import DealListResponse, DealRequest, IndustryItem, IndustryListResponse
from deal_service.services.analysis import DealService
from deal_service.sources import DealSourceFactory
from deal_service.utils.json import sanitize_for_json

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/industries",
    summary="List Industries",
    description="Lists the supported industries and the constants each one contributes to scoring.",
    response_model=IndustryListResponse,
)
def list_industries():
    return IndustryListResponse(
        results=[IndustryItem(code=code, **profile.to_dict()) for code, profile in INDUSTRY_PROFILES.items()]
    )


@router.post(
    "/deal/analyze",
    summary="Analyze Deal",
    description="Computes valuation, financing and cash-flow metrics for a deal and returns a SWOT recommendation.",
    response_description="Normalized inputs, computed metrics and the deal analysis.",
)
def analyze_deal(request: DealRequest):
    try:
        service = DealService()
        result = service.analyze(request.model_dump())
        return sanitize_for_json(result)
    except ValueError as e:
        logger.warning(f"Bad Request for deal analysis: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Internal Error analyzing deal: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get(
    "/deals",
    summary="List Deals",
    description="Lists the deal ids available from the selected source.",
    response_model=DealListResponse,
)
def list_deals(source: str = Query("preset", description="Deal source")):
    try:
        deal_source = DealSourceFactory.get_source(source)
        return DealListResponse(source=source, deals=deal_source.list_deals())
    except ValueError as e:
        logger.warning(f"Bad Request listing deals from {source}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Internal Error listing deals from {source}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get(
    "/deals/{deal_id}",
    summary="Get Deal",
    description="Fetches the raw form values of a stored deal from the selected source.",
    response_description="Dictionary of form values keyed like the deal form.",
)
def get_deal(deal_id: str, source: str = Query("preset", description="Deal source")):
    try:
        service = DealService(DealSourceFactory.get_source(source))
        return sanitize_for_json(service.get_deal(deal_id))
    except ValueError as e:
        logger.warning(f"Bad Request for deal {deal_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Internal Error fetching deal {deal_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get(
    "/deals/{deal_id}/analysis",
    summary="Analyze Stored Deal",
    description="Runs the full deal analysis on a deal fetched from the selected source.",
    response_description="Normalized inputs, computed metrics and the deal analysis.",
)
def analyze_stored_deal(deal_id: str, source: str = Query("preset", description="Deal source")):
    try:
        service = DealService(DealSourceFactory.get_source(source))
        result = service.analyze_deal(deal_id)
        return sanitize_for_json(result)
    except ValueError as e:
        logger.warning(f"Bad Request for deal {deal_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Internal Error analyzing deal {deal_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")
