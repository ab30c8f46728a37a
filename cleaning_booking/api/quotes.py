"""Pricing quote endpoints"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from cleaning_booking.api.deps import get_integrations, resolve_table
from cleaning_booking.core.config import IntegrationConfig
from cleaning_booking.core.errors import MissingSelectionError
from cleaning_booking.core.metrics import quotes_computed
from cleaning_booking.schemas.quote import Quote, Selections
from cleaning_booking.services.pricing import compute_quote

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.post("/calc", response_model=Quote)
async def calc_quote(
    selections: Selections,
    variant: Optional[str] = Query(None),
    integrations: IntegrationConfig = Depends(get_integrations),
):
    table = resolve_table(variant or integrations.pricing_variant)
    try:
        quote = compute_quote(selections, table)
    except MissingSelectionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    quotes_computed.labels(variant=table.name, frequency=selections.frequency).inc()
    logger.debug(f"Quoted {table.name}: first visit {quote.first_visit_total}")
    return quote


@router.get("/tables/{variant}")
async def get_table(variant: str):
    return resolve_table(variant).as_dict()
