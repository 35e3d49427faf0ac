# backend/drivedesk/routes/v1/mileage.py
"""
Mileage log routes - API v1

Endpoints:
    GET /             - Entries, newest first (optional car filter)
    GET /weekly       - Entries grouped by Monday-start week
    POST /            - Log a day's mileage
    PATCH /{entry_id} - Edit an entry
    DELETE /{entry_id} - Remove an entry
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies import get_car_service, get_current_user_id
from ...schemas.car import (
    MileageEntryCreate,
    MileageEntryResponse,
    MileageEntryUpdate,
    WeeklyMileageResponse,
)
from ...services.car_service import CarService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["mileage-v1"])


@router.get("", response_model=List[MileageEntryResponse])
async def list_mileage(
    car_id: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    car_service: CarService = Depends(get_car_service),
) -> List[MileageEntryResponse]:
    entries = await asyncio.to_thread(car_service.list_mileage, user_id, car_id)
    return [MileageEntryResponse.model_validate(e) for e in entries]


@router.get("/weekly", response_model=List[WeeklyMileageResponse])
async def weekly_mileage(
    car_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None, max_length=200),
    user_id: str = Depends(get_current_user_id),
    car_service: CarService = Depends(get_car_service),
) -> List[WeeklyMileageResponse]:
    weeks = await asyncio.to_thread(car_service.weekly_summary, user_id, car_id, search)
    return [WeeklyMileageResponse.model_validate(w) for w in weeks]


@router.post("", response_model=MileageEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_mileage_entry(
    payload: MileageEntryCreate,
    user_id: str = Depends(get_current_user_id),
    car_service: CarService = Depends(get_car_service),
) -> MileageEntryResponse:
    entry = await asyncio.to_thread(car_service.create_mileage_entry, user_id, payload)
    return MileageEntryResponse.model_validate(entry)


@router.patch("/{entry_id}", response_model=MileageEntryResponse)
async def update_mileage_entry(
    entry_id: str,
    payload: MileageEntryUpdate,
    user_id: str = Depends(get_current_user_id),
    car_service: CarService = Depends(get_car_service),
) -> MileageEntryResponse:
    entry = await asyncio.to_thread(car_service.update_mileage_entry, user_id, entry_id, payload)
    return MileageEntryResponse.model_validate(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_mileage_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user_id),
    car_service: CarService = Depends(get_car_service),
) -> Response:
    await asyncio.to_thread(car_service.delete_mileage_entry, user_id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
