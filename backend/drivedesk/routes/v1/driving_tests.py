# backend/drivedesk/routes/v1/driving_tests.py
"""
Driving test routes - API v1

Endpoints:
    GET /             - All recorded tests (or one student's), newest first
    GET /statistics   - Pass rate and fault averages for a timeframe
    POST /            - Record a test result
    GET /{test_id}    - Test details
    PATCH /{test_id}  - Edit a result
    DELETE /{test_id} - Remove a result
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies import get_current_user_id, get_driving_test_service
from ...core.enums import StatsTimeframe
from ...schemas.driving_test import (
    DrivingTestCreate,
    DrivingTestResponse,
    DrivingTestStatisticsResponse,
    DrivingTestUpdate,
)
from ...services.driving_test_service import DrivingTestService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["driving-tests-v1"])


@router.get("", response_model=List[DrivingTestResponse])
async def list_driving_tests(
    student_id: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    test_service: DrivingTestService = Depends(get_driving_test_service),
) -> List[DrivingTestResponse]:
    if student_id:
        tests = await asyncio.to_thread(test_service.list_for_student, user_id, student_id)
    else:
        tests = await asyncio.to_thread(test_service.list_tests, user_id)
    return [DrivingTestResponse.model_validate(t) for t in tests]


@router.get("/statistics", response_model=Optional[DrivingTestStatisticsResponse])
async def get_statistics(
    timeframe: StatsTimeframe = Query(StatsTimeframe.ALL_TIME),
    user_id: str = Depends(get_current_user_id),
    test_service: DrivingTestService = Depends(get_driving_test_service),
) -> Optional[DrivingTestStatisticsResponse]:
    """``null`` when no tests fall inside the timeframe."""
    stats = await asyncio.to_thread(test_service.get_statistics, user_id, timeframe)
    return DrivingTestStatisticsResponse.model_validate(stats) if stats is not None else None


@router.post("", response_model=DrivingTestResponse, status_code=status.HTTP_201_CREATED)
async def create_driving_test(
    payload: DrivingTestCreate,
    user_id: str = Depends(get_current_user_id),
    test_service: DrivingTestService = Depends(get_driving_test_service),
) -> DrivingTestResponse:
    test = await asyncio.to_thread(test_service.create_test, user_id, payload)
    return DrivingTestResponse.model_validate(test)


@router.get("/{test_id}", response_model=DrivingTestResponse)
async def get_driving_test(
    test_id: str,
    user_id: str = Depends(get_current_user_id),
    test_service: DrivingTestService = Depends(get_driving_test_service),
) -> DrivingTestResponse:
    test = await asyncio.to_thread(test_service.get_test, user_id, test_id)
    return DrivingTestResponse.model_validate(test)


@router.patch("/{test_id}", response_model=DrivingTestResponse)
async def update_driving_test(
    test_id: str,
    payload: DrivingTestUpdate,
    user_id: str = Depends(get_current_user_id),
    test_service: DrivingTestService = Depends(get_driving_test_service),
) -> DrivingTestResponse:
    test = await asyncio.to_thread(test_service.update_test, user_id, test_id, payload)
    return DrivingTestResponse.model_validate(test)


@router.delete("/{test_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_driving_test(
    test_id: str,
    user_id: str = Depends(get_current_user_id),
    test_service: DrivingTestService = Depends(get_driving_test_service),
) -> Response:
    await asyncio.to_thread(test_service.delete_test, user_id, test_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
