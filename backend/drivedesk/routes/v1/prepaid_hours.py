# backend/drivedesk/routes/v1/prepaid_hours.py
"""
Pre-paid hours routes - API v1

Endpoints:
    GET /              - Packages (optional student filter)
    GET /summary       - Remaining hours per student, fewest first
    POST /             - Record a package purchase
    GET /{package_id}  - Package with its deduction history
    PATCH /{package_id} - Edit a package
    DELETE /{package_id} - Remove a package
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies import get_current_user_id, get_prepaid_hours_service
from ...core.enums import PackageStatusFilter
from ...schemas.prepaid_hours import (
    PrePaidHoursCreate,
    PrePaidHoursDetailResponse,
    PrePaidHoursResponse,
    PrePaidHoursUpdate,
    PrePaidTransactionResponse,
    StudentPrePaidSummaryResponse,
)
from ...services.prepaid_hours_service import PrePaidHoursService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["prepaid-hours-v1"])


@router.get("", response_model=List[PrePaidHoursResponse])
async def list_packages(
    student_id: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    prepaid_service: PrePaidHoursService = Depends(get_prepaid_hours_service),
) -> List[PrePaidHoursResponse]:
    packages = await asyncio.to_thread(prepaid_service.list_packages, user_id, student_id)
    return [PrePaidHoursResponse.model_validate(p) for p in packages]


@router.get("/summary", response_model=List[StudentPrePaidSummaryResponse])
async def get_student_summaries(
    status_filter: PackageStatusFilter = Query(PackageStatusFilter.ACTIVE, alias="status"),
    student_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None, max_length=200),
    user_id: str = Depends(get_current_user_id),
    prepaid_service: PrePaidHoursService = Depends(get_prepaid_hours_service),
) -> List[StudentPrePaidSummaryResponse]:
    summaries = await asyncio.to_thread(
        prepaid_service.get_student_summaries, user_id, status_filter, student_id, search
    )
    return [StudentPrePaidSummaryResponse.model_validate(s) for s in summaries]


@router.post("", response_model=PrePaidHoursResponse, status_code=status.HTTP_201_CREATED)
async def create_package(
    payload: PrePaidHoursCreate,
    user_id: str = Depends(get_current_user_id),
    prepaid_service: PrePaidHoursService = Depends(get_prepaid_hours_service),
) -> PrePaidHoursResponse:
    package = await asyncio.to_thread(prepaid_service.create_package, user_id, payload)
    return PrePaidHoursResponse.model_validate(package)


@router.get("/{package_id}", response_model=PrePaidHoursDetailResponse)
async def get_package(
    package_id: str,
    user_id: str = Depends(get_current_user_id),
    prepaid_service: PrePaidHoursService = Depends(get_prepaid_hours_service),
) -> PrePaidHoursDetailResponse:
    package = await asyncio.to_thread(prepaid_service.get_package, user_id, package_id)
    transactions = await asyncio.to_thread(
        prepaid_service.get_transactions, user_id, package_id
    )
    base = PrePaidHoursResponse.model_validate(package)
    return PrePaidHoursDetailResponse(
        **base.model_dump(),
        transactions=[PrePaidTransactionResponse.model_validate(t) for t in transactions],
    )


@router.patch("/{package_id}", response_model=PrePaidHoursResponse)
async def update_package(
    package_id: str,
    payload: PrePaidHoursUpdate,
    user_id: str = Depends(get_current_user_id),
    prepaid_service: PrePaidHoursService = Depends(get_prepaid_hours_service),
) -> PrePaidHoursResponse:
    package = await asyncio.to_thread(
        prepaid_service.update_package, user_id, package_id, payload
    )
    return PrePaidHoursResponse.model_validate(package)


@router.delete("/{package_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_package(
    package_id: str,
    user_id: str = Depends(get_current_user_id),
    prepaid_service: PrePaidHoursService = Depends(get_prepaid_hours_service),
) -> Response:
    await asyncio.to_thread(prepaid_service.delete_package, user_id, package_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
