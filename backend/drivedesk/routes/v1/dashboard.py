# backend/drivedesk/routes/v1/dashboard.py
"""
Dashboard routes - API v1

Endpoints:
    GET /              - Landing-page summary
    GET /revenue       - Revenue for the current day, week or month
    GET /weekly-hours  - Lesson hours in a Monday-start week
"""

import asyncio
from datetime import date
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_current_user_id, get_dashboard_service
from ...core.enums import RevenueTimeframe
from ...schemas.dashboard import DashboardSummaryResponse, RevenueResponse, WeeklyHoursResponse
from ...services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard-v1"])


@router.get("", response_model=DashboardSummaryResponse)
async def get_dashboard(
    revenue_timeframe: RevenueTimeframe = Query(RevenueTimeframe.WEEKLY),
    week_of: Optional[date] = Query(None, description="Any day in the week to total"),
    show_all_lessons: bool = Query(False),
    user_id: str = Depends(get_current_user_id),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> DashboardSummaryResponse:
    summary = await asyncio.to_thread(
        dashboard_service.get_summary,
        user_id,
        revenue_timeframe,
        week_of,
        show_all_lessons,
    )
    return DashboardSummaryResponse.model_validate(summary)


@router.get("/revenue", response_model=RevenueResponse)
async def get_revenue(
    timeframe: RevenueTimeframe = Query(RevenueTimeframe.WEEKLY),
    user_id: str = Depends(get_current_user_id),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> RevenueResponse:
    revenue = await asyncio.to_thread(dashboard_service.get_revenue, user_id, timeframe)
    return RevenueResponse.model_validate(revenue)


@router.get("/weekly-hours", response_model=WeeklyHoursResponse)
async def get_weekly_hours(
    week_of: Optional[date] = Query(None),
    user_id: str = Depends(get_current_user_id),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> WeeklyHoursResponse:
    hours = await asyncio.to_thread(dashboard_service.get_weekly_hours, user_id, week_of)
    return WeeklyHoursResponse.model_validate(hours)
