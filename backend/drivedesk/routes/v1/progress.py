# backend/drivedesk/routes/v1/progress.py
"""
Progress routes - API v1

Endpoints:
    GET/POST /topics                     - Syllabus topics
    PATCH/DELETE /topics/{topic_id}      - Rename or remove a topic
    GET /entries?student_id=             - A student's ratings, newest first
    POST /entries                        - Record a rating
    PATCH/DELETE /entries/{entry_id}     - Edit or remove a rating
    GET /students/{student_id}/summary   - Average per topic and latest targets
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies import get_current_user_id, get_progress_service
from ...schemas.progress import (
    ProgressEntryCreate,
    ProgressEntryResponse,
    ProgressEntryUpdate,
    ProgressSummaryResponse,
    TopicCreate,
    TopicResponse,
)
from ...services.progress_service import ProgressService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["progress-v1"])


@router.get("/topics", response_model=List[TopicResponse])
async def list_topics(
    user_id: str = Depends(get_current_user_id),
    progress_service: ProgressService = Depends(get_progress_service),
) -> List[TopicResponse]:
    topics = await asyncio.to_thread(progress_service.list_topics, user_id)
    return [TopicResponse.model_validate(t) for t in topics]


@router.post("/topics", response_model=TopicResponse, status_code=status.HTTP_201_CREATED)
async def create_topic(
    payload: TopicCreate,
    user_id: str = Depends(get_current_user_id),
    progress_service: ProgressService = Depends(get_progress_service),
) -> TopicResponse:
    topic = await asyncio.to_thread(progress_service.create_topic, user_id, payload)
    return TopicResponse.model_validate(topic)


@router.patch("/topics/{topic_id}", response_model=TopicResponse)
async def rename_topic(
    topic_id: str,
    payload: TopicCreate,
    user_id: str = Depends(get_current_user_id),
    progress_service: ProgressService = Depends(get_progress_service),
) -> TopicResponse:
    topic = await asyncio.to_thread(progress_service.rename_topic, user_id, topic_id, payload)
    return TopicResponse.model_validate(topic)


@router.delete("/topics/{topic_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_topic(
    topic_id: str,
    user_id: str = Depends(get_current_user_id),
    progress_service: ProgressService = Depends(get_progress_service),
) -> Response:
    await asyncio.to_thread(progress_service.delete_topic, user_id, topic_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/entries", response_model=List[ProgressEntryResponse])
async def list_entries(
    student_id: str = Query(...),
    user_id: str = Depends(get_current_user_id),
    progress_service: ProgressService = Depends(get_progress_service),
) -> List[ProgressEntryResponse]:
    entries = await asyncio.to_thread(progress_service.list_entries, user_id, student_id)
    return [ProgressEntryResponse.model_validate(e) for e in entries]


@router.post("/entries", response_model=ProgressEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_entry(
    payload: ProgressEntryCreate,
    user_id: str = Depends(get_current_user_id),
    progress_service: ProgressService = Depends(get_progress_service),
) -> ProgressEntryResponse:
    entry = await asyncio.to_thread(progress_service.create_entry, user_id, payload)
    return ProgressEntryResponse.model_validate(entry)


@router.patch("/entries/{entry_id}", response_model=ProgressEntryResponse)
async def update_entry(
    entry_id: str,
    payload: ProgressEntryUpdate,
    user_id: str = Depends(get_current_user_id),
    progress_service: ProgressService = Depends(get_progress_service),
) -> ProgressEntryResponse:
    entry = await asyncio.to_thread(progress_service.update_entry, user_id, entry_id, payload)
    return ProgressEntryResponse.model_validate(entry)


@router.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user_id),
    progress_service: ProgressService = Depends(get_progress_service),
) -> Response:
    await asyncio.to_thread(progress_service.delete_entry, user_id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/students/{student_id}/summary", response_model=ProgressSummaryResponse)
async def get_progress_summary(
    student_id: str,
    user_id: str = Depends(get_current_user_id),
    progress_service: ProgressService = Depends(get_progress_service),
) -> ProgressSummaryResponse:
    summary = await asyncio.to_thread(progress_service.get_summary, user_id, student_id)
    return ProgressSummaryResponse.model_validate(summary)
