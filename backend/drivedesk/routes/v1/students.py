# backend/drivedesk/routes/v1/students.py
"""
Student routes - API v1

Endpoints:
    GET /               - List students (optional name search)
    POST /              - Add a student
    GET /{student_id}   - Student details
    PATCH /{student_id} - Update a student
    DELETE /{student_id} - Remove a student
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies import get_current_user_id, get_student_service
from ...schemas.student import StudentCreate, StudentResponse, StudentUpdate
from ...services.student_service import StudentService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["students-v1"])


@router.get("", response_model=List[StudentResponse])
async def list_students(
    search: Optional[str] = Query(None, max_length=200),
    user_id: str = Depends(get_current_user_id),
    student_service: StudentService = Depends(get_student_service),
) -> List[StudentResponse]:
    students = await asyncio.to_thread(student_service.list_students, user_id, search)
    return [StudentResponse.model_validate(s) for s in students]


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
async def create_student(
    payload: StudentCreate,
    user_id: str = Depends(get_current_user_id),
    student_service: StudentService = Depends(get_student_service),
) -> StudentResponse:
    student = await asyncio.to_thread(student_service.create_student, user_id, payload)
    return StudentResponse.model_validate(student)


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(
    student_id: str,
    user_id: str = Depends(get_current_user_id),
    student_service: StudentService = Depends(get_student_service),
) -> StudentResponse:
    student = await asyncio.to_thread(student_service.get_student, user_id, student_id)
    return StudentResponse.model_validate(student)


@router.patch("/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: str,
    payload: StudentUpdate,
    user_id: str = Depends(get_current_user_id),
    student_service: StudentService = Depends(get_student_service),
) -> StudentResponse:
    student = await asyncio.to_thread(
        student_service.update_student, user_id, student_id, payload
    )
    return StudentResponse.model_validate(student)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(
    student_id: str,
    user_id: str = Depends(get_current_user_id),
    student_service: StudentService = Depends(get_student_service),
) -> Response:
    await asyncio.to_thread(student_service.delete_student, user_id, student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
