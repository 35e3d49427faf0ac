# backend/drivedesk/routes/v1/cars.py
"""
Car routes - API v1

Endpoints:
    GET /                       - List cars
    POST /                      - Add a car
    GET /{car_id}               - Car details
    GET /{car_id}/service-status - Current mileage and miles until next service
    PATCH /{car_id}             - Update a car
    DELETE /{car_id}            - Remove a car and its mileage log
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from ...api.dependencies import get_car_service, get_current_user_id
from ...schemas.car import CarCreate, CarResponse, CarServiceStatusResponse, CarUpdate
from ...services.car_service import CarService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["cars-v1"])


@router.get("", response_model=List[CarResponse])
async def list_cars(
    user_id: str = Depends(get_current_user_id),
    car_service: CarService = Depends(get_car_service),
) -> List[CarResponse]:
    cars = await asyncio.to_thread(car_service.list_cars, user_id)
    return [CarResponse.model_validate(c) for c in cars]


@router.post("", response_model=CarResponse, status_code=status.HTTP_201_CREATED)
async def create_car(
    payload: CarCreate,
    user_id: str = Depends(get_current_user_id),
    car_service: CarService = Depends(get_car_service),
) -> CarResponse:
    car = await asyncio.to_thread(car_service.create_car, user_id, payload)
    return CarResponse.model_validate(car)


@router.get("/{car_id}", response_model=CarResponse)
async def get_car(
    car_id: str,
    user_id: str = Depends(get_current_user_id),
    car_service: CarService = Depends(get_car_service),
) -> CarResponse:
    car = await asyncio.to_thread(car_service.get_car, user_id, car_id)
    return CarResponse.model_validate(car)


@router.get("/{car_id}/service-status", response_model=CarServiceStatusResponse)
async def get_service_status(
    car_id: str,
    user_id: str = Depends(get_current_user_id),
    car_service: CarService = Depends(get_car_service),
) -> CarServiceStatusResponse:
    service_status = await asyncio.to_thread(car_service.get_service_status, user_id, car_id)
    return CarServiceStatusResponse.model_validate(service_status)


@router.patch("/{car_id}", response_model=CarResponse)
async def update_car(
    car_id: str,
    payload: CarUpdate,
    user_id: str = Depends(get_current_user_id),
    car_service: CarService = Depends(get_car_service),
) -> CarResponse:
    car = await asyncio.to_thread(car_service.update_car, user_id, car_id, payload)
    return CarResponse.model_validate(car)


@router.delete("/{car_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_car(
    car_id: str,
    user_id: str = Depends(get_current_user_id),
    car_service: CarService = Depends(get_car_service),
) -> Response:
    await asyncio.to_thread(car_service.delete_car, user_id, car_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
