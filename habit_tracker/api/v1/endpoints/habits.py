"""
Habit endpoints.

CRUD for the caller's habits. Deletion is logical: the habit is marked
inactive and remains available through the status filter.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from habit_tracker.api.dependencies import get_current_owner_id, get_habit_repository
from habit_tracker.core.config import settings
from habit_tracker.db.repositories.habit import HabitRepository
from habit_tracker.schemas.habit import (HabitCreate, HabitListItem, HabitListParams, HabitOrder, HabitResponse,
                                         HabitUpdate, StatusFilter, )
from habit_tracker.services.habit_service import HabitService

router = APIRouter()


@router.post("", summary="Create a habit.", response_model=HabitResponse, status_code=status.HTTP_201_CREATED, )
def create_habit(data: HabitCreate, repository: HabitRepository = Depends(get_habit_repository),
                 owner_id: int = Depends(get_current_owner_id), ):
    """
    Create a new habit for the caller.

    Daily and weekly habits need ``weekDays``, monthly habits need
    ``monthDays``. The start date cannot be in the past.
    """
    service = HabitService(repository)
    return service.create(owner_id, data)


@router.get("", summary="List habits with optional filters.", response_model=list[HabitListItem], )
def list_habits(filter_status: StatusFilter = Query(StatusFilter(settings.DEFAULT_LIST_STATUS), alias="filterStatus",
                                                    description="Status filter"),
                id_category: Optional[str] = Query(None, alias="idCategory",
                                                   description="Category id, or 'null' for uncategorized habits"),
                order_by: Optional[HabitOrder] = Query(None, alias="orderBy", description="Sort order"),
                repository: HabitRepository = Depends(get_habit_repository),
                owner_id: int = Depends(get_current_owner_id), ):
    service = HabitService(repository)
    params = HabitListParams.from_query(filter_status, id_category, order_by)
    return service.list(owner_id, params)


@router.get("/{habit_id}", summary="Get a habit.", response_model=HabitResponse, )
def get_habit(habit_id: int, repository: HabitRepository = Depends(get_habit_repository),
              owner_id: int = Depends(get_current_owner_id), ):
    service = HabitService(repository)
    return service.get(owner_id, habit_id)


@router.put("/{habit_id}", summary="Update a habit.", response_model=HabitResponse, )
def update_habit(habit_id: int, data: HabitUpdate, repository: HabitRepository = Depends(get_habit_repository),
                 owner_id: int = Depends(get_current_owner_id), ):
    """Only the fields present in the body are changed."""
    service = HabitService(repository)
    return service.update(owner_id, habit_id, data)


@router.delete("/{habit_id}", summary="Deactivate a habit.", status_code=status.HTTP_204_NO_CONTENT, )
def delete_habit(habit_id: int, repository: HabitRepository = Depends(get_habit_repository),
                 owner_id: int = Depends(get_current_owner_id), ):
    service = HabitService(repository)
    service.delete(owner_id, habit_id)
