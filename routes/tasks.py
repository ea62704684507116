import logging

from fastapi import APIRouter, Depends, status, Request
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime

from errors import InternalFailure, ValidationError
from middleware.auth import verify_jwt_middleware
from schemas import (
    MessageResponse,
    TaskListResponse,
    TaskMessageResponse,
    TaskPayload,
    task_to_dict,
)
from stores.tasks import TaskStore, get_task_store

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(verify_jwt_middleware)])


def _validated_fields(task_data: TaskPayload):
    """
    Check that every task field is present and parse the completion date

    Returns:
        Tuple of (title, status, completion_date)

    Raises:
        ValidationError: If a field is missing or the date cannot be parsed
    """
    if not task_data.title or not task_data.status or not task_data.completion_date:
        raise ValidationError("Please provide all fields")

    try:
        completion_date = datetime.fromisoformat(task_data.completion_date)
    except ValueError as exc:
        raise ValidationError("completionDate must be an ISO 8601 date") from exc

    return task_data.title, task_data.status, completion_date


@router.post("/tasks", status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskPayload,
    request: Request,
    store: TaskStore = Depends(get_task_store),
) -> TaskMessageResponse:
    """Create a task owned by the authenticated user"""
    title, task_status, completion_date = _validated_fields(task_data)

    try:
        task = store.create(request.state.user_id, title, task_status, completion_date)
    except SQLAlchemyError as exc:
        logger.exception("Error adding task")
        raise InternalFailure("An error occurred while adding the task") from exc

    return TaskMessageResponse(message="Task added successfully", task=task_to_dict(task))


@router.get("/tasks")
def list_tasks(
    request: Request,
    store: TaskStore = Depends(get_task_store),
) -> TaskListResponse:
    """Get all tasks of the authenticated user"""
    try:
        tasks = store.list_by_owner(request.state.user_id)
    except SQLAlchemyError as exc:
        logger.exception("Error fetching tasks")
        raise InternalFailure("Failed to fetch tasks") from exc

    return TaskListResponse(tasks=[task_to_dict(task) for task in tasks])


@router.put("/tasks/{task_id}")
def update_task(
    task_id: str,
    task_data: TaskPayload,
    request: Request,
    store: TaskStore = Depends(get_task_store),
) -> TaskMessageResponse:
    """
    Overwrite title, status and completion date of a task

    Responds 404 both when the task does not exist and when it belongs to
    another user.
    """
    title, task_status, completion_date = _validated_fields(task_data)

    try:
        task = store.update(task_id, request.state.user_id, title, task_status, completion_date)
    except SQLAlchemyError as exc:
        logger.exception("Error updating task")
        raise InternalFailure("An error occurred while updating the task") from exc

    return TaskMessageResponse(message="Task updated successfully", task=task_to_dict(task))


@router.delete("/tasks/{task_id}")
def delete_task(
    task_id: str,
    request: Request,
    store: TaskStore = Depends(get_task_store),
) -> MessageResponse:
    """Delete a task of the authenticated user"""
    try:
        store.delete(task_id, request.state.user_id)
    except SQLAlchemyError as exc:
        logger.exception("Error deleting task")
        raise InternalFailure("An error occurred while deleting the task") from exc

    return MessageResponse(message="Task deleted successfully")
