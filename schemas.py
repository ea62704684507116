from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime


class Credentials(BaseModel):
    """Schema for register and login requests"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    username: Optional[str] = None
    password: Optional[str] = None


class TaskPayload(BaseModel):
    """Schema for creating or overwriting a task; presence is checked by the route"""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    title: Optional[str] = None
    status: Optional[str] = None
    completion_date: Optional[str] = Field(None, alias="completionDate")


class TaskResponse(BaseModel):
    """Schema for task response"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    status: str
    completion_date: datetime = Field(serialization_alias="completionDate")
    user_id: str = Field(serialization_alias="userId")


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str


class TaskMessageResponse(BaseModel):
    message: str
    task: dict


class TaskListResponse(BaseModel):
    tasks: List[dict]


class ErrorResponse(BaseModel):
    """Body of every error response"""
    error: str


def task_to_dict(task) -> dict:
    """Public JSON form of a Task row (camelCase keys)"""
    return TaskResponse.model_validate(task).model_dump(by_alias=True, mode="json")
