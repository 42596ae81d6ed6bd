from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class CreateUserRequest(BaseModel):
    full_name: str
    mob_num: str
    pan_num: str
    manager_id: str


class GetUsersRequest(BaseModel):
    user_id: str | None = None
    mob_num: str | None = None
    manager_id: str | None = None


class DeleteUserRequest(BaseModel):
    user_id: str | None = None
    mob_num: str | None = None


class UpdateUserRequest(BaseModel):
    user_ids: list[str] = Field(min_length=1, description="Target user IDs; more than one only for manager_id reassignment")
    update_data: dict[str, Any]


class UserOut(BaseModel):
    user_id: str
    full_name: str
    mob_num: str
    pan_num: str
    manager_id: str
    created_at: datetime
    updated_at: datetime
    is_active: bool


class CreateUserResponse(BaseModel):
    status: str = "success"
    message: str
    user_id: str


class UserListResponse(BaseModel):
    status: str = "success"
    users: list[UserOut]


class MessageResponse(BaseModel):
    status: str = "success"
    message: str


class UpdateUserResponse(MessageResponse):
    new_user_id: str | None = None
    updated_count: int | None = None
