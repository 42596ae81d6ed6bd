from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core import users as service
from app.core.config import settings
from app.db.session import get_db
from app.models.manager import Manager
from app.models.user import User
from app.schemas.manager import ManagerListResponse, ManagerOut
from app.schemas.user import (
    CreateUserRequest,
    CreateUserResponse,
    DeleteUserRequest,
    GetUsersRequest,
    MessageResponse,
    UpdateUserRequest,
    UpdateUserResponse,
    UserListResponse,
    UserOut,
)

router = APIRouter(prefix=settings.API_PREFIX, tags=["users"])


def user_to_out(u: User) -> UserOut:
    return UserOut(
        user_id=u.user_id,
        full_name=u.full_name,
        mob_num=u.mob_num,
        pan_num=u.pan_num,
        manager_id=u.manager_id,
        created_at=u.created_at,
        updated_at=u.updated_at,
        is_active=u.is_active,
    )


def manager_to_out(m: Manager) -> ManagerOut:
    return ManagerOut(manager_id=m.manager_id, manager_name=m.manager_name, is_active=m.is_active)


@router.post("/create_user", response_model=CreateUserResponse, status_code=status.HTTP_201_CREATED)
def create_user(payload: CreateUserRequest, db: Session = Depends(get_db)):
    user = service.create_user(
        db,
        full_name=payload.full_name,
        mob_num=payload.mob_num,
        pan_num=payload.pan_num,
        manager_id=payload.manager_id,
    )
    return CreateUserResponse(message="User created successfully.", user_id=user.user_id)


@router.post("/get_users", response_model=UserListResponse)
def get_users(payload: GetUsersRequest | None = None, db: Session = Depends(get_db)):
    """
    Active users only. Filters are optional and combined; mob_num matches on
    the trailing digits after normalization. A mob_num filter with no digits
    at all is rejected with 400 instead of matching every user.
    """
    payload = payload or GetUsersRequest()
    rows = service.list_users(
        db,
        user_id=payload.user_id,
        mob_num=payload.mob_num,
        manager_id=payload.manager_id,
    )
    return UserListResponse(users=[user_to_out(u) for u in rows])


@router.post("/delete_user", response_model=MessageResponse)
def delete_user(payload: DeleteUserRequest, db: Session = Depends(get_db)):
    service.delete_user(db, user_id=payload.user_id, mob_num=payload.mob_num)
    return MessageResponse(message="User deleted successfully.")


@router.post("/update_user", response_model=UpdateUserResponse, response_model_exclude_none=True)
def update_user(payload: UpdateUserRequest, db: Session = Depends(get_db)):
    """
    - several user_ids + {"manager_id"} only: bulk reassignment in place
    - one user_id with manager_id: old row deactivated, new row created (new_user_id returned)
    - one user_id otherwise: fields updated in place
    """
    result = service.update_users(db, user_ids=payload.user_ids, update_data=payload.update_data)
    return UpdateUserResponse(
        message=result.message,
        new_user_id=result.new_user_id,
        updated_count=result.updated_count,
    )


@router.post("/get_managers", response_model=ManagerListResponse)
def get_managers(db: Session = Depends(get_db)):
    return ManagerListResponse(managers=[manager_to_out(m) for m in service.list_managers(db)])
