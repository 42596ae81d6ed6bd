from pydantic import BaseModel


class ManagerOut(BaseModel):
    manager_id: str
    manager_name: str
    is_active: bool


class ManagerListResponse(BaseModel):
    status: str = "success"
    managers: list[ManagerOut]
