"""
User routes: admin user management.
"""

from fastapi import APIRouter, HTTPException

from ..database import BackendError
from ..exceptions import backend_failure, require_deleted, require_resource
from ..schemas import CreateUserRequest, UpdateUserRequest, UserResponse
from ..services import UserServiceDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
async def list_users(service: UserServiceDep) -> list[UserResponse]:
    """List users. Password hashes are never included."""
    users = await service.list_users()
    return [UserResponse.from_db(u) for u in users]


@router.post("")
async def create_user(request: CreateUserRequest, service: UserServiceDep) -> UserResponse:
    try:
        user = await service.create_user(request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BackendError as e:
        raise backend_failure(e, "create user")
    return UserResponse.from_db(user)


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    service: UserServiceDep
) -> UserResponse:
    user = await service.update_user(user_id, request.changes())
    return UserResponse.from_db(require_resource(user, "User not found"))


@router.delete("/{user_id}")
async def delete_user(user_id: str, service: UserServiceDep) -> dict:
    require_deleted(await service.delete_user(user_id), "User not found")
    return {"success": True}
