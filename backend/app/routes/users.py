"""
User API Routes
List, fetch-by-username and create for users. All logic lives in UserService;
this module only wires dependencies and translates service errors to HTTP.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session

from app import database
from app.database import get_session
from app.models.user import UserDto
from app.repositories.user_repository import UserRepository, build_user_repository
from app.services.user_service import (
    UserAlreadyExistsError,
    UserNotFoundError,
    UserService,
    UserServiceError,
)

router = APIRouter()


# ============================================================================
# Dependencies
# ============================================================================


def get_user_repository(session: Session = Depends(get_session)) -> UserRepository:
    """Repository for the configured USER_STORE"""
    return build_user_repository(database.USER_STORE, session)


def get_user_service(repository: UserRepository = Depends(get_user_repository)) -> UserService:
    return UserService(repository)


# ============================================================================
# User Endpoints
# ============================================================================


@router.get("/users", response_model=List[UserDto])
def get_all_users(response: Response, service: UserService = Depends(get_user_service)):
    """List all users"""
    result = service.list_users()
    response.status_code = result.status_code
    return result.payload


@router.get("/users/{username}", response_model=UserDto)
def get_user_by_username(username: str, response: Response, service: UserService = Depends(get_user_service)):
    """Get a user by username (exact, case-sensitive match)"""
    try:
        result = service.get_user_by_username(username)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UserServiceError as e:
        raise HTTPException(status_code=400, detail=str(e))
    response.status_code = result.status_code
    return result.payload


@router.post("/users", response_model=UserDto, status_code=201)
def create_user(user_dto: UserDto, response: Response, service: UserService = Depends(get_user_service)):
    """Create a user. Fails with 409 if the username is taken."""
    try:
        result = service.create_user(user_dto)
    except UserAlreadyExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except UserServiceError as e:
        raise HTTPException(status_code=400, detail=str(e))
    response.status_code = result.status_code
    return result.payload
