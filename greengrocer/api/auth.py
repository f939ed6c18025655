"""
Authentication and profile endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status

from greengrocer.api.deps import SESSION_USER_KEY, get_current_user, get_repository
from greengrocer.api.errors import http_error
from greengrocer.exceptions import GreenGrocerError
from greengrocer.models import User
from greengrocer.repositories import Repository
from greengrocer.schemas.common import MessageResponse
from greengrocer.schemas.user import UserLogin, UserRegister, UserResponse, UserUpdate
from greengrocer.services.auth_service import AuthService

router = APIRouter(prefix="/api", tags=["auth"])


def get_auth_service(repository: Repository = Depends(get_repository)) -> AuthService:
    """Dependency to get AuthService instance"""
    return AuthService(repository)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED, summary="Register")
def register(
    request: Request,
    user_data: UserRegister,
    service: AuthService = Depends(get_auth_service)
):
    """
    Create a customer account and log it in
    
    - **username**: Unique login name
    - **password**: Password
    - **fullName**, **email**: Profile details
    - **avatar**: Avatar URL (optional)
    """
    try:
        user = service.register(user_data)
    except GreenGrocerError as e:
        raise http_error(e)
    request.session[SESSION_USER_KEY] = user.id
    return user


@router.post("/login", response_model=UserResponse, summary="Log in")
def login(
    request: Request,
    credentials: UserLogin,
    service: AuthService = Depends(get_auth_service)
):
    """Check credentials and bind the session to the user"""
    user = service.authenticate(credentials.username, credentials.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )
    request.session[SESSION_USER_KEY] = user.id
    return UserResponse.model_validate(user)


@router.post("/logout", response_model=MessageResponse, summary="Log out")
def logout(request: Request):
    """Drop the session"""
    request.session.clear()
    return MessageResponse(message="Logged out")


@router.get("/user", response_model=UserResponse, summary="Current user")
def current_user(user: User = Depends(get_current_user)):
    return UserResponse.model_validate(user)


@router.patch("/users/{user_id}", response_model=UserResponse, summary="Update profile")
def update_user(
    user_id: int,
    user_data: UserUpdate,
    user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    """
    Update a profile
    
    Users may update their own profile; admins may update anyone's.
    """
    try:
        return service.update_profile(user, user_id, user_data)
    except GreenGrocerError as e:
        raise http_error(e)
