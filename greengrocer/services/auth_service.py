"""
Auth Service - registration, login and profile updates
"""
import logging
from typing import Optional

from greengrocer.exceptions import DuplicateError, NotFoundError, PermissionDeniedError
from greengrocer.models import User, UserRole
from greengrocer.repositories import Repository
from greengrocer.schemas.user import UserRegister, UserUpdate, UserResponse
from greengrocer.security import hash_password, verify_password

logger = logging.getLogger(__name__)

_REQUIRED_PROFILE_FIELDS = ("full_name", "email", "password")


class AuthService:
    """Service layer for accounts"""
    
    def __init__(self, repository: Repository):
        self.repository = repository
    
    def register(self, user_data: UserRegister) -> UserResponse:
        """
        Create a customer account
        
        Raises:
            DuplicateError: If the username is taken
        """
        if self.repository.get_user_by_username(user_data.username):
            raise DuplicateError("Username already exists")
        
        data = user_data.model_dump()
        data["password"] = hash_password(user_data.password)
        data["role"] = UserRole.CUSTOMER.value
        user = self.repository.create_user(data)
        
        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return UserResponse.model_validate(user)
    
    def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the user when the credentials match, else None"""
        user = self.repository.get_user_by_username(username)
        if user is None or not verify_password(password, user.password):
            return None
        return user
    
    def update_profile(self, actor: User, user_id: int, user_data: UserUpdate) -> UserResponse:
        """
        Update a profile; users may edit themselves, admins anyone
        
        Raises:
            PermissionDeniedError: If actor is neither the owner nor an admin
            NotFoundError: If the user does not exist
        """
        if actor.id != user_id and not actor.is_admin:
            raise PermissionDeniedError("Not authorized to update this user")
        
        data = user_data.model_dump(exclude_unset=True)
        for field in _REQUIRED_PROFILE_FIELDS:
            if field in data and data[field] is None:
                del data[field]
        if "password" in data:
            data["password"] = hash_password(data["password"])
        
        user = self.repository.update_user(user_id, data)
        if not user:
            raise NotFoundError("User not found")
        return UserResponse.model_validate(user)
    
    def ensure_admin(self, username: str, password: str) -> User:
        """Create the bootstrap admin account unless the username exists"""
        user = self.repository.get_user_by_username(username)
        if user:
            return user
        
        user = self.repository.create_user({
            "username": username,
            "password": hash_password(password),
            "full_name": "Administrator",
            "email": f"{username}@greengrocer.local",
            "role": UserRole.ADMIN.value,
        })
        logger.info("Created admin account %s", username)
        return user
