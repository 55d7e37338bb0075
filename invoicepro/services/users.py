"""
User Directory

Lookup and maintenance of the accounts stored in the document.
Authentication itself (passwords, sessions) belongs to the auth
collaborator; this module only stores what it is given.
"""

from typing import Any, Mapping, Optional

import structlog
from pydantic import BaseModel, ValidationError

from invoicepro.models.document import User, default_user_settings, new_user_id
from invoicepro.services.storage import DocumentStore


# Keys assigned by the directory, never taken from caller data.
_MANAGED_KEYS = (
    "id",
    "createdAt",
    "created_at",
    "isActive",
    "is_active",
    "settings",
)


class UserCreationResult(BaseModel):
    """Outcome of create_user()."""
    
    success: bool
    message: Optional[str] = None
    user: Optional[User] = None


class UserDirectory:
    """Create, find and update users."""
    
    def __init__(self, store: DocumentStore):
        self._store = store
        self._logger = structlog.get_logger(__name__)
    
    def create_user(self, user_data: Mapping[str, Any]) -> UserCreationResult:
        """
        Register a new user.
        
        Emails are unique, compared case-insensitively.
        """
        email = str(user_data.get("email") or "").strip()
        if not email:
            return UserCreationResult(success=False, message="Email required")
        
        data = {
            key: value for key, value in user_data.items()
            if key not in _MANAGED_KEYS
        }
        
        with self._store.locked():
            document = self._store.load()
            if document is None:
                return UserCreationResult(success=False, message="Database unavailable")
            
            if any(user.email.lower() == email.lower() for user in document.users):
                return UserCreationResult(success=False, message="Email exists")
            
            try:
                user = User.model_validate({
                    **data,
                    "id": new_user_id(),
                    "email": email,
                    "createdAt": self._store.now(),
                    "isActive": True,
                    "settings": default_user_settings(),
                })
            except ValidationError as e:
                return UserCreationResult(success=False, message=str(e))
            
            document.users.append(user)
            if not self._store.save(document):
                return UserCreationResult(success=False, message="Failed to save user")
        
        self._logger.info("user_created", user_id=user.id)
        return UserCreationResult(success=True, user=user)
    
    def find_user_by_id(self, user_id: str) -> Optional[User]:
        """Active user with this id."""
        document = self._store.load()
        if document is None:
            return None
        for user in document.users:
            if user.id == user_id and user.is_active:
                return user
        return None
    
    def find_user_by_email(self, email: str) -> Optional[User]:
        """Active user with this email (case-insensitive)."""
        document = self._store.load()
        if document is None:
            return None
        wanted = email.strip().lower()
        for user in document.users:
            if user.email.lower() == wanted and user.is_active:
                return user
        return None
    
    def update_user(self, user_id: str, updates: Mapping[str, Any]) -> bool:
        """
        Merge updates into a user. The id cannot be changed.
        
        Returns:
            The save result; False if the user is missing or the
            merged user does not validate
        """
        changes = {key: value for key, value in updates.items() if key != "id"}
        
        with self._store.locked():
            document = self._store.load()
            if document is None:
                return False
            
            for index, user in enumerate(document.users):
                if user.id == user_id:
                    break
            else:
                return False
            
            try:
                merged = User.model_validate({
                    **user.model_dump(by_alias=True),
                    **changes,
                    "id": user.id,
                })
            except ValidationError as e:
                self._logger.warning("user_update_rejected", user_id=user_id, error=str(e))
                return False
            
            document.users[index] = merged
            return self._store.save(document)
