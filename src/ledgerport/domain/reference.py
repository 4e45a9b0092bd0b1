"""Tag and user domain services."""

from typing import Optional
from ledgerport.database.base import Database
from ledgerport.domain.entities import Tag as TagEntity, User as UserEntity
from ledgerport.domain.errors import ConflictError, ValidationError

DEFAULT_TAG_COLOR = "#6b7280"


class TagService:
    """Service for managing tags."""

    def __init__(self, db: Database):
        self.db = db

    def create_tag(self, name: str, color: str = DEFAULT_TAG_COLOR) -> int:
        """Create a tag.

        Tag names are unique ignoring case, since imports match them that way.

        Raises:
            ValidationError: If name is blank or contains a comma
            ConflictError: If a tag with the same name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Tag name is required")
        if "," in name:
            # Tag lists in spreadsheets are comma separated
            raise ValidationError("Tag name cannot contain a comma")

        for tag in self.db.list_tags():
            if tag.name.lower() == name.lower():
                raise ConflictError(f"Tag with name '{tag.name}' already exists")

        return self.db.create_tag(name=name, color=color)

    def get_tag(self, tag_id: int) -> Optional[TagEntity]:
        return self.db.get_tag(tag_id)

    def list_tags(self) -> list[TagEntity]:
        return self.db.list_tags()


class UserService:
    """Service for managing users."""

    def __init__(self, db: Database):
        self.db = db

    def create_user(self, name: str) -> int:
        """Create a user.

        Raises:
            ValidationError: If name is blank
            ConflictError: If a user with the same name exists (ignoring case)
        """
        name = name.strip()
        if not name:
            raise ValidationError("User name is required")

        for user in self.db.list_users():
            if user.name.lower() == name.lower():
                raise ConflictError(f"User with name '{user.name}' already exists")

        return self.db.create_user(name=name)

    def get_user(self, user_id: int) -> Optional[UserEntity]:
        return self.db.get_user(user_id)

    def list_users(self) -> list[UserEntity]:
        return self.db.list_users()
