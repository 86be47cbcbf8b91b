"""
Database Schemas for the Heimdall blog

Each Pydantic model describes the documents of one MongoDB collection.
Attributes are snake_case in Python and stored under their camelCase
names (e.g. password_hash -> "passwordHash").
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Type, Union

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, EmailStr, Field, WithJsonSchema
from pydantic.alias_generators import to_camel

# Stored as a native ObjectId, described as a string in JSON schemas
PyObjectId = Annotated[ObjectId, WithJsonSchema({"type": "string", "format": "objectid"})]


# Enums

class UserRole(str, Enum):
    OWNER = "Owner"
    ADMIN = "Admin"
    EDITOR = "Editor"
    AUTHOR = "Author"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    LOCKED = "locked"
    SUSPENDED = "suspended"


class PostType(str, Enum):
    POST = "post"
    PAGE = "page"


class PostStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    SCHEDULED = "scheduled"
    ARCHIVED = "archived"
    TRASH = "trash"


class PostVisibility(str, Enum):
    PUBLIC = "public"
    MEMBERS_ONLY = "members_only"
    PRIVATE = "private"


class CommentStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class SettingGroup(str, Enum):
    GENERAL = "general"
    DISPLAY = "display"
    SEO = "seo"
    SOCIAL = "social"
    COMMENTS = "comments"


class LoginFailReason(str, Enum):
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_PASSWORD = "invalid_password"
    USER_NOT_FOUND = "user_not_found"
    USER_LOCKED = "user_locked"
    USER_INACTIVE = "user_inactive"
    USER_SUSPENDED = "user_suspended"
    TOO_MANY_ATTEMPTS = "too_many_attempts"


class Document(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
        validate_default=True,
    )

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class User(Document):
    """
    Collection: "users"
    """
    username: str = Field(..., min_length=3, max_length=32)
    email: EmailStr = Field(..., description="Unique email address")
    password_hash: str = Field(..., description="Opaque hash from the credential subsystem")
    display_name: str = Field(..., max_length=64)
    role: UserRole
    profile_image: str = ""
    cover_image: str = ""
    bio: str = Field("", max_length=500)
    location: str = Field("", max_length=100)
    website: str = Field("", max_length=255)
    twitter: str = Field("", max_length=50)
    facebook: str = Field("", max_length=50)
    status: UserStatus = UserStatus.ACTIVE
    login_fail_count: int = Field(0, ge=0)
    locked_until: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    last_login_ip: str = Field("", alias="lastLoginIP")
    created_at: datetime
    updated_at: datetime


class LoginLog(Document):
    """
    Collection: "loginLogs"
    Append-only. user_id is None when the identity could not be resolved.
    """
    user_id: Optional[PyObjectId] = None
    username: str
    email: str = ""
    ip_address: str
    user_agent: str = ""
    success: bool
    # Union keeps codes written by other services readable
    fail_reason: Union[LoginFailReason, str] = ""
    created_at: datetime


class Tag(Document):
    name: str = Field(..., max_length=50)
    slug: str = Field(..., max_length=50)


class Post(Document):
    """
    Collection: "posts"
    markdown and html are stored as supplied; nothing is rendered here.
    """
    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    excerpt: str = Field("", max_length=500)
    markdown: str
    html: str
    featured_image: str = ""
    type: PostType = PostType.POST
    status: PostStatus = PostStatus.DRAFT
    visibility: PostVisibility = PostVisibility.PUBLIC
    author_id: PyObjectId
    tags: List[Tag] = Field(default_factory=list, max_length=20)
    meta_title: str = Field("", max_length=70)
    meta_description: str = Field("", max_length=160)
    canonical_url: str = ""
    reading_time: int = Field(1, ge=1)
    word_count: int = Field(0, ge=0)
    view_count: int = Field(0, ge=0)
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class Comment(Document):
    """
    Collection: "comments"
    author_id is None for guest comments, parent_id is None for top-level ones.
    """
    post_id: PyObjectId
    author_id: Optional[PyObjectId] = None
    author_name: str
    author_email: str
    author_url: str = ""
    content: str
    html_content: str
    status: CommentStatus = CommentStatus.PENDING
    parent_id: Optional[PyObjectId] = None
    ip_address: str
    user_agent: str = ""
    like_count: int = Field(0, ge=0)
    created_at: datetime
    updated_at: datetime


class Setting(Document):
    """
    Collection: "settings"
    """
    key: str
    value: str = Field(..., description="Stored as text, parsed by the reader")
    group: SettingGroup
    created_at: datetime
    updated_at: datetime


class Media(Document):
    """
    Collection: "media"
    """
    url: str
    type: str = Field(..., description="image | video | audio | file")
    mime_type: str
    size: int = Field(..., ge=0, description="Size in bytes")
    created_at: datetime
    updated_at: datetime


COLLECTIONS: Dict[Type[Document], str] = {
    User: "users",
    LoginLog: "loginLogs",
    Post: "posts",
    Comment: "comments",
    Setting: "settings",
    Media: "media",
}

COLLECTION_NAMES: List[str] = list(COLLECTIONS.values())


def model_json_schemas() -> Dict[str, Any]:
    return {name: model.model_json_schema(by_alias=True) for model, name in COLLECTIONS.items()}
