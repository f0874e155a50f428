"""
Database Schemas for the Portfolio Builder API

Each Pydantic model corresponds to a MongoDB collection.
The collection name is the lowercase of the entity name.

Collections:
- Theme: visual theme presets keyed by themeName
- User: portfolio owners keyed by username
- Project: portfolio projects owned by a user (generated id)
- Skill: skills keyed by name

The *Create models carry the full set of rules; the *Update models reuse the
same field types with everything optional, so a partial update is checked
field by field exactly like a create. Natural keys are absent from the update
models, which makes any attempt to change them a silent no-op.
"""
import re
from typing import Annotated, List, Optional

from bson.objectid import ObjectId
from pydantic import AfterValidator, BaseModel, BeforeValidator, EmailStr, Field

FONT_FAMILIES = ("Arial", "Helvetica", "Times New Roman", "Georgia", "Verdana", "Roboto", "Open Sans")
SKILL_CATEGORIES = ("frontend", "backend", "database", "devops", "mobile", "design", "other")
PROJECT_STATUSES = ("planning", "in-progress", "completed", "on-hold")

HEX_COLOR_RE = re.compile(r"^#([0-9A-Fa-f]{6}|[0-9A-Fa-f]{3})$")
USERNAME_RE = re.compile(r"^[A-Za-z0-9_]+$")
GITHUB_URL_RE = re.compile(r"^https://github\.com/.*")
URL_RE = re.compile(r"^https?://.*")

DEFAULT_PROJECT_IMAGE = "https://via.placeholder.com/400x300"
DEFAULT_SKILL_ICON = "https://via.placeholder.com/50x50"


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _length(label: str, min_len: Optional[int] = None, max_len: Optional[int] = None):
    def check(value: str) -> str:
        if min_len is not None and len(value) < min_len:
            raise ValueError(f"{label} must be at least {min_len} characters long")
        if max_len is not None and len(value) > max_len:
            raise ValueError(f"{label} cannot exceed {max_len} characters")
        return value
    return check


def _matches(pattern, message: str):
    def check(value: str) -> str:
        if not pattern.match(value):
            raise ValueError(message)
        return value
    return check


def _font_family(value: str) -> str:
    if value not in FONT_FAMILIES:
        raise ValueError(f"Font family must be one of: {', '.join(FONT_FAMILIES)}")
    return value


def _category(value: str) -> str:
    value = value.lower()
    if value not in SKILL_CATEGORIES:
        raise ValueError(f"Category must be one of: {', '.join(SKILL_CATEGORIES)}")
    return value


def _status(value: str) -> str:
    if value not in PROJECT_STATUSES:
        raise ValueError(f"Status must be one of: {', '.join(PROJECT_STATUSES)}")
    return value


def _proficiency(value: int) -> int:
    if value < 1 or value > 5:
        raise ValueError("Proficiency level must be between 1 and 5")
    return value


def _technologies(value: List[str]) -> List[str]:
    items = [t.strip() for t in value if t.strip()]
    if not items:
        raise ValueError("At least one technology is required")
    return items


def _user_id(value: str) -> str:
    if not ObjectId.is_valid(value):
        raise ValueError("Invalid user ID format")
    return value


Trimmed = BeforeValidator(_strip)

ThemeName = Annotated[str, Trimmed, AfterValidator(_length("Theme name", 2))]
HexColor = Annotated[str, Trimmed, AfterValidator(_matches(HEX_COLOR_RE, "Invalid color format"))]
FontFamily = Annotated[str, AfterValidator(_font_family)]

Username = Annotated[
    str,
    Trimmed,
    AfterValidator(_length("Username", 3, 20)),
    AfterValidator(_matches(USERNAME_RE, "Username can only contain letters, numbers and underscores")),
]
FullName = Annotated[str, Trimmed, AfterValidator(_length("Full name", 2))]
Bio = Annotated[str, AfterValidator(_length("Bio", max_len=500))]
WebUrl = Annotated[str, Trimmed, AfterValidator(_matches(URL_RE, "Invalid URL format"))]

Title = Annotated[str, Trimmed, AfterValidator(_length("Title", 3, 100))]
Description = Annotated[str, AfterValidator(_length("Description", 10, 1000))]
Technologies = Annotated[List[str], AfterValidator(_technologies)]
GithubUrl = Annotated[str, Trimmed, AfterValidator(_matches(GITHUB_URL_RE, "Invalid GitHub URL format"))]
Status = Annotated[str, AfterValidator(_status)]
UserId = Annotated[str, Trimmed, AfterValidator(_user_id)]

SkillName = Annotated[str, Trimmed, AfterValidator(_length("Skill name", 2, 50))]
Category = Annotated[str, Trimmed, AfterValidator(_category)]
Proficiency = Annotated[int, AfterValidator(_proficiency)]
SkillDescription = Annotated[str, AfterValidator(_length("Description", max_len=200))]


class ThemeCreate(BaseModel):
    themeName: ThemeName = Field(..., description="Unique name for the theme", examples=["Modern Dark"])
    primaryColor: HexColor = Field(..., examples=["#FF5733"])
    secondaryColor: HexColor = Field(..., examples=["#33FF57"])
    fontFamily: FontFamily = Field(..., examples=["Roboto"])


class ThemeUpdate(BaseModel):
    primaryColor: Optional[HexColor] = None
    secondaryColor: Optional[HexColor] = None
    fontFamily: Optional[FontFamily] = None


class UserCreate(BaseModel):
    username: Username = Field(..., description="Unique handle", examples=["john_doe"])
    email: EmailStr
    fullName: FullName = Field(..., examples=["John Doe"])
    bio: Optional[Bio] = None
    profilePicture: Optional[WebUrl] = None


class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    fullName: Optional[FullName] = None
    bio: Optional[Bio] = None
    profilePicture: Optional[WebUrl] = None


class ProjectCreate(BaseModel):
    title: Title = Field(..., examples=["Portfolio Website"])
    description: Description
    technologies: Technologies = Field(..., examples=[["React", "Node.js", "MongoDB"]])
    userId: UserId = Field(..., description="Id of the owning user", examples=["507f1f77bcf86cd799439011"])
    githubUrl: Optional[GithubUrl] = None
    liveUrl: Optional[WebUrl] = None
    imageUrl: str = DEFAULT_PROJECT_IMAGE
    status: Status = "planning"


class ProjectUpdate(BaseModel):
    title: Optional[Title] = None
    description: Optional[Description] = None
    technologies: Optional[Technologies] = None
    githubUrl: Optional[GithubUrl] = None
    liveUrl: Optional[WebUrl] = None
    imageUrl: Optional[str] = None
    status: Optional[Status] = None


class SkillCreate(BaseModel):
    name: SkillName = Field(..., examples=["JavaScript"])
    category: Category = Field(..., examples=["frontend"])
    proficiencyLevel: Proficiency = Field(..., description="Proficiency level from 1 to 5", examples=[4])
    description: SkillDescription = ""
    iconUrl: str = DEFAULT_SKILL_ICON


class SkillUpdate(BaseModel):
    category: Optional[Category] = None
    proficiencyLevel: Optional[Proficiency] = None
    description: Optional[SkillDescription] = None
    iconUrl: Optional[str] = None


def changes(payload: BaseModel) -> dict:
    """Fields the caller actually sent, minus explicit nulls."""
    return payload.model_dump(exclude_unset=True, exclude_none=True)
