"""
shared/schemas/schemas.py
All Pydantic v2 request/response schemas for the site API.

Wire format is camelCase (coverImage, createdAt); Python attributes stay
snake_case. Request schemas ignore unknown keys so only declared fields
ever reach the ORM.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from shared.models.models import (
    HeroPage,
    MessageStatus,
    StatPage,
    UserRole,
    UserStatus,
    ValueIcon,
)


# ── Base ──────────────────────────────────────────────────────

class BaseSchema(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        use_enum_values=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class MessageResponse(BaseSchema):
    message: str


class SuccessResponse(BaseSchema):
    success: bool = True


# ── Auth ──────────────────────────────────────────────────────

class RegisterRequest(BaseSchema):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseSchema):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class SessionUser(BaseSchema):
    """Public-safe projection returned alongside a token."""
    id: str
    email: str
    role: UserRole
    status: UserStatus


class LoginResponse(BaseSchema):
    token: str
    user: SessionUser


# ── Users ─────────────────────────────────────────────────────

class UserResponse(BaseSchema):
    id: str
    email: str
    role: UserRole
    status: UserStatus
    created_at: datetime


class AuditLogResponse(BaseSchema):
    id: str
    admin_id: str
    action: str
    entity_type: str
    entity_id: Optional[str]
    payload: Optional[Dict[str, Any]]
    ip_address: Optional[str]
    created_at: datetime


# ── Events & Gallery ──────────────────────────────────────────

class EventCreate(BaseSchema):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=100)
    date: datetime
    client: str = Field(..., min_length=1, max_length=255)
    cover_image: str = ""
    cover_image_public_id: Optional[str] = Field(None, max_length=255)
    featured: bool = False


class EventUpdate(BaseSchema):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    date: Optional[datetime] = None
    client: Optional[str] = Field(None, min_length=1, max_length=255)
    cover_image: Optional[str] = None
    cover_image_public_id: Optional[str] = Field(None, max_length=255)
    featured: Optional[bool] = None


class GalleryImageBrief(BaseSchema):
    id: str
    image_url: str


class EventResponse(BaseSchema):
    id: str
    title: str
    description: str
    category: str
    date: datetime
    client: str
    cover_image: str
    featured: bool
    gallery: List[GalleryImageBrief] = []
    created_at: datetime
    updated_at: datetime


class EventBrief(BaseSchema):
    id: str
    title: str


class GalleryImageResponse(BaseSchema):
    id: str
    image_url: str
    event_id: Optional[str]
    event: Optional[EventBrief] = None
    created_at: datetime


class UploadResponse(BaseSchema):
    url: str
    public_id: str


# ── Testimonials ──────────────────────────────────────────────

class TestimonialCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field("", max_length=255)
    message: str = Field(..., min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)
    featured: bool = False


class TestimonialUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[str] = Field(None, max_length=255)
    message: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)
    featured: Optional[bool] = None


class TestimonialResponse(BaseSchema):
    id: str
    name: str
    role: str
    message: str
    rating: Optional[int]
    featured: bool
    created_at: datetime


# ── Categories ────────────────────────────────────────────────

class CategoryCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100)
    order: int = 0

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Category name is required")
        return v.strip()


class CategoryUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    order: Optional[int] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Category name cannot be blank")
        return v.strip() if v is not None else v


class CategoryResponse(BaseSchema):
    id: str
    name: str
    slug: str
    order: int


# ── Stats ─────────────────────────────────────────────────────

class StatCreate(BaseSchema):
    label: str = Field(..., min_length=1, max_length=255)
    value: str = Field(..., min_length=1, max_length=50)
    page: StatPage
    order: int = 0


class StatUpdate(BaseSchema):
    label: Optional[str] = Field(None, min_length=1, max_length=255)
    value: Optional[str] = Field(None, min_length=1, max_length=50)
    page: Optional[StatPage] = None
    order: Optional[int] = None


class StatResponse(BaseSchema):
    id: str
    label: str
    value: str
    page: StatPage
    order: int


# ── Site Settings ─────────────────────────────────────────────

class SocialLinks(BaseSchema):
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None


class SiteSettingsUpdate(BaseSchema):
    """Text fields only; images change through the upload endpoints."""
    brand_subtitle: Optional[str] = None
    hero_badge: Optional[str] = None
    hero_title: Optional[str] = None
    hero_subtitle: Optional[str] = None
    about_heading: Optional[str] = None
    about_text: Optional[str] = None
    portfolio_title: Optional[str] = None
    portfolio_subtitle: Optional[str] = None
    portfolio_description: Optional[str] = None
    testimonial_title: Optional[str] = None
    testimonial_subtitle: Optional[str] = None
    cta_title: Optional[str] = None
    cta_subtitle: Optional[str] = None
    privacy_policy_html: Optional[str] = None
    terms_html: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    social_links: Optional[SocialLinks] = None


class SiteSettingsResponse(BaseSchema):
    id: str
    brand_logo: str
    brand_subtitle: str
    hero_badge: Optional[str]
    hero_title: str
    hero_subtitle: str
    hero_image: str
    about_heading: str
    about_text: str
    about_image1: str
    about_image2: str
    portfolio_title: str
    portfolio_subtitle: str
    portfolio_description: str
    testimonial_title: str
    testimonial_subtitle: str
    cta_title: str
    cta_subtitle: str
    privacy_policy_html: str
    terms_html: str
    contact_email: str
    contact_phone: str
    address: str
    social_links: Dict[str, Any]
    created_at: datetime
    updated_at: datetime


# ── About Page ────────────────────────────────────────────────

class AboutValue(BaseSchema):
    icon: ValueIcon
    title: str = Field(..., max_length=255)
    description: Optional[str] = None


class AboutPageUpdate(BaseSchema):
    hero_title: Optional[str] = None
    hero_subtitle: Optional[str] = None
    story_title: Optional[str] = None
    story_content: Optional[str] = None
    vision: Optional[str] = None
    mission: Optional[str] = None
    values_section_title: Optional[str] = None
    values_section_subtitle: Optional[str] = None
    values: Optional[List[AboutValue]] = None
    years_experience: Optional[int] = Field(None, ge=0, le=200)


class AboutPageResponse(BaseSchema):
    id: str
    hero_title: str
    hero_subtitle: str
    hero_image: str
    story_title: str
    story_content: str
    vision: str
    mission: str
    values_section_title: str
    values_section_subtitle: str
    values: List[AboutValue]
    years_experience: Optional[int]
    updated_at: datetime


class AboutHeroResponse(BaseSchema):
    hero_image: str


# ── Contact Page ──────────────────────────────────────────────

class ContactPageUpdate(BaseSchema):
    badge: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    event_types: Optional[List[str]] = None


class ContactPageResponse(BaseSchema):
    id: str
    badge: str
    title: str
    subtitle: str
    email: str
    phone: str
    address: str
    event_types: List[str]


# ── Page Hero ─────────────────────────────────────────────────

class PageHeroUpdate(BaseSchema):
    badge: Optional[str] = Field(None, max_length=255)
    title: Optional[str] = Field(None, max_length=255)
    subtitle: Optional[str] = None


class PageHeroResponse(BaseSchema):
    id: HeroPage
    badge: str
    title: str
    subtitle: str


# ── Contact Messages ──────────────────────────────────────────

class ContactMessageCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    event_type: Optional[str] = Field(None, max_length=100)
    message: str = Field(..., min_length=1, max_length=5000)

    @field_validator("phone", "event_type")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class ContactMessageResponse(BaseSchema):
    id: str
    name: str
    email: str
    phone: Optional[str]
    event_type: Optional[str]
    message: str
    status: MessageStatus
    created_at: datetime


class ContactSubmitResponse(BaseSchema):
    success: bool = True
    contact: ContactMessageResponse


class ContactStatusUpdate(BaseSchema):
    status: MessageStatus


# ── Admin dashboard ───────────────────────────────────────────

class AdminSummaryResponse(BaseSchema):
    total_events: int
    gallery_images: int
    testimonials: int
    new_messages: int
    pending_users: int
    recent_events: List[EventBrief]


class AuditLogPage(BaseSchema):
    items: List[AuditLogResponse]
    total: int
    page: int
    page_size: int
