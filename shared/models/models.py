"""
shared/models/models.py
All SQLAlchemy ORM models for the site CMS.
Collections use generated text UUID keys; singleton pages use fixed ids.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from config.database import Base

JSONType = JSON().with_variant(JSONB(), "postgresql")


def _uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ── Enumerations ──────────────────────────────────────────────

class UserRole(str, PyEnum):
    USER = "USER"
    ADMIN = "ADMIN"


class UserStatus(str, PyEnum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    BLOCKED = "BLOCKED"


class MessageStatus(str, PyEnum):
    NEW = "NEW"
    READ = "READ"
    REPLIED = "REPLIED"


class StatPage(str, PyEnum):
    HOME = "HOME"
    ABOUT = "ABOUT"
    TESTIMONIALS = "TESTIMONIALS"


class HeroPage(str, PyEnum):
    WORKS = "WORKS"
    GALLERY = "GALLERY"
    TESTIMONIALS = "TESTIMONIALS"
    ABOUT = "ABOUT"
    CONTACT = "CONTACT"


class ValueIcon(str, PyEnum):
    """Icons the About page "values" cards can render."""
    HEART = "Heart"
    AWARD = "Award"
    TARGET = "Target"
    EYE = "Eye"
    STAR = "Star"
    SPARKLES = "Sparkles"
    USERS = "Users"


# Fixed singleton identifiers
SETTINGS_ID = "settings"
ABOUT_ID = "about"
CONTACT_PAGE_ID = "contact"


# ── Mixins ────────────────────────────────────────────────────

class TimestampMixin:
    """Adds created_at and updated_at to any model."""
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        onupdate=_utcnow,
        nullable=False,
    )


# ── Accounts ──────────────────────────────────────────────────

class User(TimestampMixin, Base):
    """Admin console account. Self-registered users start PENDING."""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column("password", String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole), nullable=False, default=UserRole.USER
    )
    status: Mapped[UserStatus] = mapped_column(
        Enum(UserStatus), nullable=False, default=UserStatus.PENDING
    )

    __table_args__ = (Index("ix_users_status", "status"),)

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role}/{self.status})>"


class AdminAuditLog(Base):
    """Append-only log of admin moderation actions."""
    __tablename__ = "admin_audit_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    admin_id: Mapped[str] = mapped_column(String(36), nullable=False)
    action: Mapped[str] = mapped_column(String(100), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    payload: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)
    ip_address: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )

    __table_args__ = (Index("ix_admin_audit_created_at", "created_at"),)


# ── Portfolio ─────────────────────────────────────────────────

class Event(TimestampMixin, Base):
    """A portfolio event shown on the Works page."""
    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    cover_image: Mapped[str] = mapped_column(Text, default="", nullable=False)
    cover_image_public_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    client: Mapped[str] = mapped_column(String(255), nullable=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    gallery: Mapped[List["GalleryImage"]] = relationship(
        back_populates="event", order_by="GalleryImage.created_at"
    )

    __table_args__ = (Index("ix_events_category", "category"),)


class GalleryImage(Base):
    """Gallery photo. event_id is a weak reference: deleting an event detaches it."""
    __tablename__ = "gallery_images"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    public_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    event_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("events.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )

    event: Mapped[Optional["Event"]] = relationship(back_populates="gallery")

    __table_args__ = (Index("ix_gallery_images_event_id", "event_id"),)


class Category(Base):
    """Portfolio category; slug is always derived from name."""
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )


class Testimonial(TimestampMixin, Base):
    __tablename__ = "testimonials"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[Optional[int]] = mapped_column(SmallInteger, nullable=True)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class Stat(Base):
    """Headline number ("500+", "4.9") shown on a given page."""
    __tablename__ = "stats"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    value: Mapped[str] = mapped_column(String(50), nullable=False)
    page: Mapped[StatPage] = mapped_column(Enum(StatPage), nullable=False)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )

    __table_args__ = (Index("ix_stats_page", "page"),)


# ── Singleton pages ───────────────────────────────────────────

class SiteSettings(TimestampMixin, Base):
    """Home page, brand and footer content. Single row, id "settings"."""
    __tablename__ = "site_settings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=SETTINGS_ID)

    brand_logo: Mapped[str] = mapped_column(Text, default="")
    brand_logo_public_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    brand_subtitle: Mapped[str] = mapped_column(String(255), default="")

    hero_badge: Mapped[str] = mapped_column(String(255), default="")
    hero_title: Mapped[str] = mapped_column(String(255), default="")
    hero_subtitle: Mapped[str] = mapped_column(Text, default="")
    hero_image: Mapped[str] = mapped_column(Text, default="")
    hero_image_public_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    about_heading: Mapped[str] = mapped_column(String(255), default="")
    about_text: Mapped[str] = mapped_column(Text, default="")
    about_image1: Mapped[str] = mapped_column(Text, default="")
    about_image1_public_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    about_image2: Mapped[str] = mapped_column(Text, default="")
    about_image2_public_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    portfolio_title: Mapped[str] = mapped_column(String(255), default="")
    portfolio_subtitle: Mapped[str] = mapped_column(String(255), default="")
    portfolio_description: Mapped[str] = mapped_column(Text, default="")

    testimonial_title: Mapped[str] = mapped_column(String(255), default="")
    testimonial_subtitle: Mapped[str] = mapped_column(String(255), default="")

    cta_title: Mapped[str] = mapped_column(String(255), default="")
    cta_subtitle: Mapped[str] = mapped_column(String(255), default="")

    privacy_policy_html: Mapped[str] = mapped_column(Text, default="")
    terms_html: Mapped[str] = mapped_column(Text, default="")

    contact_email: Mapped[str] = mapped_column(String(255), default="")
    contact_phone: Mapped[str] = mapped_column(String(50), default="")
    address: Mapped[str] = mapped_column(Text, default="")

    social_links: Mapped[dict] = mapped_column(JSONType, default=dict)


class AboutPage(TimestampMixin, Base):
    """About page content. Single row, id "about"."""
    __tablename__ = "about_page"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=ABOUT_ID)
    hero_title: Mapped[str] = mapped_column(String(255), default="")
    hero_subtitle: Mapped[str] = mapped_column(Text, default="")
    hero_image: Mapped[str] = mapped_column(Text, default="")
    hero_image_public_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    story_title: Mapped[str] = mapped_column(String(255), default="")
    story_content: Mapped[str] = mapped_column(Text, default="")
    vision: Mapped[str] = mapped_column(Text, default="")
    mission: Mapped[str] = mapped_column(Text, default="")
    values_section_title: Mapped[str] = mapped_column(String(255), default="")
    values_section_subtitle: Mapped[str] = mapped_column(Text, default="")
    values: Mapped[list] = mapped_column(JSONType, default=list)
    # e.g. [{"icon": "Heart", "title": "Passion", "description": "..."}]
    years_experience: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)


class ContactPage(TimestampMixin, Base):
    """Contact page copy. Single row, id "contact"."""
    __tablename__ = "contact_page"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=CONTACT_PAGE_ID)
    badge: Mapped[str] = mapped_column(String(255), default="")
    title: Mapped[str] = mapped_column(String(255), default="")
    subtitle: Mapped[str] = mapped_column(Text, default="")
    email: Mapped[str] = mapped_column(String(255), default="")
    phone: Mapped[str] = mapped_column(String(50), default="")
    address: Mapped[str] = mapped_column(Text, default="")
    event_types: Mapped[list] = mapped_column(JSONType, default=list)


class PageHero(TimestampMixin, Base):
    """Per-page hero banner, keyed by the page id (WORKS, GALLERY, ...)."""
    __tablename__ = "page_heroes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    badge: Mapped[str] = mapped_column(String(255), default="")
    title: Mapped[str] = mapped_column(String(255), default="")
    subtitle: Mapped[str] = mapped_column(Text, default="")


# ── Inbox ─────────────────────────────────────────────────────

class ContactMessage(Base):
    """Public contact-form submission. Status moves only by admin action."""
    __tablename__ = "contact_messages"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    event_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[MessageStatus] = mapped_column(
        Enum(MessageStatus), default=MessageStatus.NEW, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )

    __table_args__ = (Index("ix_contact_messages_status", "status"),)
