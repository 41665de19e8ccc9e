"""
shared/utils/singletons.py
Upsert-on-read helpers for single-row content tables
(site settings, about page, contact page, page heroes).

Each singleton is addressed by a fixed string id. Reading a row that does
not exist yet persists it with the defaults below, so every later read
returns the same object.
"""

from typing import Any, Dict, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import Base
from shared.models.models import HeroPage

ModelT = TypeVar("ModelT", bound=Base)


SITE_SETTINGS_DEFAULTS: Dict[str, Any] = {
    "brand_logo": "",
    "brand_subtitle": "Event Planning & Design",
    "hero_badge": "",
    "hero_title": "Your Event, Perfectly Planned",
    "hero_subtitle": "We design unforgettable experiences",
    "hero_image": "",
    "about_heading": "About Us",
    "about_text": "",
    "about_image1": "",
    "about_image2": "",
    "portfolio_title": "Our Portfolio",
    "portfolio_subtitle": "Featured Events",
    "portfolio_description": "",
    "testimonial_title": "Testimonials",
    "testimonial_subtitle": "What our clients say",
    "cta_title": "Start Planning Your Event",
    "cta_subtitle": "Let’s make something unforgettable",
    "privacy_policy_html": "",
    "terms_html": "",
    "contact_email": "",
    "contact_phone": "",
    "address": "",
    "social_links": {},
}

ABOUT_PAGE_DEFAULTS: Dict[str, Any] = {
    "hero_title": "About Us",
    "hero_subtitle": "Crafting unforgettable moments since day one",
    "hero_image": "",
    "story_title": "Our Story",
    "story_content": "",
    "vision": "",
    "mission": "",
    "values_section_title": "Our Values",
    "values_section_subtitle": "The principles behind every event we plan",
    "values": [],
    "years_experience": None,
}

CONTACT_PAGE_DEFAULTS: Dict[str, Any] = {
    "badge": "Get in Touch",
    "title": "Let’s Create Something Beautiful",
    "subtitle": "Ready to start planning your event? We’d love to hear from you.",
    "email": "",
    "phone": "",
    "address": "",
    "event_types": [],
}

PAGE_HERO_DEFAULTS: Dict[HeroPage, Dict[str, str]] = {
    HeroPage.WORKS: {
        "badge": "Our Portfolio",
        "title": "Events We’ve Crafted",
        "subtitle": "Explore our curated experiences",
    },
    HeroPage.GALLERY: {
        "badge": "Gallery",
        "title": "Moments We’ve Captured",
        "subtitle": "A glimpse into the celebrations we’ve designed",
    },
    HeroPage.TESTIMONIALS: {
        "badge": "Testimonials",
        "title": "Kind Words From Our Clients",
        "subtitle": "Stories from the people we’ve celebrated with",
    },
    HeroPage.ABOUT: {
        "badge": "About Us",
        "title": "The Team Behind The Magic",
        "subtitle": "Passionate planners, meticulous designers",
    },
    HeroPage.CONTACT: {
        "badge": "Get in Touch",
        "title": "Let’s Plan Together",
        "subtitle": "Tell us about the event you have in mind",
    },
}


async def get_or_create(
    db: AsyncSession,
    model: Type[ModelT],
    row_id: str,
    defaults: Dict[str, Any],
) -> ModelT:
    """Return the singleton row, persisting it with `defaults` if absent."""
    row = await db.get(model, row_id)
    if row is not None:
        return row

    row = model(id=row_id, **_copy(defaults))
    db.add(row)
    try:
        await db.commit()
        # Reload so the first read serializes exactly like every later one
        await db.refresh(row)
    except IntegrityError:
        # A concurrent first read inserted it; use theirs.
        await db.rollback()
        row = await db.get(model, row_id)
    return row


async def upsert(
    db: AsyncSession,
    model: Type[ModelT],
    row_id: str,
    defaults: Dict[str, Any],
    values: Dict[str, Any],
) -> ModelT:
    """Apply `values` to the singleton row, creating it from `defaults` first if needed."""
    row = await get_or_create(db, model, row_id, defaults)
    for field, value in values.items():
        setattr(row, field, value)
    await db.commit()
    return row


def _copy(defaults: Dict[str, Any]) -> Dict[str, Any]:
    # Fresh containers per row so JSON defaults are never shared
    return {
        k: (v.copy() if isinstance(v, (dict, list)) else v)
        for k, v in defaults.items()
    }
