"""
Site-wide settings singleton.

The row is created with defaults on first read, so public pages can always
render the header, footer, social links and WhatsApp button.
"""
import re
from typing import Any, Dict
from urllib.parse import quote

from sitebuilder.extensions import db
from sitebuilder.models.site_settings import SITE_SETTINGS_ID, SiteSettings
from sitebuilder.domain.layout.fields import is_http_url
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .schemas import SiteSettingsInput

DEFAULT_SITE_NAME = "Meu Site"
DEFAULT_TAGLINE = "Psicologia Junguiana"


def whatsapp_url(link, message=None):
    """
    Turn the stored WhatsApp contact into a clickable link.

    A link made only of phone digits becomes `https://wa.me/<digits>`, with the
    default message as `?text=` when one is set.
    """
    raw = (link or "").strip()
    text = (message or "").strip()
    if not raw:
        return None
    if is_http_url(raw):
        return raw
    digits = re.sub(r"\D", "", raw)
    if digits and re.fullmatch(r"[\d\s()+\-]+", raw):
        url = f"https://wa.me/{digits}"
        return f"{url}?text={quote(text)}" if text else url
    return f"https://{raw}"


def get_site_settings() -> SiteSettings:
    settings = db.session.get(SiteSettings, SITE_SETTINGS_ID)
    if settings is not None:
        return settings

    settings = SiteSettings(id=SITE_SETTINGS_ID)
    settings.site_name = DEFAULT_SITE_NAME
    settings.brand_tagline = DEFAULT_TAGLINE
    settings.socials = []
    settings.whatsapp_enabled = False
    settings.whatsapp_position = "right"
    settings.hide_schedule_cta = False

    with transactional():
        db.session.add(settings)

    return settings


def update_site_settings(
    *,
    actor_id: str | None,
    data: Dict[str, Any],
) -> SiteSettings:
    """Replace the settings; socials are stored sorted by `order` (list position when missing)."""
    payload = SiteSettingsInput.model_validate(data)
    settings = get_site_settings()

    socials = [
        {**link.model_dump(), "order": link.order if link.order is not None else index}
        for index, link in enumerate(payload.socials)
    ]
    socials.sort(key=lambda item: item["order"])

    with transactional():
        settings.site_name = payload.site_name.strip()
        settings.brand_tagline = payload.brand_tagline
        settings.cnpj = payload.cnpj
        settings.crp = payload.crp
        settings.contact_email = str(payload.contact_email) if payload.contact_email else None
        settings.logo_url = str(payload.logo_url) if payload.logo_url else None
        settings.socials = socials
        settings.whatsapp_enabled = payload.whatsapp_enabled
        settings.whatsapp_link = whatsapp_url(payload.whatsapp_link, payload.whatsapp_message)
        settings.whatsapp_message = payload.whatsapp_message
        settings.whatsapp_position = payload.whatsapp_position
        settings.hide_schedule_cta = payload.hide_schedule_cta

        log_action(
            action="site_settings.update",
            entity_type="site_settings",
            entity_id=settings.id,
            actor_id=actor_id,
            payload={"site_name": settings.site_name, "socials": len(socials)},
        )

    return settings
