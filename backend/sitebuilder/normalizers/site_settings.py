from sitebuilder.application.settings.site_settings import whatsapp_url
from .page import _iso


def _socials(settings, visible_only):
    links = sorted(settings.socials or [], key=lambda item: item.get("order") or 0)
    if visible_only:
        links = [item for item in links if item.get("is_visible") is not False]
    return links


def normalize_site_settings(settings, admin=False):
    """
    Public view hides invisible social links and always exposes a clickable
    WhatsApp link. The admin view returns what was stored.
    """
    data = {
        "site_name": settings.site_name,
        "brand_tagline": settings.brand_tagline,
        "cnpj": settings.cnpj,
        "crp": settings.crp,
        "contact_email": settings.contact_email,
        "logo_url": settings.logo_url,
        "socials": _socials(settings, visible_only=not admin),
        "whatsapp_enabled": bool(settings.whatsapp_enabled),
        "whatsapp_link": settings.whatsapp_link,
        "whatsapp_message": settings.whatsapp_message,
        "whatsapp_position": settings.whatsapp_position or "right",
        "hide_schedule_cta": bool(settings.hide_schedule_cta),
    }

    if admin:
        data["updated_at"] = _iso(settings.updated_at)
    else:
        data["whatsapp_link"] = whatsapp_url(settings.whatsapp_link, settings.whatsapp_message)

    return data
