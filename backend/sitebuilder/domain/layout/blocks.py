"""
Per-type block normalization.

`normalize_block` validates a raw block against the block union, applies the
common fields (id, timestamps, lock, visibility, span, row) and then the
type-specific canonicalization. The result is a plain camelCase dict ready
to be stored in the layout JSON column.
"""
import logging

from pydantic import ValidationError

from sitebuilder.domain.invariants.exceptions import InvariantViolation
from .constants import (
    ALLOWED_HERO_MEDIA_MODES,
    CONTACT_INFO_DEFAULTS,
    CTA_DEFAULTS,
    FORM_DEFAULTS,
    HERO_IMAGE_HEIGHT_PRESETS,
    HERO_IMAGE_HEIGHT_PX,
    HERO_QUOTE,
    HERO_QUOTE_AUTHOR,
    HERO_SMALL_CARDS,
    HERO_V1_DEFAULTS,
    RECENT_POSTS_DEFAULTS,
    SERVICE_DESCRIPTION_MAX,
    SERVICES_DEFAULTS,
    WHATSAPP_LABEL,
)
from .fields import (
    clamp,
    first_set,
    is_http_url,
    is_iso_date,
    new_id,
    normalize_href,
    normalize_internal_href,
    trimmed,
    utc_now_iso,
)
from .sanitize import sanitize_content
from .schema import HeroDataV2, parse_block

logger = logging.getLogger(__name__)


def normalize_block(block, now=None):
    """
    Return the canonical form of `block`, or None when it does not validate.

    Raises InvariantViolation for content the editor must fix (an image with
    a non-http source, a button without a usable link).
    """
    now = now or utc_now_iso()
    try:
        parsed = parse_block(block)
    except ValidationError as exc:
        logger.debug("Dropping invalid block: %s", exc.errors()[:1])
        return None
    return _normalize_parsed(parsed, now)


def _normalize_parsed(block, now):
    common = {
        "id": block.id or new_id(),
        "type": block.type,
        "createdAt": block.created_at if is_iso_date(block.created_at) else now,
        "updatedAt": now,
        "isLocked": first_set(block.is_locked, block.type == "hero"),
        "visible": first_set(block.visible, True),
        "colSpan": clamp(block.col_span or 1, 1, 3),
    }
    if block.row_index is not None and block.row_index >= 0:
        common["rowIndex"] = block.row_index

    handler = _NORMALIZERS.get(block.type)
    if handler is None:
        return None
    if block.type == "hero":
        common["isLocked"] = True
    common["data"] = handler(block.data, now)
    return common


# -------------------------------------------------
# Content blocks
# -------------------------------------------------
def _text(data, now):
    return {
        "contentHtml": sanitize_content(data.content_html or ""),
        "width": data.width or "normal",
        "background": data.background or "none",
    }


def _image(data, now):
    src = data.src.strip()
    if not is_http_url(src):
        raise InvariantViolation("Image source must be a secure http(s) URL")
    return {
        "mediaId": data.media_id,
        "src": src,
        "alt": first_set(data.alt, ""),
        "title": data.title,
        "caption": data.caption,
        "size": data.size or 100,
        "align": data.align or "center",
        "cropRatio": data.crop_ratio,
        "naturalWidth": data.natural_width,
        "naturalHeight": data.natural_height,
        "cropX": data.crop_x,
        "cropY": data.crop_y,
        "cropWidth": data.crop_width,
        "cropHeight": data.crop_height,
        "heightPct": data.height_pct,
    }


def _button(data, now):
    href = normalize_href(data.href)
    if not href:
        raise InvariantViolation("Button link must be an http(s) URL or a site path")
    return {
        "label": data.label.strip(),
        "href": href,
        "linkMode": data.link_mode,
        "pageKey": data.page_key,
        "pageId": data.page_id,
        "slug": data.slug,
        "newTab": first_set(data.new_tab, False),
        "variant": data.variant or "primary",
        "icon": data.icon,
    }


def _button_group(data, now):
    buttons = []
    for button in data.buttons:
        href = normalize_href(button.href)
        if not href:
            logger.debug("Dropping button %r with unusable link %r", button.label, button.href)
            continue
        buttons.append({
            "id": button.id or new_id(),
            "label": button.label.strip(),
            "href": href,
            "variant": button.variant or "primary",
            "linkMode": button.link_mode,
            "pageKey": button.page_key,
            "pageId": button.page_id,
            "slug": button.slug,
            "newTab": first_set(button.new_tab, False),
        })
    return {
        "buttons": buttons,
        "align": data.align or "start",
        "stackOnMobile": first_set(data.stack_on_mobile, True),
    }


def _pills(data, now):
    source = data.pills or data.items or []
    pills = [
        pill if isinstance(pill, str) else pill.model_dump(by_alias=True, exclude_unset=True)
        for pill in source
    ]
    return {
        "pills": pills,
        "size": data.size or "sm",
        "variant": data.variant or "neutral",
    }


def _span(data, now):
    return {"kind": data.kind or "divider"}


def _recent_posts(data, now):
    return {
        "title": trimmed(data.title) or RECENT_POSTS_DEFAULTS["title"],
        "subtitle": trimmed(data.subtitle) or RECENT_POSTS_DEFAULTS["subtitle"],
        "ctaLabel": trimmed(data.cta_label) or RECENT_POSTS_DEFAULTS["ctaLabel"],
        "ctaHref": normalize_href(data.cta_href) or RECENT_POSTS_DEFAULTS["ctaHref"],
        "ctaLinkMode": data.cta_link_mode or "page",
        "ctaPageKey": data.cta_page_key,
        "ctaPageId": data.cta_page_id,
        "ctaSlug": data.cta_slug,
        "postsLimit": data.posts_limit or RECENT_POSTS_DEFAULTS["postsLimit"],
    }


def _cards(data, now):
    items = []
    for item in data.items:
        icon_image_url = trimmed(item.icon_image_url)
        items.append({
            "id": item.id or new_id(),
            "icon": item.icon,
            "iconType": "image" if item.icon_type == "image" else "emoji",
            "iconImageUrl": (normalize_internal_href(icon_image_url) or icon_image_url) or None,
            "iconImageId": item.icon_image_id,
            "iconAlt": trimmed(item.icon_alt) or None,
            "title": item.title.strip(),
            "text": item.text.strip(),
            "ctaLabel": trimmed(item.cta_label) or None,
            "ctaHref": normalize_href(item.cta_href) or None,
        })
    return {
        "title": trimmed(data.title) or None,
        "subtitle": trimmed(data.subtitle) or None,
        "items": items,
        "layout": data.layout,
        "variant": data.variant,
    }


def _form(data, now):
    fields = [
        {
            "id": field.id or new_id(),
            "type": field.type,
            "label": field.label.strip(),
            "placeholder": trimmed(field.placeholder) or None,
            "required": bool(field.required),
            "options": (field.options or []) if field.type == "select" else None,
        }
        for field in data.fields
    ]
    return {
        "title": trimmed(data.title) or None,
        "description": trimmed(data.description) or None,
        "fields": fields,
        "submitLabel": trimmed(data.submit_label) or FORM_DEFAULTS["submitLabel"],
        "successMessage": trimmed(data.success_message) or FORM_DEFAULTS["successMessage"],
        "storeSummaryKeys": list(data.store_summary_keys or []),
    }


def _social_links(data, now):
    return {
        "title": trimmed(data.title) or None,
        "variant": data.variant or "list",
        "showIcons": first_set(data.show_icons, True),
        "columns": data.columns or 1,
        "align": data.align or "left",
    }


def _whatsapp_cta(data, now):
    return {
        "label": trimmed(data.label) or WHATSAPP_LABEL,
        "style": data.style or "primary",
        "openInNewTab": first_set(data.open_in_new_tab, True),
        "hideWhenDisabled": first_set(data.hide_when_disabled, False),
    }


def _contact_info(data, now):
    result = {
        "titleHtml": trimmed(data.title_html) or CONTACT_INFO_DEFAULTS["titleHtml"],
        "whatsappLabel": trimmed(data.whatsapp_label) or CONTACT_INFO_DEFAULTS["whatsappLabel"],
        "whatsappVariant": data.whatsapp_variant or "primary",
        "socialLinksTitle": trimmed(data.social_links_title) or CONTACT_INFO_DEFAULTS["socialLinksTitle"],
        "socialLinksVariant": data.social_links_variant or "list",
    }
    if data.description_html is not None:
        result["descriptionHtml"] = data.description_html.strip()
    return result


def _services(data, now):
    items = []
    for item in data.items:
        entry = {
            "id": item.id or new_id(),
            "title": item.title.strip(),
            "href": normalize_internal_href(item.href) or item.href.strip(),
        }
        if item.description:
            entry["description"] = item.description.strip()[:SERVICE_DESCRIPTION_MAX]
        items.append(entry)
    return {
        "sectionTitle": trimmed(data.section_title) or SERVICES_DEFAULTS["sectionTitle"],
        "items": items,
        "buttonLabel": trimmed(data.button_label) or SERVICES_DEFAULTS["buttonLabel"],
    }


def _cta(data, now):
    image_url = trimmed(data.image_url)
    return {
        "title": trimmed(data.title) or CTA_DEFAULTS["title"],
        "text": trimmed(data.text) or CTA_DEFAULTS["text"],
        "ctaLabel": trimmed(data.cta_label) or CTA_DEFAULTS["ctaLabel"],
        "ctaHref": normalize_internal_href(data.cta_href or CTA_DEFAULTS["ctaHref"]) or CTA_DEFAULTS["ctaHref"],
        "ctaLinkMode": data.cta_link_mode,
        "ctaPageKey": data.cta_page_key,
        "ctaPageId": data.cta_page_id,
        "ctaSlug": data.cta_slug,
        "imageId": data.image_id,
        "imageUrl": (normalize_internal_href(image_url) if image_url else "") or None,
        "imageAlt": data.image_alt or "",
    }


def snap_size_preset(value, fallback):
    """Snap a percentage to the nearest of 25/50/75/100 (legacy free values)."""
    if value is None:
        return fallback
    number = float(value)
    if number in (25, 50, 75, 100):
        return int(number)
    if number <= 30:
        return 25
    if number <= 60:
        return 50
    if number <= 85:
        return 75
    return 100


def _media_text(data, now):
    image_url = trimmed(data.image_url)
    legacy_width = first_set(data.image_width_pct, 50)
    return {
        "contentHtml": sanitize_content(data.content_html or ""),
        "imageId": data.image_id,
        "imageUrl": (normalize_internal_href(image_url) if image_url else "") or None,
        "imageAlt": data.image_alt or "",
        "imageSide": "right" if data.image_side == "right" else "left",
        "imageWidth": snap_size_preset(first_set(data.image_width, legacy_width), 50),
        "imageHeight": snap_size_preset(data.image_height, 75),
    }


# -------------------------------------------------
# Hero
# -------------------------------------------------
def height_pct_to_preset(height_pct):
    if height_pct is None:
        return None
    if height_pct <= 45:
        return "sm"
    if height_pct <= 65:
        return "md"
    if height_pct <= 85:
        return "lg"
    return "xl"


def normalize_hero_image_height(raw, right_blocks):
    """
    A preset name is kept, a pixel height is clamped, anything else is derived
    from the first right-hand image's heightPct.
    """
    if isinstance(raw, str) and raw in HERO_IMAGE_HEIGHT_PRESETS:
        return raw
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        low, high = HERO_IMAGE_HEIGHT_PX
        return clamp(int(round(raw)), low, high)
    first_image = next((b for b in right_blocks if b["type"] == "image"), None)
    height_pct = first_image["data"].get("heightPct") if first_image else None
    return height_pct_to_preset(height_pct) or "lg"


def _hero_v2(data, now):
    layout_variant = "stacked" if data.layout_variant == "stacked" else "split"
    left = [b for b in (_normalize_parsed(block, now) for block in data.left) if b]
    right = [b for b in (_normalize_parsed(block, now) for block in data.right) if b]
    right_variant = data.right_variant or "cards-only"

    if layout_variant == "stacked":
        right_variant = "image-only"
        right = [b for b in right if b["type"] == "image"][:1]

    return {
        "version": 2,
        "layout": data.layout or "two-col",
        "layoutVariant": layout_variant,
        "imageHeight": normalize_hero_image_height(data.image_height, right),
        "left": left,
        "right": right,
        "rightVariant": right_variant,
    }


def _hero_image(image):
    if image is None:
        return None
    focal = None
    if image.focal is not None:
        focal = {
            "x": image.focal.x or 0,
            "y": image.focal.y or 0,
            "zoom": image.focal.zoom or 1,
        }
    return {
        "imageId": trimmed(image.image_id) or None,
        "url": trimmed(image.url) or None,
        "alt": trimmed(image.alt),
        "focal": focal,
    }


def _hero_card(card, fallback_title="", fallback_text=""):
    def value(name):
        return trimmed(getattr(card, name, None) if card is not None else None)

    return {
        "title": value("title") or fallback_title,
        "text": value("text") or fallback_text,
        "icon": value("icon") or None,
        "imageId": value("image_id") or None,
        "url": value("url") or None,
        "alt": value("alt") or None,
    }


def _hero_v1(data, now):
    raw_mode = data.media_mode or "four_cards"
    if raw_mode == "single_card":
        media_mode = "cards_only"
    elif raw_mode in ALLOWED_HERO_MEDIA_MODES:
        media_mode = raw_mode
    else:
        media_mode = "four_cards"

    single = data.single_card
    quote = trimmed(single.quote if single else None)
    author = trimmed(single.author if single else None)

    medium_source = data.four_cards.medium if data.four_cards else None
    if medium_source is None and single is not None and raw_mode == "single_card":
        medium = _hero_card(None, quote or HERO_QUOTE, author or HERO_QUOTE_AUTHOR)
    else:
        medium = _hero_card(medium_source, HERO_QUOTE, HERO_QUOTE_AUTHOR)

    small_source = (data.four_cards.small if data.four_cards else None) or []
    small = [
        _hero_card(
            small_source[index] if index < len(small_source) else None,
            default["title"],
            default["text"],
        )
        for index, default in enumerate(HERO_SMALL_CARDS)
    ]

    badges = [badge.strip() for badge in (data.badges or []) if badge and badge.strip()]
    defaults = HERO_V1_DEFAULTS

    return {
        "heading": trimmed(data.heading) or defaults["heading"],
        "subheading": trimmed(data.subheading) or defaults["subheading"],
        "ctaLabel": trimmed(data.cta_label) or defaults["ctaLabel"],
        "ctaHref": normalize_internal_href(data.cta_href or defaults["ctaHref"]) or defaults["ctaHref"],
        "ctaLinkMode": data.cta_link_mode,
        "ctaPageKey": data.cta_page_key,
        "ctaPageId": data.cta_page_id,
        "ctaSlug": data.cta_slug,
        "secondaryCta": trimmed(data.secondary_cta) or defaults["secondaryCta"],
        "secondaryHref": (
            normalize_internal_href(data.secondary_href or defaults["secondaryHref"])
            or defaults["secondaryHref"]
        ),
        "secondaryLinkMode": data.secondary_link_mode,
        "secondaryPageKey": data.secondary_page_key,
        "secondaryPageId": data.secondary_page_id,
        "secondarySlug": data.secondary_slug,
        "badges": badges or list(defaults["badges"]),
        "mediaMode": media_mode,
        "singleImage": _hero_image(data.single_image),
        "singleCard": {"quote": quote or HERO_QUOTE, "author": author or HERO_QUOTE_AUTHOR},
        "fourCards": {"medium": medium, "small": small},
    }


def _hero(data, now):
    if isinstance(data, HeroDataV2):
        return _hero_v2(data, now)
    return _hero_v1(data, now)


_NORMALIZERS = {
    "text": _text,
    "image": _image,
    "button": _button,
    "buttonGroup": _button_group,
    "pills": _pills,
    "span": _span,
    "recent-posts": _recent_posts,
    "cards": _cards,
    "form": _form,
    "hero": _hero,
    "social-links": _social_links,
    "whatsapp-cta": _whatsapp_cta,
    "contact-info": _contact_info,
    "services": _services,
    "cta": _cta,
    "media-text": _media_text,
}
