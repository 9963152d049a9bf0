"""
Hero block invariants.

A hero-bearing layout (the home page) holds exactly one hero block, locked
and pinned as the first block of the first column of the first section on
row 0. Legacy flat hero data can be converted to the composite V2 form.
"""
import copy
import logging

from markupsafe import escape

from .blocks import normalize_block
from .constants import HERO_PLACEHOLDER_IMAGE, HERO_V1_DEFAULTS
from .fields import clamp_columns, is_http_url, is_iso_date, new_id, trimmed, utc_now_iso
from .grid import get_block_row_index

logger = logging.getLogger(__name__)


def _text_block(html):
    return {"id": new_id(), "type": "text", "colSpan": 1, "data": {"contentHtml": html}}


def _image_block(src, alt, media_id=None):
    return {
        "id": new_id(),
        "type": "image",
        "colSpan": 1,
        "data": {
            "mediaId": media_id,
            "src": src,
            "alt": alt,
            "size": 100,
            "align": "center",
            "heightPct": 100,
        },
    }


def default_hero_block(now=None, placeholder_image=HERO_PLACEHOLDER_IMAGE):
    now = now or utc_now_iso()
    raw = {
        "id": new_id(),
        "type": "hero",
        "createdAt": now,
        "isLocked": True,
        "visible": True,
        "colSpan": 999,
        "data": {
            "version": 2,
            "layout": "two-col",
            "layoutVariant": "split",
            "imageHeight": "lg",
            "left": [
                _text_block(f"<h1>{HERO_V1_DEFAULTS['heading']}</h1>"),
                _text_block(f"<p>{HERO_V1_DEFAULTS['subheading']}</p>"),
            ],
            "right": [_image_block(placeholder_image, "Hero image")],
            "rightVariant": "image-only",
        },
    }
    return normalize_block(raw, now)


def ensure_hero_at_top(layout: dict, now=None, placeholder_image=HERO_PLACEHOLDER_IMAGE) -> dict:
    """
    Return a copy of a normalized V2 layout that satisfies the hero invariants.

    The first hero found (section order, then column order) is kept and every
    other hero is dropped. When none exists a default one is created.
    """
    now = now or utc_now_iso()
    result = copy.deepcopy(layout)
    hero = None

    for section in result.get("sections") or []:
        for col in section.get("cols") or []:
            kept = []
            for block in col.get("blocks") or []:
                if block.get("type") != "hero":
                    kept.append(block)
                    continue
                if hero is None:
                    logger.debug("Hero found: %s (version %s)", block.get("id"), (block.get("data") or {}).get("version"))
                    hero = block
                else:
                    logger.debug("Dropping duplicate hero %s", block.get("id"))
            col["blocks"] = kept

    if hero is None:
        logger.debug("No hero in layout, creating default")
        hero = default_hero_block(now, placeholder_image)
    else:
        hero = {
            **hero,
            "id": hero.get("id") or new_id(),
            "createdAt": hero["createdAt"] if is_iso_date(hero.get("createdAt")) else now,
            "updatedAt": now,
            "isLocked": True,
            "visible": hero.get("visible") if hero.get("visible") is not None else True,
        }

    if not result.get("sections"):
        result["sections"] = [{
            "id": new_id(),
            "columns": 1,
            "cols": [{"id": "col-1", "blocks": []}],
            "settings": {},
        }]

    first = result["sections"][0]
    columns = clamp_columns(first.get("columns") or 1)
    old_cols = first.get("cols") or []
    cols = []
    for index in range(columns):
        source = old_cols[index] if index < len(old_cols) else {}
        cols.append({"id": source.get("id") or f"col-{index + 1}", "blocks": list(source.get("blocks") or [])})
    for col in old_cols[columns:]:
        cols[-1]["blocks"].extend(col.get("blocks") or [])
    first["columns"] = columns
    first["cols"] = cols

    # the hero spans the whole section on row 0
    occupied = any(
        get_block_row_index(block, index) == 0
        for col in cols
        for index, block in enumerate(col["blocks"])
    )
    if occupied:
        for col in cols:
            col["blocks"] = [
                {**block, "rowIndex": get_block_row_index(block, index) + 1}
                for index, block in enumerate(col["blocks"])
            ]

    cols[0]["blocks"] = [{**hero, "rowIndex": 0}] + cols[0]["blocks"]
    return result


def migrate_hero_v1_to_v2(data: dict) -> dict:
    """
    Convert legacy flat hero data (camelCase dict) into composite V2 data.

    Text is HTML-escaped before it is wrapped in markup. The result still
    needs `normalize_block` to receive ids, timestamps and defaults.
    """
    if data.get("version") == 2:
        return copy.deepcopy(data)

    left = []
    right = []

    heading = trimmed(data.get("heading"))
    if heading:
        left.append(_text_block(f"<h1>{escape(heading)}</h1>"))

    subheading = trimmed(data.get("subheading"))
    if subheading:
        left.append(_text_block(f"<p>{escape(subheading)}</p>"))

    badges = [b.strip() for b in data.get("badges") or [] if isinstance(b, str) and b.strip()]
    if badges:
        left.append({"id": new_id(), "type": "pills", "colSpan": 1, "data": {"pills": badges}})

    buttons = []
    for label_key, href_key, prefix, variant in (
        ("ctaLabel", "ctaHref", "cta", "primary"),
        ("secondaryCta", "secondaryHref", "secondary", "secondary"),
    ):
        label = trimmed(data.get(label_key))
        if not label:
            continue
        buttons.append({
            "id": new_id(),
            "label": label,
            "href": data.get(href_key) or "#",
            "variant": variant,
            "linkMode": "page" if data.get(f"{prefix}LinkMode") == "page" else "manual",
            "pageKey": data.get(f"{prefix}PageKey"),
            "pageId": data.get(f"{prefix}PageId"),
            "slug": data.get(f"{prefix}Slug"),
        })
    if buttons:
        left.append({
            "id": new_id(),
            "type": "buttonGroup",
            "colSpan": 1,
            "data": {"buttons": buttons, "align": "start", "stackOnMobile": True},
        })

    image = data.get("singleImage") or {}
    image_url = trimmed(image.get("url"))
    has_image = is_http_url(image_url)
    four_cards = data.get("fourCards") or {}
    medium = four_cards.get("medium")
    small = [c for c in four_cards.get("small") or [] if trimmed(c.get("title")) and trimmed(c.get("text"))]
    has_medium = bool(medium and trimmed(medium.get("title")) and trimmed(medium.get("text")))
    has_cards = has_medium or bool(small)

    if has_image and has_cards:
        right_variant = "cards-with-image"
    elif has_cards:
        right_variant = "cards-only"
    else:
        right_variant = "image-only"

    if has_image:
        right.append(_image_block(image_url, trimmed(image.get("alt")), image.get("imageId")))

    if has_medium:
        right.append({
            "id": new_id(),
            "type": "cards",
            "colSpan": 1,
            "data": {
                "items": [_card_item(medium)],
                "layout": "auto",
                "variant": "feature",
            },
        })
    if small:
        right.append({
            "id": new_id(),
            "type": "cards",
            "colSpan": 1,
            "data": {
                "items": [_card_item(card) for card in small],
                "layout": "3",
                "variant": "simple",
            },
        })

    if not right:
        right.append(_image_block(HERO_PLACEHOLDER_IMAGE, "Placeholder"))

    return {
        "version": 2,
        "layout": "two-col",
        "layoutVariant": "split",
        "imageHeight": "xl",
        "left": left,
        "right": right,
        "rightVariant": right_variant,
    }


def _card_item(card):
    return {
        "id": new_id(),
        "title": trimmed(card.get("title")),
        "text": trimmed(card.get("text")),
        "icon": card.get("icon") or None,
        "ctaLabel": None,
        "ctaHref": None,
    }
