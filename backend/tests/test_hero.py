"""
Tests for hero placement and the legacy hero migration.
"""

from sitebuilder.domain.invariants.layout import assert_layout
from sitebuilder.domain.layout.blocks import normalize_block
from sitebuilder.domain.layout.constants import HERO_PLACEHOLDER_IMAGE
from sitebuilder.domain.layout.hero import ensure_hero_at_top, migrate_hero_v1_to_v2
from sitebuilder.domain.layout.normalize import normalize_page_layout


def text(block_id, **extra):
    return {"id": block_id, "type": "text", "data": {"contentHtml": "<p>x</p>"}, **extra}


def hero(block_id, **extra):
    return {
        "id": block_id,
        "type": "hero",
        "data": {"version": 2, "layout": "two-col", "left": [], "right": [], "rightVariant": "cards-only"},
        **extra,
    }


def section(section_id, *columns):
    return {
        "id": section_id,
        "columns": len(columns),
        "cols": [{"id": f"col-{i + 1}", "blocks": list(blocks)} for i, blocks in enumerate(columns)],
    }


def home(*sections, now):
    layout = normalize_page_layout({"version": 2, "sections": list(sections)}, now)
    return ensure_hero_at_top(layout, now)


def first_block(layout):
    return layout["sections"][0]["cols"][0]["blocks"][0]


class TestEnsureHeroAtTop:
    def test_default_hero_on_empty_layout(self, now):
        result = home(now=now)

        assert len(result["sections"]) == 1
        hero_block = first_block(result)
        assert hero_block["type"] == "hero"
        assert hero_block["isLocked"] is True
        assert hero_block["rowIndex"] == 0
        assert hero_block["colSpan"] == 3
        assert hero_block["data"]["version"] == 2
        assert hero_block["data"]["right"][0]["data"]["src"] == HERO_PLACEHOLDER_IMAGE
        assert_layout(result, require_hero=True)

    def test_custom_placeholder(self, now):
        layout = normalize_page_layout(None, now)
        result = ensure_hero_at_top(layout, now, placeholder_image="https://cdn.example.com/hero.png")
        assert first_block(result)["data"]["right"][0]["data"]["src"] == "https://cdn.example.com/hero.png"

    def test_first_hero_wins(self, now):
        result = home(
            section("s1", [text("text-a")]),
            section("s2", [hero("hero-one")], [hero("hero-two")]),
            now=now,
        )

        heroes = [
            b["id"]
            for s in result["sections"]
            for c in s["cols"]
            for b in c["blocks"]
            if b["type"] == "hero"
        ]
        assert heroes == ["hero-one"]
        assert first_block(result)["id"] == "hero-one"
        assert result["sections"][1]["cols"][0]["blocks"] == []
        assert_layout(result, require_hero=True)

    def test_row_zero_is_freed_in_every_column(self, now):
        result = home(section("s1", [text("text-a")], [text("text-b")]), now=now)

        cols = result["sections"][0]["cols"]
        assert [(b["id"], b["rowIndex"]) for b in cols[0]["blocks"]] == [(first_block(result)["id"], 0), ("text-a", 1)]
        assert [(b["id"], b["rowIndex"]) for b in cols[1]["blocks"]] == [("text-b", 1)]

    def test_no_shift_when_row_zero_is_free(self, now):
        result = home(section("s1", [text("text-a", rowIndex=2)]), now=now)
        blocks = result["sections"][0]["cols"][0]["blocks"]
        assert [b["rowIndex"] for b in blocks] == [0, 2]

    def test_existing_hero_keeps_identity(self, now):
        created = "2023-01-01T00:00:00.000Z"
        result = home(
            section("s1", [text("text-a"), hero("hero-one", createdAt=created, visible=False, rowIndex=1)]),
            now=now,
        )

        hero_block = first_block(result)
        assert hero_block["id"] == "hero-one"
        assert hero_block["createdAt"] == created
        assert hero_block["updatedAt"] == now
        assert hero_block["visible"] is False
        assert hero_block["rowIndex"] == 0

    def test_input_is_not_mutated(self, now):
        layout = normalize_page_layout(None, now)
        ensure_hero_at_top(layout, now)
        assert layout == {"version": 2, "sections": []}

    def test_idempotent(self, now):
        once = home(section("s1", [text("text-a")], [text("text-b")]), now=now)
        twice = ensure_hero_at_top(normalize_page_layout(once, now), now)
        assert twice == once


class TestMigrateHeroV1:
    def test_text_is_escaped(self):
        data = migrate_hero_v1_to_v2({"heading": "<b>Oi</b>", "subheading": "A & B"})

        assert data["left"][0]["data"]["contentHtml"] == "<h1>&lt;b&gt;Oi&lt;/b&gt;</h1>"
        assert data["left"][1]["data"]["contentHtml"] == "<p>A &amp; B</p>"
        assert data["imageHeight"] == "xl"

    def test_badges_and_buttons(self):
        data = migrate_hero_v1_to_v2({
            "badges": ["Junguiana", "  "],
            "ctaLabel": "Agendar",
            "ctaHref": "/contato",
            "secondaryCta": "Sobre",
            "secondaryLinkMode": "page",
            "secondaryPageKey": "sobre",
        })

        pills, group = data["left"]
        assert pills["type"] == "pills"
        assert pills["data"]["pills"] == ["Junguiana"]
        assert group["type"] == "buttonGroup"
        primary, secondary = group["data"]["buttons"]
        assert (primary["label"], primary["href"], primary["variant"]) == ("Agendar", "/contato", "primary")
        assert secondary["linkMode"] == "page"
        assert secondary["pageKey"] == "sobre"

    def test_insecure_image_falls_back_to_placeholder(self):
        data = migrate_hero_v1_to_v2({"singleImage": {"url": "ftp://x/a.png"}})

        assert data["rightVariant"] == "image-only"
        assert data["right"][0]["data"]["src"] == HERO_PLACEHOLDER_IMAGE

    def test_image_with_cards(self):
        data = migrate_hero_v1_to_v2({
            "singleImage": {"url": "https://cdn.example.com/a.png", "alt": "Consultório"},
            "fourCards": {
                "medium": {"title": "Citação", "text": "Texto"},
                "small": [{"title": "A", "text": "a"}, {"title": "B"}, {"title": "C", "text": "c"}],
            },
        })

        assert data["rightVariant"] == "cards-with-image"
        image_block, medium, small = data["right"]
        assert image_block["data"]["alt"] == "Consultório"
        assert medium["data"]["variant"] == "feature"
        assert [item["title"] for item in small["data"]["items"]] == ["A", "C"]

    def test_cards_only(self):
        data = migrate_hero_v1_to_v2({"fourCards": {"medium": {"title": "T", "text": "x"}}})
        assert data["rightVariant"] == "cards-only"

    def test_v2_data_is_returned_as_is(self):
        original = hero("hero-one")["data"]
        assert migrate_hero_v1_to_v2(original) == original

    def test_result_normalizes(self, now):
        data = migrate_hero_v1_to_v2({"heading": "Oi", "ctaLabel": "Ir", "ctaHref": "/x"})
        block = normalize_block({"type": "hero", "data": data}, now)

        assert block is not None
        assert block["data"]["version"] == 2
        assert block["data"]["imageHeight"] == "xl"
