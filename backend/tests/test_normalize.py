"""
Tests for layout parsing, V1 migration and V2 normalization.
"""

import pytest

from sitebuilder.domain.invariants.exceptions import InvariantViolation, LayoutValidationError
from sitebuilder.domain.invariants.layout import assert_layout
from sitebuilder.domain.layout.normalize import (
    normalize_page_layout,
    strip_hidden_blocks,
)


def text(block_id=None, **extra):
    block = {"type": "text", "data": {"contentHtml": "<p>x</p>"}, **extra}
    if block_id:
        block["id"] = block_id
    return block


def v2(*sections):
    return {"version": 2, "sections": list(sections)}


class TestParsing:
    def test_missing_layout_is_empty(self, now):
        assert normalize_page_layout(None, now) == {"version": 2, "sections": []}

    def test_unknown_version_is_rejected(self, now):
        with pytest.raises(LayoutValidationError) as excinfo:
            normalize_page_layout({"version": 3, "sections": []}, now)
        assert excinfo.value.issues

    def test_invalid_block_rejects_the_document(self, now):
        layout = v2({"id": "s1", "columns": 1, "cols": [{"id": "c1", "blocks": [{"type": "image", "data": {}}]}]})

        with pytest.raises(LayoutValidationError) as excinfo:
            normalize_page_layout(layout, now)

        paths = [issue["path"] for issue in excinfo.value.issues]
        assert any("sections.0.cols.0.blocks.0" in path for path in paths)


class TestMigration:
    def test_v1_becomes_single_section(self, now):
        layout = {
            "version": 1,
            "columns": 2,
            "cols": [{"blocks": [text("text-a")]}, {"id": "right", "blocks": [text("text-b")]}],
        }

        result = normalize_page_layout(layout, now)

        assert result["version"] == 2
        assert len(result["sections"]) == 1
        section = result["sections"][0]
        assert section["columns"] == 2
        assert section["columnsLayout"] == 2
        assert section["settings"] == {"columnsLayout": 2}
        assert [c["id"] for c in section["cols"]] == ["col-1", "right"]
        assert section["cols"][0]["blocks"][0]["id"] == "text-a"
        assert section["cols"][0]["blocks"][0]["rowIndex"] == 0

    def test_v1_defaults_to_one_column(self, now):
        result = normalize_page_layout({"version": 1, "cols": [{"blocks": [text(), text()]}]}, now)

        section = result["sections"][0]
        assert section["columns"] == 1
        assert "columnsLayout" not in section
        assert [b["rowIndex"] for b in section["cols"][0]["blocks"]] == [0, 1]


class TestSections:
    def test_settings_aliases(self, now):
        section = {
            "id": "s1",
            "kind": "normal",
            "columns": 1,
            "cols": [{"id": "c1", "blocks": []}],
            "settings": {"background": "soft", "padding": "compact", "maxWidth": "wide", "custom": "x"},
        }

        result = normalize_page_layout(v2(section), now)["sections"][0]

        assert "kind" not in result
        assert result["settings"]["backgroundStyle"] == "soft"
        assert result["settings"]["density"] == "compact"
        assert result["settings"]["width"] == "wide"
        assert result["settings"]["custom"] == "x"
        assert "columnsLayout" not in result["settings"]

    def test_settings_column_layout_wins(self, now):
        section = {
            "id": "s1",
            "columns": 3,
            "cols": [
                {"id": "c1", "blocks": [text("text-a")]},
                {"id": "c2", "blocks": [text("text-b", rowIndex=1)]},
                {"id": "c3", "blocks": [text("text-c")]},
            ],
            "settings": {"columnsLayout": 2},
        }

        result = normalize_page_layout(v2(section), now)["sections"][0]

        assert result["columns"] == 2
        assert len(result["cols"]) == 2
        assert [(b["id"], b["rowIndex"]) for b in result["cols"][1]["blocks"]] == [("text-b", 1), ("text-c", 2)]

    def test_missing_columns_are_created(self, now):
        section = {"id": "s1", "columns": 3, "cols": [{"id": "c1", "blocks": []}]}
        result = normalize_page_layout(v2(section), now)["sections"][0]
        assert [c["id"] for c in result["cols"]] == ["c1", "col-2", "col-3"]

    def test_rows_become_strictly_increasing(self, now):
        section = {
            "id": "s1",
            "columns": 1,
            "cols": [{"id": "c1", "blocks": [text("text-a", rowIndex=1), text("text-b", rowIndex=1), text("text-c", rowIndex=6)]}],
        }

        blocks = normalize_page_layout(v2(section), now)["sections"][0]["cols"][0]["blocks"]

        assert [(b["id"], b["rowIndex"]) for b in blocks] == [("text-a", 1), ("text-b", 2), ("text-c", 6)]

    def test_unsafe_image_raises(self, now):
        section = {
            "id": "s1",
            "columns": 1,
            "cols": [{"id": "c1", "blocks": [{"type": "image", "data": {"src": "data:image/png;base64,AAA"}}]}],
        }
        with pytest.raises(InvariantViolation):
            normalize_page_layout(v2(section), now)


BLOCKS_OF_EVERY_TYPE = [
    text("text-1"),
    {"id": "image-1", "type": "image", "data": {"src": "https://cdn.example.com/a.png", "size": 50}},
    {"id": "button-1", "type": "button", "data": {"label": "Fale", "href": "www.example.com"}},
    {
        "id": "group-1",
        "type": "buttonGroup",
        "data": {
            "buttons": [
                {"label": "Ligar", "href": "tel:+5511999999999"},
                {"label": "Site", "href": "/contato"},
            ]
        },
    },
    {"id": "pills-1", "type": "pills", "data": {"items": ["Junguiana", "Argilaria"]}},
    {"id": "span-01", "type": "span", "data": {}},
    {"id": "recent-1", "type": "recent-posts", "data": {"ctaHref": "blog"}},
    {
        "id": "cards-1",
        "type": "cards",
        "data": {"items": [{"id": "card-1", "title": "A", "text": "B", "ctaHref": "sem-barra"}]},
    },
    {
        "id": "form-1",
        "type": "form",
        "data": {"fields": [{"id": "nome", "type": "text", "label": "Nome", "required": True}]},
    },
    {"id": "social-1", "type": "social-links", "data": {}},
    {"id": "whats-1", "type": "whatsapp-cta", "data": {}},
    {
        "id": "contact-1",
        "type": "contact-info",
        "data": {
            "titleHtml": "",
            "whatsappLabel": "",
            "whatsappVariant": "primary",
            "socialLinksTitle": "",
            "socialLinksVariant": "list",
        },
    },
    {
        "id": "services-1",
        "type": "services",
        "data": {"sectionTitle": "Serviços", "items": [{"id": "svc-1", "title": "Terapia", "href": "terapia"}]},
    },
    {"id": "cta-01", "type": "cta", "data": {"ctaHref": "", "imageUrl": "relativa.png"}},
    {"id": "media-1", "type": "media-text", "data": {"contentHtml": "<p>x</p>", "imageWidthPct": 40}},
    {"id": "hero-v1", "type": "hero", "data": {"heading": "Oi", "mediaMode": "single_card"}},
    {
        "id": "hero-v2",
        "type": "hero",
        "data": {
            "version": 2,
            "layout": "two-col",
            "left": [text("hero-text")],
            "right": [{"id": "hero-img", "type": "image", "data": {"src": "https://cdn.example.com/h.png", "heightPct": 50}}],
            "rightVariant": "image-only",
        },
    },
]


class TestCanonicalForm:
    def test_normalizing_twice_is_stable(self, now):
        layout = {"version": 1, "columns": 2, "cols": [{"blocks": [text()]}, {"blocks": [text(), text()]}]}

        once = normalize_page_layout(layout, now)
        twice = normalize_page_layout(once, now)

        assert twice == once

    @pytest.mark.parametrize("block", BLOCKS_OF_EVERY_TYPE, ids=lambda block: block["id"])
    def test_every_block_type_is_stable(self, now, block):
        layout = v2({"id": "s1", "columns": 1, "cols": [{"id": "c1", "blocks": [block]}]})

        once = normalize_page_layout(layout, now)
        twice = normalize_page_layout(once, now)

        assert twice == once

    def test_unusable_button_links_are_dropped(self, now):
        group = next(block for block in BLOCKS_OF_EVERY_TYPE if block["type"] == "buttonGroup")
        layout = v2({"id": "s1", "columns": 1, "cols": [{"id": "c1", "blocks": [group]}]})

        stored = normalize_page_layout(layout, now)
        buttons = normalize_page_layout(stored, now)["sections"][0]["cols"][0]["blocks"][0]["data"]["buttons"]

        assert [(b["label"], b["href"]) for b in buttons] == [("Site", "/contato")]

    def test_blank_links_fall_back_to_defaults(self, now):
        recent = {"id": "recent-1", "type": "recent-posts", "data": {"ctaHref": "sem-barra"}}
        cards = {
            "id": "cards-1",
            "type": "cards",
            "data": {"items": [{"id": "card-1", "title": "A", "text": "B", "ctaHref": "sem-barra"}]},
        }
        layout = v2({"id": "s1", "columns": 1, "cols": [{"id": "c1", "blocks": [recent, cards]}]})

        blocks = normalize_page_layout(layout, now)["sections"][0]["cols"][0]["blocks"]

        assert blocks[0]["data"]["ctaHref"] == "/blog"
        assert blocks[1]["data"]["items"][0]["ctaHref"] is None

    def test_result_passes_layout_invariants(self, now):
        layout = {"version": 1, "columns": 3, "cols": [{"blocks": [text()]}, {"blocks": []}, {"blocks": [text()]}]}
        assert_layout(normalize_page_layout(layout, now))

    def test_strip_hidden_blocks(self, now):
        section = {
            "id": "s1",
            "columns": 1,
            "cols": [{"id": "c1", "blocks": [text("text-a"), text("text-b", visible=False)]}],
        }
        layout = normalize_page_layout(v2(section), now)

        public = strip_hidden_blocks(layout)

        assert [b["id"] for b in public["sections"][0]["cols"][0]["blocks"]] == ["text-a"]
        assert len(layout["sections"][0]["cols"][0]["blocks"]) == 2
