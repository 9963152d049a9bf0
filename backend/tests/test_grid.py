"""
Tests for row bookkeeping and the pure editor operations.
"""

import copy

from sitebuilder.domain.layout import grid


def block(block_id, row=None, **extra):
    result = {"id": block_id, "type": "text", "colSpan": 1, "data": {"contentHtml": ""}, **extra}
    if row is not None:
        result["rowIndex"] = row
    return result


def section(*columns, section_id="section-1"):
    return {
        "id": section_id,
        "columns": len(columns),
        "cols": [{"id": f"col-{i + 1}", "blocks": list(blocks)} for i, blocks in enumerate(columns)],
        "settings": {},
    }


def layout(*sections):
    return {"version": 2, "sections": list(sections)}


def rows_of(col):
    return [(b["id"], b.get("rowIndex")) for b in col["blocks"]]


class TestRows:
    def test_row_index_fallback(self):
        assert grid.get_block_row_index({"rowIndex": 3}, 0) == 3
        assert grid.get_block_row_index({"rowIndex": -1}, 2) == 2
        assert grid.get_block_row_index({"rowIndex": True}, 2) == 2
        assert grid.get_block_row_index({}, 5) == 5

    def test_reindex_orders_and_bumps(self):
        result = grid.reindex_rows([block("aaaaaa", 2), block("bbbbbb"), block("cccccc", 2)])
        assert [(b["id"], b["rowIndex"]) for b in result] == [("bbbbbb", 1), ("aaaaaa", 2), ("cccccc", 3)]

    def test_reindex_keeps_gaps(self):
        result = grid.reindex_rows([block("aaaaaa", 0), block("bbbbbb", 5)])
        assert [b["rowIndex"] for b in result] == [0, 5]

    def test_append_blocks_at_end(self):
        result = grid.append_blocks_at_end([block("aaaaaa", 3)], [block("bbbbbb", 0), block("cccccc")])
        assert [b["rowIndex"] for b in result] == [3, 4, 5]

    def test_section_column_count_prefers_settings(self):
        assert grid.section_column_count({"columns": 3, "settings": {"columnsLayout": 2}}) == 2
        assert grid.section_column_count({"columns": 1}) == 1
        assert grid.section_column_count({}) == 2


class TestRendering:
    def test_organize_rows_keeps_empty_cells(self):
        hidden = block("dddddd", 0, visible=False)
        sec = section(
            [block("aaaaaa", 0), block("bbbbbb", 2)],
            [hidden, block("cccccc", 1)],
        )

        rows = grid.organize_section_blocks_into_rows(sec)

        assert [r["row_index"] for r in rows] == [0, 1, 2]
        assert rows[0]["cells"][0]["block"]["id"] == "aaaaaa"
        assert rows[0]["cells"][1] is None
        assert rows[1]["cells"][0] is None
        assert rows[1]["cells"][1] == {"col_index": 1, "block": block("cccccc", 1)}
        assert rows[2]["cells"][0]["block"]["id"] == "bbbbbb"

    def test_validate_block_ordering(self):
        ok, issues = grid.validate_block_ordering(section([block("aaaaaa", 0), block("bbbbbb", 2)]))
        assert ok and issues == []

        ok, issues = grid.validate_block_ordering(section([block("aaaaaa", 1), block("bbbbbb", 1)]))
        assert not ok
        assert "reuses row 1" in issues[0]

        ok, issues = grid.validate_block_ordering(section([block("aaaaaa", 3), block("bbbbbb", 1)]))
        assert not ok
        assert "out of order" in issues[0]

    def test_block_span(self):
        assert grid.calculate_block_span({"type": "hero"}, 3) == 3
        assert grid.calculate_block_span({"type": "services", "colSpan": 1}, 2) == 2
        assert grid.calculate_block_span({"type": "text", "colSpan": 3}, 2) == 2
        assert grid.calculate_block_span({"type": "text"}, 2) == 1


class TestEditorOperations:
    def test_insert_pushes_rows_down(self):
        doc = layout(section([block("aaaaaa", 0), block("bbbbbb", 1)]))
        before = copy.deepcopy(doc)

        result = grid.add_block_to_section(doc, "section-1", 0, block("xxxxxx"), insert_index=1)

        assert rows_of(result["sections"][0]["cols"][0]) == [("aaaaaa", 0), ("xxxxxx", 1), ("bbbbbb", 2)]
        assert doc == before

    def test_place_does_not_shift(self):
        doc = layout(section([block("aaaaaa", 0), block("bbbbbb", 1)]))
        result = grid.add_block_to_section(doc, "section-1", 0, block("xxxxxx"), insert_index=3, placement="place")
        assert rows_of(result["sections"][0]["cols"][0]) == [("aaaaaa", 0), ("bbbbbb", 1), ("xxxxxx", 3)]

    def test_add_appends_without_index(self):
        doc = layout(section([block("aaaaaa", 4)]))
        result = grid.add_block_to_section(doc, "section-1", 0, block("xxxxxx"))
        assert rows_of(result["sections"][0]["cols"][0]) == [("aaaaaa", 4), ("xxxxxx", 5)]

    def test_hero_cannot_be_removed(self):
        hero = {"id": "hero-1", "type": "hero", "isLocked": True, "rowIndex": 0, "data": {}}
        doc = layout(section([hero, block("aaaaaa", 1)]))

        assert grid.remove_block_from_section(doc, "section-1", 0, "hero-1") == doc
        result = grid.remove_block_from_section(doc, "section-1", 0, "aaaaaa")
        assert rows_of(result["sections"][0]["cols"][0]) == [("hero-1", 0)]

    def test_update_block_keeps_row(self):
        doc = layout(section([block("aaaaaa", 2)]))
        updated = {"id": "aaaaaa", "type": "text", "data": {"contentHtml": "<p>x</p>"}}

        result = grid.update_block_in_section(doc, "section-1", 0, "aaaaaa", updated)

        col = result["sections"][0]["cols"][0]
        assert col["blocks"][0]["rowIndex"] == 2
        assert col["blocks"][0]["data"]["contentHtml"] == "<p>x</p>"

    def test_move_block_swaps_rows(self):
        doc = layout(section([block("aaaaaa", 0), block("bbbbbb", 1)]))
        result = grid.move_block_in_column(doc, "section-1", 0, "aaaaaa", "down")
        assert rows_of(result["sections"][0]["cols"][0]) == [("bbbbbb", 0), ("aaaaaa", 1)]

    def test_move_block_into_empty_row(self):
        doc = layout(section([block("aaaaaa", 0), block("bbbbbb", 3)]))
        result = grid.move_block_in_column(doc, "section-1", 0, "bbbbbb", "up")
        assert rows_of(result["sections"][0]["cols"][0]) == [("aaaaaa", 0), ("bbbbbb", 2)]

    def test_move_up_from_top_is_noop(self):
        doc = layout(section([block("aaaaaa", 0)]))
        assert grid.move_block_in_column(doc, "section-1", 0, "aaaaaa", "up") == doc

    def test_move_block_to_column(self):
        doc = layout(section([block("aaaaaa", 0, colSpan=2)], [block("bbbbbb", 3)]))

        result = grid.move_block_to_column(doc, "section-1", 0, 1, "aaaaaa")

        cols = result["sections"][0]["cols"]
        assert cols[0]["blocks"] == []
        assert rows_of(cols[1]) == [("bbbbbb", 3), ("aaaaaa", 4)]

    def test_duplicate_block(self):
        cards = {
            "id": "cards-1",
            "type": "cards",
            "rowIndex": 0,
            "data": {"items": [{"id": "item-1", "title": "t", "text": "x"}]},
        }
        doc = layout(section([cards, block("bbbbbb", 1)]))

        result = grid.duplicate_block(doc, "section-1", 0, "cards-1")

        blocks = result["sections"][0]["cols"][0]["blocks"]
        assert [b["rowIndex"] for b in blocks] == [0, 1, 2]
        clone = blocks[1]
        assert clone["id"] != "cards-1"
        assert clone["data"]["items"][0]["id"] != "item-1"
        assert blocks[2]["id"] == "bbbbbb"

    def test_change_section_columns_merges_extra_columns(self):
        doc = layout(section(
            [block("aaaaaa", 0, colSpan=3)],
            [block("bbbbbb", 0)],
            [block("cccccc", 2)],
        ))

        result = grid.change_section_columns(doc, "section-1", 1)

        sec = result["sections"][0]
        assert sec["columns"] == 1
        assert "columnsLayout" not in sec
        assert rows_of(sec["cols"][0]) == [("aaaaaa", 0), ("bbbbbb", 1), ("cccccc", 2)]
        assert all(b["colSpan"] == 1 for b in sec["cols"][0]["blocks"])

    def test_change_section_columns_grows(self):
        doc = layout(section([block("aaaaaa", 0)]))
        sec = grid.change_section_columns(doc, "section-1", 3)["sections"][0]
        assert sec["columns"] == 3
        assert sec["columnsLayout"] == 3
        assert sec["settings"]["columnsLayout"] == 3
        assert [c["id"] for c in sec["cols"]] == ["col-1", "col-2", "col-3"]

    def test_section_operations(self):
        doc = layout(section([block("aaaaaa", 0)]))
        doc = grid.add_section(doc, grid.create_section(2))
        second_id = doc["sections"][1]["id"]

        moved = grid.move_section(doc, second_id, "up")
        assert moved["sections"][0]["id"] == second_id

        duplicated = grid.duplicate_section(doc, "section-1")
        clone = duplicated["sections"][1]
        assert clone["id"] != "section-1"
        assert clone["cols"][0]["blocks"][0]["id"] != "aaaaaa"
        assert len(duplicated["sections"]) == 3

        removed = grid.remove_section(doc, second_id)
        assert [s["id"] for s in removed["sections"]] == ["section-1"]

    def test_find_block(self):
        doc = layout(section([], [block("bbbbbb", 0)]))
        sec, col_index, found = grid.find_block(doc, "bbbbbb")
        assert sec["id"] == "section-1"
        assert col_index == 1
        assert found["id"] == "bbbbbb"
        assert grid.find_block(doc, "missing") is None
