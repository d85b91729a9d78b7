"""
Tests for the embedded JSON blob locator
"""

from valueproxy.parsers.blobs import scan_json_blobs
from valueproxy.parsers.pipeline import load_document


def _scan(html):
    return scan_json_blobs(load_document(html))


class TestDataIslandAndLdJson:

    def test_data_island(self):
        recs = _scan('<script id="__NEXT_DATA__" type="application/json">'
                     '{"props":{"items":[{"name":"X","robuxValue":300}]}}</script>')
        assert [(r.provenance, r.label, r.key, r.value) for r in recs] == [("data-island", "X", "robuxValue", 300)]

    def test_malformed_block_does_not_hide_good_one(self):
        recs = _scan('<script type="application/ld+json">{bad json</script>'
                     '<script type="application/ld+json">{"name":"Cap","price":"1,000"}</script>')
        assert [(r.provenance, r.value) for r in recs] == [("ld-json", 1000)]

    def test_ld_json_not_rescanned_as_inline(self):
        payload = '{"@type": "Product", "name": "Cap", "offers": {"name": "Cap", "price": "1,000"}}'
        recs = _scan(f'<script type="application/ld+json">{payload}</script>')
        assert len(recs) == 1

    def test_empty_island_skipped(self):
        assert _scan('<div id="__NEXT_DATA__"></div>') == []


class TestInlineScripts:

    def test_inline_object(self):
        recs = _scan('<script>window.__STATE__ = {"inventory": [{"name": "Valk", "price": 5000}], '
                     '"padding": "xxxxxxxxxxxxxxxx"};</script>')
        assert [(r.provenance, r.label, r.value) for r in recs] == [("inline-object", "Valk", 5000)]

    def test_first_brace_to_last_brace_only(self):
        # two objects side by side don't form valid JSON, and no array retry happens
        recs = _scan('<script>var rows = [{"name": "Fedora", "value": 120}, {"name": "Sword", "value": 80}];</script>')
        assert recs == []

    def test_array_without_objects(self):
        assert _scan('<script>var limitedItemValues = [1200, 3400, 5600]; // inventory values padding</script>') == []

    def test_short_script_ignored(self):
        assert _scan('<script>x={"price":5}</script>') == []

    def test_script_without_hints_ignored(self):
        body = '{"name": "Valk", "amount": "5,000 coins", "filler": "................................"}'
        assert _scan(f"<script>var a = {body};</script>") == []

    def test_array_payload_when_no_braces(self):
        from valueproxy.parsers.blobs import _inline_payload
        ctx, data = _inline_payload('var limitedValues = [1200, 3400, 5600];')
        assert ctx == "inline-array"
        assert data == [1200, 3400, 5600]

    def test_array_of_objects_is_matched_as_object(self):
        recs = _scan('<script>var inventory = [{"name":"Valk","price":"5,000"}]; // limited items list</script>')
        assert [(r.provenance, r.label, r.value) for r in recs] == [("inline-object", "Valk", 5000)]

    def test_malformed_inline_block_does_not_hide_good_one(self):
        recs = _scan('<script>var state = {"items": [oops, "................................"]};</script>'
                     '<script>var inv = {"inventory": [{"name": "Valk", "price": 5000}], "pad": "........"};</script>')
        assert [(r.provenance, r.label, r.value) for r in recs] == [("inline-object", "Valk", 5000)]
