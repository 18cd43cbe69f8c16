"""Tests for output file name templating."""

import pytest

from metanize import metanize


class TestMetanize:

    @pytest.mark.parametrize("mask", ["invoice.pdf", "out/a b.pdf", "%%x%%.pdf", ""])
    def test_mask_without_placeholders_is_unchanged(self, mask):
        assert metanize(mask, {"x": "nope"}) == mask

    def test_known_key_is_substituted(self):
        assert metanize("%%%client%%%-inv.pdf", {"client": "Acme"}) == "Acme-inv.pdf"

    def test_key_lookup_ignores_case(self):
        assert metanize("%%%CLIENT%%%.pdf", {"Client": "Acme"}) == "Acme.pdf"

    def test_missing_key_degrades_to_bare_name(self):
        assert metanize("%%%client%%%-%%%year%%%.pdf", {"client": "Acme"}) == "Acme-year.pdf"

    def test_value_appears_only_where_token_was(self):
        result = metanize("a-%%%k%%%-b", {"k": "VAL"})
        assert result == "a-VAL-b"
        assert result.count("VAL") == 1

    @pytest.mark.parametrize("mask", ["", "   ", "\t \n"])
    def test_blank_mask_renders_empty(self, mask):
        assert metanize(mask, {}) == ""

    def test_unbalanced_token_passes_through(self):
        assert metanize("%%%client.pdf", {"client": "Acme"}) == "%%%client.pdf"
        assert metanize("client%%%.pdf", {"client": "Acme"}) == "client%%%.pdf"

    def test_sentinel_only_token_passes_through(self):
        assert metanize("%%%%%%", {"": "empty"}) == "%%%%%%"

    def test_whitespace_between_placeholders_is_dropped(self):
        meta = {"a": "A", "b": "B"}
        assert metanize("%%%a%%% %%%b%%%", meta) == "AB"
        assert metanize("%%%a%%% x %%%b%%%", meta) == "A x B"

    def test_adjacent_placeholders(self):
        assert metanize("%%%a%%%%%%b%%%.pdf", {"a": "1", "b": "2"}) == "12.pdf"

    def test_custom_sentinel(self):
        assert metanize("{{k}}.pdf", {"k": "v"}, sentinel="{{") == "{{k}}.pdf"
        assert metanize("##k##.pdf", {"k": "v"}, sentinel="##") == "v.pdf"
