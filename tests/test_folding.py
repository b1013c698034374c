"""Tests for dotted key folding."""

import logging

import pytest

from prefstore.exceptions import MalformedKeyError
from prefstore.folding import fold_path, segment_key


class TestFoldPath:
    def test_nested_path_creates_mappings(self):
        assert fold_path({}, "a.b.c", "v") == {"a": {"b": {"c": "v"}}}

    def test_plain_key_assigns(self):
        assert fold_path({}, "a", "v") == {"a": "v"}

    def test_merges_into_existing_mapping(self):
        root = {"a": {"x": "1"}}
        result = fold_path(root, "a.y", "2")
        assert result is root
        assert result == {"a": {"x": "1", "y": "2"}}

    def test_numeric_segments_become_int_keys(self):
        assert fold_path({}, "0.address", "a@b.c") == {0: {"address": "a@b.c"}}
        assert fold_path({}, "0.tokens.1", "t") == {0: {"tokens": {1: "t"}}}

    def test_zero_segment_wraps_existing_siblings(self):
        result = fold_path({"a": "1"}, "0.b", "v")
        assert result == {0: {"a": "1", "b": "v"}}

    def test_zero_segment_on_empty_root_does_not_wrap(self):
        assert fold_path({}, "0.b", "v") == {0: {"b": "v"}}


class TestMalformedKeys:
    def test_empty_key_is_noop(self):
        root = {"x": "1"}
        result = fold_path(root, "", "v")
        assert result is root
        assert result == {"x": "1"}

    @pytest.mark.parametrize("key", [".a", "a.", "."])
    def test_empty_segment_is_noop(self, key):
        assert fold_path({}, key, "v") == {}

    def test_cannot_descend_through_scalar(self):
        assert fold_path({"a": "x"}, "a.b", "v") == {"a": "x"}

    def test_lenient_mode_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="prefstore.folding"):
            fold_path({}, "a.", "v")
        assert "Ignoring key 'a.'" in caplog.text

    @pytest.mark.parametrize("key", ["", ".a", "a."])
    def test_strict_mode_raises(self, key):
        with pytest.raises(MalformedKeyError):
            fold_path({}, key, "v", strict=True)

    def test_strict_mode_scalar_collision_raises(self):
        with pytest.raises(MalformedKeyError) as exc_info:
            fold_path({"a": "x"}, "a.b", "v", strict=True)
        assert isinstance(exc_info.value, ValueError)


class TestSegmentKey:
    @pytest.mark.parametrize(
        "segment, expected",
        [("0", 0), ("12", 12), ("-1", -1), ("01", "01"), ("address", "address"), ("1a", "1a")],
    )
    def test_segment_key(self, segment, expected):
        assert segment_key(segment) == expected
