"""Tests for node colour and size hints."""

import re

import pytest

from orbyt.graph.presentation import (
    PALETTE,
    cluster_color,
    cluster_hash,
    file_size,
    folder_size,
)

RGB = re.compile(r"^rgb\((\d+),(\d+),(\d+)\)$")


class TestClusterColor:
    """Tests for cluster_color and its hash."""

    def test_hash_of_empty_string(self):
        assert cluster_hash("") == 0

    def test_hash_matches_31x_rule_for_short_strings(self):
        """Without overflow the hash is the classic h*31 + c."""
        expected = 0
        for ch in "src":
            expected = expected * 31 + ord(ch)
        assert cluster_hash("src") == expected

    def test_hash_wraps_for_long_strings(self):
        """Long names stay within a bounded magnitude."""
        assert abs(cluster_hash("a/very/long/cluster/name/that/overflows")) < 2**40

    def test_deterministic(self):
        assert cluster_color("src/components", 2) == cluster_color("src/components", 2)

    def test_format_and_palette_membership(self):
        """Depth 0 yields an undimmed palette colour."""
        match = RGB.match(cluster_color("lib", 0))
        assert match is not None
        r, g, b = (int(x) for x in match.groups())
        assert f"#{r:02x}{g:02x}{b:02x}" in PALETTE

    def test_deeper_is_darker(self):
        shallow = [int(x) for x in RGB.match(cluster_color("lib", 1)).groups()]
        deep = [int(x) for x in RGB.match(cluster_color("lib", 4)).groups()]
        assert sum(deep) < sum(shallow)

    def test_fade_floor_is_half(self):
        """Fading stops at 50% brightness."""
        assert cluster_color("lib", 10) == cluster_color("lib", 50)


class TestSizes:
    """Tests for file_size and folder_size."""

    def test_file_size_bounds(self):
        assert file_size(0) == pytest.approx(5.0)
        assert file_size(10**12) == 14.0
        assert all(4.0 <= file_size(n) <= 14.0 for n in (1, 10, 100, 10_000))

    def test_file_size_non_decreasing(self):
        sizes = [file_size(n) for n in (1, 5, 50, 500, 5000, 50_000)]
        assert sizes == sorted(sizes)

    def test_folder_size_by_depth(self):
        assert folder_size(1) == 16.0
        assert folder_size(2) == 14.0
        assert folder_size(3) == 12.0
        assert folder_size(7) == 12.0
