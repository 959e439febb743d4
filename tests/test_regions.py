"""Unit tests for regiondex.regions – region bounds and id sequences."""
import pytest

from regiondex.regions import (
    DEFAULT_REGION,
    REGIONS,
    RegionBounds,
    bounds_for,
    ids_for,
    normalize_region,
    region_keys,
    region_label,
)


class TestBounds:
    def test_known_regions(self):
        assert bounds_for("kanto") == RegionBounds(1, 151)
        assert bounds_for("johto") == RegionBounds(152, 251)
        assert bounds_for("hoenn") == RegionBounds(252, 386)

    def test_unknown_region_defaults_to_first(self):
        assert bounds_for("sinnoh") == RegionBounds(1, 151)
        assert bounds_for(None) == RegionBounds(1, 151)
        assert normalize_region("") == DEFAULT_REGION == "kanto"

    def test_case_insensitive(self):
        assert bounds_for("  JOHTO ") == RegionBounds(152, 251)

    def test_regions_disjoint_and_contiguous(self):
        ordered = sorted(REGIONS.values(), key=lambda b: b.start)
        assert ordered[0].start == 1
        for prev, nxt in zip(ordered, ordered[1:]):
            assert nxt.start == prev.end + 1

    def test_invalid_bounds_rejected(self):
        with pytest.raises(ValueError):
            RegionBounds(10, 5)
        with pytest.raises(ValueError):
            RegionBounds(0, 5)

    def test_contains(self):
        kanto = bounds_for("kanto")
        assert kanto.contains(1)
        assert kanto.contains(151)
        assert not kanto.contains(152)
        assert not kanto.contains(0)


class TestIds:
    @pytest.mark.parametrize("key", region_keys())
    def test_length_and_order(self, key):
        bounds = bounds_for(key)
        ids = list(ids_for(key))
        assert len(ids) == bounds.end - bounds.start + 1
        assert all(a < b for a, b in zip(ids, ids[1:]))
        assert ids[0] == bounds.start
        assert ids[-1] == bounds.end

    def test_label(self):
        assert "Kanto" in region_label("kanto")
        assert region_label("nowhere") == region_label("kanto")
