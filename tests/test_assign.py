"""Tests for mode detection and base slot assignment."""

import pytest

from nuri.assign import (
    assign_base_lch,
    assign_base_slots,
    assign_slot_sources,
    dominant_tint,
    pick_cluster_for_hue,
)
from nuri.colour_convert import hue_distance, rgb_to_lch
from nuri.constants import (
    ACCENT_L_BAND,
    FALLBACK_C,
    FALLBACK_L,
    SLOT_TARGET_HUES,
)
from nuri.core_types import ConfigurationError, Mode
from nuri.mode import detect_mode, resolve_mode


class TestModeDetection:
    def test_dark_clusters(self, make_cluster) -> None:
        clusters = [make_cluster(0.2, 0.05, 250.0, 90), make_cluster(0.9, 0.0, 0.0, 10)]
        assert detect_mode(clusters) is Mode.DARK

    def test_light_clusters(self, make_cluster) -> None:
        clusters = [make_cluster(0.2, 0.05, 250.0, 10), make_cluster(0.9, 0.0, 0.0, 90)]
        assert detect_mode(clusters) is Mode.LIGHT

    def test_weights_decide(self, make_cluster) -> None:
        dark_heavy = [make_cluster(0.1, 0.0, 0.0, 60), make_cluster(0.95, 0.0, 0.0, 40)]
        assert detect_mode(dark_heavy) is Mode.DARK

    def test_override_wins(self, make_cluster) -> None:
        clusters = [make_cluster(0.95, 0.0, 0.0, 100)]
        assert resolve_mode(clusters, Mode.DARK) is Mode.DARK
        assert resolve_mode(clusters, "dark") is Mode.DARK
        assert resolve_mode(clusters, None) is Mode.LIGHT

    def test_bad_override(self, make_cluster) -> None:
        with pytest.raises(ConfigurationError):
            resolve_mode([make_cluster(0.5, 0.0, 0.0)], "sepia")

    def test_no_weight_is_dark(self, make_cluster) -> None:
        assert detect_mode([make_cluster(0.9, 0.0, 0.0, 0)]) is Mode.DARK


class TestHueAssignment:
    def test_canonical_hues_map_to_their_slots(self, make_cluster) -> None:
        clusters = [make_cluster(0.7, 0.12, SLOT_TARGET_HUES[s], 50) for s in range(1, 7)]
        clusters += [make_cluster(0.05, 0.0, 0.0, 100), make_cluster(0.98, 0.0, 0.0, 100)]
        sources = assign_slot_sources(clusters)
        assert sources == {s: s - 1 for s in range(1, 7)}

        slots = assign_base_slots(clusters, Mode.DARK)
        for s in range(1, 7):
            assert hue_distance(rgb_to_lch(slots[s]).h, SLOT_TARGET_HUES[s]) < 3.0

    def test_shuffled_input_still_identity(self, make_cluster) -> None:
        order = [5, 2, 6, 1, 4, 3]
        clusters = [make_cluster(0.7, 0.12, SLOT_TARGET_HUES[s], 50) for s in order]
        sources = assign_slot_sources(clusters)
        for slot, idx in sources.items():
            assert idx is not None
            assert order[idx] == slot

    def test_each_cluster_used_once(self, make_cluster) -> None:
        # Both clusters are reddish; only one can be red, the orange one is too far from yellow.
        clusters = [make_cluster(0.6, 0.15, 25.0, 100), make_cluster(0.6, 0.15, 40.0, 80)]
        sources = assign_slot_sources(clusters)
        assert sources[1] == 0
        assert sources[3] is None
        assert list(sources.values()).count(0) == 1

    def test_second_candidate_goes_to_next_slot(self, make_cluster) -> None:
        clusters = [make_cluster(0.6, 0.15, 25.0, 100), make_cluster(0.7, 0.15, 60.0, 80)]
        sources = assign_slot_sources(clusters)
        assert sources[1] == 0
        assert sources[3] == 1

    def test_heavier_cluster_wins_near_tie(self, make_cluster) -> None:
        clusters = [make_cluster(0.6, 0.15, 25.0, 10), make_cluster(0.6, 0.15, 28.0, 100)]
        pick = pick_cluster_for_hue(clusters, [0, 1], 25.0)
        assert pick is not None and pick[0] == 1

    def test_closer_cluster_wins_outside_tie_window(self, make_cluster) -> None:
        clusters = [make_cluster(0.6, 0.15, 25.0, 10), make_cluster(0.6, 0.15, 45.0, 100)]
        pick = pick_cluster_for_hue(clusters, [0, 1], 25.0)
        assert pick is not None and pick[0] == 0

    def test_heavier_cluster_beyond_max_distance_does_not_steal_slot(
        self, make_cluster
    ) -> None:
        # 347 is 38 degrees from red, 67 is 42: only the lighter one may be red.
        clusters = [make_cluster(0.6, 0.12, 347.0, 10), make_cluster(0.7, 0.12, 67.0, 100)]
        pick = pick_cluster_for_hue(clusters, [0, 1], SLOT_TARGET_HUES[1])
        assert pick is not None and pick[0] == 0

        sources = assign_slot_sources(clusters)
        assert sources[1] == 0
        assert sources[3] == 1
        assert sources[5] is None

    def test_nothing_within_max_distance(self, make_cluster) -> None:
        clusters = [make_cluster(0.6, 0.15, 90.0, 100)]
        assert pick_cluster_for_hue(clusters, [0], 25.0, max_distance=40.0) is None
        pick = pick_cluster_for_hue(clusters, [0], 25.0, max_distance=70.0)
        assert pick is not None and pick[0] == 0
        assert pick[1] == pytest.approx(65.0, abs=2.0)

    def test_grey_and_empty_clusters_are_not_candidates(self, make_cluster) -> None:
        clusters = [make_cluster(0.5, 0.0, 0.0, 1000), make_cluster(0.6, 0.2, 25.0, 0)]
        assert all(v is None for v in assign_slot_sources(clusters).values())

    def test_accent_lightness_clamped_to_band(self, make_cluster) -> None:
        clusters = [make_cluster(0.3, 0.1, 255.0, 100)]
        lch = assign_base_lch(clusters, Mode.DARK)
        lo, _ = ACCENT_L_BAND[Mode.DARK]
        assert lch[4].l == pytest.approx(lo)
        assert hue_distance(lch[4].h, clusters[0].lch.h) < 1e-9


class TestFallback:
    @pytest.mark.parametrize("mode", [Mode.DARK, Mode.LIGHT])
    def test_grey_image_gets_eight_distinct_colours(self, make_cluster, mode: Mode) -> None:
        clusters = [make_cluster(0.6, 0.0, 0.0, 500)]
        slots = assign_base_slots(clusters, mode)
        assert len(slots) == 8
        assert len(set(slots)) == 8
        lch = assign_base_lch(clusters, mode)
        for s in range(1, 7):
            assert lch[s].l == FALLBACK_L[mode]
            assert lch[s].c == FALLBACK_C[mode]
            assert lch[s].h == SLOT_TARGET_HUES[s]

    def test_single_hue_image(self, make_cluster) -> None:
        clusters = [make_cluster(0.5, 0.15, 150.0, 300), make_cluster(0.7, 0.1, 148.0, 100)]
        slots = assign_base_slots(clusters, Mode.DARK)
        assert len(set(slots)) == 8
        sources = assign_slot_sources(clusters)
        assert sources[2] == 0
        assert sources[1] is None and sources[4] is None

    def test_black_darker_than_white(self, make_cluster) -> None:
        for mode in Mode:
            lch = assign_base_lch([make_cluster(0.5, 0.1, 200.0)], mode)
            assert lch[0].l < lch[7].l

    def test_neutrals_tinted_by_dominant_hue(self, make_cluster) -> None:
        clusters = [make_cluster(0.5, 0.1, 200.0, 10), make_cluster(0.5, 0.1, 40.0, 90)]
        chroma, hue = dominant_tint(clusters)
        assert chroma > 0
        assert hue_distance(hue, clusters[1].lch.h) < 1e-9
        assert dominant_tint([make_cluster(0.5, 0.0, 0.0)]) == (0.0, 0.0)
