"""Tests for colour conversions, distances and WCAG contrast."""

import math

import numpy as np
import pytest

from conftest import cluster_from_rgb
from nuri.colour_convert import (
    cluster_distance,
    contrast_ratio,
    hue_distance,
    lab_to_lch,
    lab_to_rgb_float,
    lch_to_rgb,
    lerp_lch,
    relative_luminance,
    rgb_to_lab,
    rgb_to_lch,
    rgb_to_oklab,
)
from nuri.core_types import LchColor, RgbColor, WeightedCluster


class TestRoundTrip:
    """RgbColor -> OKLCh -> RgbColor stays within 2/255 per channel."""

    def test_primaries_and_neutrals(self) -> None:
        for rgb in [
            (0, 0, 0),
            (255, 255, 255),
            (255, 0, 0),
            (0, 255, 0),
            (0, 0, 255),
            (255, 255, 0),
            (0, 255, 255),
            (255, 0, 255),
            (128, 128, 128),
        ]:
            back = lch_to_rgb(rgb_to_lch(RgbColor(*rgb)))
            assert max(abs(a - b) for a, b in zip(back.as_tuple(), rgb)) <= 2, rgb

    def test_random_colours(self) -> None:
        rng = np.random.default_rng(7)
        for row in rng.integers(0, 256, size=(200, 3)):
            original = RgbColor(*(int(v) for v in row))
            back = lch_to_rgb(rgb_to_lch(original))
            diffs = [abs(a - b) for a, b in zip(back.as_tuple(), original.as_tuple())]
            assert max(diffs) <= 2, original.hex

    def test_cie_lab_round_trip(self) -> None:
        rgb = np.array([[12, 200, 90], [250, 250, 250], [3, 4, 5]], dtype=np.uint8)
        back = np.round(lab_to_rgb_float(rgb_to_lab(rgb)) * 255.0)
        assert np.max(np.abs(back - rgb)) <= 1


class TestKnownValues:
    def test_white_oklab(self) -> None:
        L, a, b = rgb_to_oklab(np.array([255, 255, 255], dtype=np.uint8))
        assert L == pytest.approx(1.0, abs=1e-3)
        assert abs(a) < 1e-3 and abs(b) < 1e-3

    def test_red_hue_is_warm(self) -> None:
        lch = rgb_to_lch(RgbColor(255, 0, 0))
        assert 20.0 < lch.h < 35.0
        assert lch.c > 0.2

    def test_lab_black_and_white(self) -> None:
        lab = rgb_to_lab(np.array([[0, 0, 0], [255, 255, 255]], dtype=np.uint8))
        assert lab[0, 0] == pytest.approx(0.0, abs=1e-6)
        assert lab[1, 0] == pytest.approx(100.0, abs=1e-2)

    def test_lab_to_lch_matches_rgb_path(self) -> None:
        lab = rgb_to_lab(np.array([30, 120, 200], dtype=np.uint8))
        via_lab = lab_to_lch(lab)
        direct = rgb_to_lch(RgbColor(30, 120, 200))
        assert via_lab.l == pytest.approx(direct.l, abs=1e-3)
        assert hue_distance(via_lab.h, direct.h) < 0.5


class TestGamut:
    def test_out_of_gamut_reduces_chroma_only(self) -> None:
        requested = LchColor(0.7, 0.4, 145.0)
        rgb = lch_to_rgb(requested)
        got = rgb_to_lch(rgb)
        assert all(0 <= v <= 255 for v in rgb.as_tuple())
        assert got.c < requested.c
        assert got.l == pytest.approx(0.7, abs=0.01)
        assert hue_distance(got.h, 145.0) < 3.0

    def test_lightness_extremes(self) -> None:
        assert lch_to_rgb(LchColor(1.0, 0.3, 40.0)) == RgbColor(255, 255, 255)
        assert lch_to_rgb(LchColor(0.0, 0.3, 40.0)) == RgbColor(0, 0, 0)


class TestDistances:
    def test_hue_distance_wraps(self) -> None:
        assert hue_distance(350.0, 10.0) == pytest.approx(20.0)
        assert hue_distance(10.0, 350.0) == pytest.approx(20.0)
        assert hue_distance(0.0, 180.0) == pytest.approx(180.0)
        assert hue_distance(90.0, 90.0) == 0.0

    def test_cluster_distance(self) -> None:
        assert cluster_distance((0.0, 0.0, 0.0), (3.0, 4.0, 0.0)) == pytest.approx(5.0)

    def test_lerp_takes_short_arc(self) -> None:
        mid = lerp_lch(LchColor(0.2, 0.1, 350.0), LchColor(0.6, 0.2, 30.0), 0.5)
        assert mid.l == pytest.approx(0.4)
        assert mid.c == pytest.approx(0.15)
        assert mid.h == pytest.approx(10.0)

    def test_lerp_endpoints(self) -> None:
        a, b = LchColor(0.3, 0.1, 100.0), LchColor(0.8, 0.05, 200.0)
        assert lerp_lch(a, b, 0.0) == a
        assert lerp_lch(a, b, 1.0).h == pytest.approx(200.0)


class TestContrast:
    def test_black_white_is_21(self) -> None:
        ratio = contrast_ratio(RgbColor(0, 0, 0), RgbColor(255, 255, 255))
        assert ratio == pytest.approx(21.0)

    def test_symmetric(self) -> None:
        a, b = RgbColor(200, 40, 40), RgbColor(20, 20, 30)
        assert contrast_ratio(a, b) == pytest.approx(contrast_ratio(b, a))

    def test_identical_is_one(self) -> None:
        c = RgbColor(90, 90, 90)
        assert contrast_ratio(c, c) == pytest.approx(1.0)

    def test_relative_luminance_green_dominates(self) -> None:
        assert relative_luminance(RgbColor(0, 255, 0)) == pytest.approx(0.7152)
        assert relative_luminance(RgbColor(0, 0, 255)) == pytest.approx(0.0722)


class TestMalformedInput:
    def test_nan_lch_rejected(self) -> None:
        with pytest.raises(ValueError):
            LchColor(math.nan, 0.1, 10.0)

    def test_negative_chroma_rejected(self) -> None:
        with pytest.raises(ValueError):
            LchColor(0.5, -0.1, 10.0)

    def test_negative_float_rgb_rejected(self) -> None:
        with pytest.raises(ValueError):
            rgb_to_lab(np.array([-0.1, 0.2, 0.3]))

    def test_out_of_range_channel_rejected(self) -> None:
        with pytest.raises(ValueError):
            RgbColor(256, 0, 0)
        with pytest.raises(ValueError):
            RgbColor(-1, 0, 0)

    def test_hue_is_normalised(self) -> None:
        assert LchColor(0.5, 0.1, -30.0).h == pytest.approx(330.0)
        assert LchColor(0.5, 0.1, 725.0).h == pytest.approx(5.0)


class TestRgbColor:
    def test_hex_forms(self) -> None:
        assert RgbColor.from_hex("#FF8000") == RgbColor(255, 128, 0)
        assert RgbColor.from_hex("#abc") == RgbColor(0xAA, 0xBB, 0xCC)
        assert RgbColor(1, 2, 255).hex == "#0102ff"
        assert str(RgbColor(0, 0, 0)) == "#000000"

    def test_bad_hex(self) -> None:
        with pytest.raises(ValueError):
            RgbColor.from_hex("ff8000")
        with pytest.raises(ValueError):
            RgbColor.from_hex("#ff80")

    def test_relative_luminance_method(self) -> None:
        assert RgbColor(0, 255, 0).relative_luminance() == pytest.approx(0.7152)
        assert RgbColor(255, 255, 255).relative_luminance() == pytest.approx(1.0)


class TestWeightedClusterRgb:
    def test_centroid_back_to_rgb(self) -> None:
        for rgb in [RgbColor(12, 200, 90), RgbColor(250, 250, 250), RgbColor(3, 4, 5)]:
            back = cluster_from_rgb(rgb, weight=1).rgb
            assert max(abs(a - b) for a, b in zip(back.as_tuple(), rgb.as_tuple())) <= 1

    def test_out_of_gamut_centroid_is_clipped(self) -> None:
        cluster = WeightedCluster(lab=(50.0, 150.0, -150.0), weight=1, lch=LchColor(0.5, 0.3, 300.0))
        assert all(0 <= v <= 255 for v in cluster.rgb.as_tuple())
