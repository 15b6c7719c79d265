"""Tests for scalar colormaps and legend gradients."""

import numpy as np
import pytest

from dielectra.colorspace import (
    COLOR_MAP_STOPS,
    ColorMapName,
    build_lut,
    gradient_css,
    gradient_stops,
    list_colormaps,
    map_array,
    map_scalar,
    resolve_colormap,
)
from dielectra.errors import UnknownColorMapError

TABLE_MAPS = list(COLOR_MAP_STOPS)


class TestTableMaps:
    """Table-driven maps interpolate between stops and clamp at the ends."""

    @pytest.mark.parametrize("name", TABLE_MAPS)
    def test_endpoints_exact(self, name):
        stops = COLOR_MAP_STOPS[name]
        assert map_scalar(0.0, name) == stops[0][1]
        assert map_scalar(1.0, name) == stops[-1][1]

    @pytest.mark.parametrize("name", TABLE_MAPS)
    def test_out_of_range_clamps(self, name):
        stops = COLOR_MAP_STOPS[name]
        assert map_scalar(-0.5, name) == stops[0][1]
        assert map_scalar(3.0, name) == stops[-1][1]

    @pytest.mark.parametrize("name", TABLE_MAPS)
    def test_inner_stops_exact(self, name):
        for pos, color in COLOR_MAP_STOPS[name]:
            assert map_scalar(pos, name) == color

    def test_jet_midpoint_rounds_half_up(self):
        # halfway between (0,0,255) and (0,255,255)
        assert map_scalar(0.25, "jet") == (0, 128, 255)

    def test_gray_is_linear(self):
        assert map_scalar(0.5, "gray") == (128, 128, 128)
        assert map_scalar(0.2, "gray") == (51, 51, 51)


class TestTurbo:
    """Procedural four-band ramp."""

    @pytest.mark.parametrize("t, expected", [
        (0.0, (0, 0, 255)),
        (0.125, (0, 127, 255)),
        (0.25, (0, 255, 255)),
        (0.5, (0, 255, 0)),
        (0.75, (255, 255, 0)),
        (1.0, (255, 0, 0)),
    ])
    def test_band_edges(self, t, expected):
        assert map_scalar(t, ColorMapName.TURBO) == expected

    def test_clamps(self):
        assert map_scalar(-1.0, "turbo") == (0, 0, 255)
        assert map_scalar(2.0, "turbo") == (255, 0, 0)


class TestVectorized:

    @pytest.mark.parametrize("name", list(ColorMapName))
    def test_matches_scalar(self, name):
        t = np.linspace(-0.1, 1.1, 1201)
        rgb = map_array(t, name)
        assert rgb.dtype == np.uint8
        expected = np.array([map_scalar(v, name) for v in t], dtype=np.uint8)
        np.testing.assert_array_equal(rgb, expected)

    def test_preserves_shape(self):
        rgb = map_array(np.zeros((3, 4)), "magma")
        assert rgb.shape == (3, 4, 3)
        assert tuple(rgb[0, 0]) == (0, 0, 4)

    def test_lut(self):
        lut = build_lut("hot", 16)
        assert lut.shape == (16, 3)
        assert tuple(lut[0]) == (0, 0, 0)
        assert tuple(lut[-1]) == (255, 255, 255)
        with pytest.raises(ValueError):
            build_lut("hot", 0)


class TestGradient:
    """Legend gradients must look like the discrete map."""

    @pytest.mark.parametrize("name", list(ColorMapName))
    def test_gradient_matches_sampling(self, name):
        stops = gradient_stops(name)
        positions = np.array([s.position for s in stops])
        colors = np.array([s.color for s in stops], dtype=np.float64)

        t = np.linspace(0.0, 1.0, 2001)
        continuous = np.stack([np.interp(t, positions, colors[:, c]) for c in range(3)], axis=-1)
        discrete = map_array(t, name).astype(np.float64)

        assert np.max(np.abs(continuous - discrete)) <= 1.0

    @pytest.mark.parametrize("name", list(ColorMapName))
    def test_stops_span_unit_interval(self, name):
        stops = gradient_stops(name)
        assert stops[0].position == 0.0
        assert stops[-1].position == 1.0
        assert [s.position for s in stops] == sorted(s.position for s in stops)

    def test_css(self):
        assert gradient_css("gray") == "linear-gradient(to right, rgb(0,0,0) 0%, rgb(255,255,255) 100%)"
        assert "rgb(255,0,0) 33%" in gradient_css("hot", "to top")
        assert gradient_css("jet").count("rgb(") == 6

    def test_turbo_css_anchors(self):
        css = gradient_css("turbo")
        assert css.startswith("linear-gradient(to right, rgb(0,0,255) 0%, rgb(0,255,255) 25%")
        assert css.endswith("rgb(255,0,0) 100%)")

    def test_percent(self):
        assert gradient_stops("jet")[1].percent == pytest.approx(12.5)


class TestLookup:

    def test_unknown_name(self):
        with pytest.raises(UnknownColorMapError):
            map_scalar(0.5, "viridis")

    def test_case_insensitive(self):
        assert resolve_colormap("MAGMA") is ColorMapName.MAGMA
        assert resolve_colormap(ColorMapName.JET) is ColorMapName.JET

    def test_list(self):
        assert list_colormaps() == ["turbo", "jet", "hot", "magma", "gray"]
