"""Tests for the status card, multi-sensor and TRMNL panel templates."""

from typing import Callable

import numpy as np
import pytest

from ha_image_server.exceptions import InvalidDimensionsError, TooManyEntitiesError
from ha_image_server.models import ColorClass, EntityRecord
from ha_image_server.rendering.colors import STATUS_PALETTES, PanelColors
from ha_image_server.rendering.glyphs import glyph_mask
from ha_image_server.rendering.layouts import (
    compose_trmnl_panel,
    render_multi_sensor,
    render_status_card,
    render_trmnl_panel,
)
from ha_image_server.rendering.layouts.multi_sensor import default_height
from ha_image_server.rendering.layouts.status_card import info_lines
from ha_image_server.rendering.layouts.trmnl_panel import gauge_fraction, row_height

pytestmark = pytest.mark.unit

EntityFactory = Callable[..., EntityRecord]


class TestStatusCard:
    """Test suite for render_status_card."""

    def test_render_when_binary_sensor_detected_then_green_band_and_label(
        self, make_entity: EntityFactory
    ) -> None:
        """An 'on' binary sensor gets the positive palette and the DETECTED label."""
        # Arrange
        entity = make_entity("binary_sensor.motion", "on", friendly_name="Hall Motion")

        # Act
        canvas = render_status_card(entity)

        # Assert
        assert canvas.size == (400, 200)
        assert canvas.mode == "RGB"

        r, g, b = canvas.get_pixel(20, 50)
        assert g > r and g > b

        # "DETECTED" is 56 px wide, centered at x = (400 - 56) // 2
        glyph = glyph_mask("D")
        region = canvas.pixels[65:73, 172:178]
        assert (region[glyph] == 255).all()

        palette = STATUS_PALETTES[ColorClass.POSITIVE]
        assert canvas.get_pixel(373, 64) == palette.indicator_fill

    def test_render_when_unavailable_then_gray_palette(self, make_entity: EntityFactory) -> None:
        canvas = render_status_card(make_entity("sensor.gone", "unavailable"))

        palette = STATUS_PALETTES[ColorClass.UNAVAILABLE]
        assert canvas.get_pixel(373, 64) == palette.indicator_fill

    def test_render_when_custom_size_then_exact_dimensions(self, make_entity: EntityFactory) -> None:
        """Any positive size renders, including sizes too small for the layout."""
        entity = make_entity("sensor.power", "12.5", unit="kWh")

        assert render_status_card(entity, 640, 320).size == (640, 320)
        assert render_status_card(entity, 10, 10).size == (10, 10)

    def test_render_when_drawn_then_outer_border(self, make_entity: EntityFactory) -> None:
        canvas = render_status_card(make_entity())

        assert canvas.get_pixel(0, 0) == PanelColors.BORDER
        assert canvas.get_pixel(2, 100) == PanelColors.BORDER
        assert canvas.get_pixel(399, 199) == PanelColors.BORDER

    @pytest.mark.parametrize("width,height", [(0, 200), (400, 0), (-5, 10)])
    def test_render_when_invalid_dimensions_then_raises(
        self, make_entity: EntityFactory, width: int, height: int
    ) -> None:
        with pytest.raises(InvalidDimensionsError):
            render_status_card(make_entity(), width, height)

    def test_info_lines_when_attributes_present_then_ordered_and_filtered(
        self, make_entity: EntityFactory
    ) -> None:
        """Supported attribute types are listed in display order; others are skipped."""
        # Arrange
        entity = make_entity(
            "sensor.kitchen",
            "21",
            unit="°C",
            battery=True,
            brightness=[1, 2],
            device_class="temperature",
            last_changed="2024-01-01T12:00:00.000000+00:00",
        )

        # Act
        lines = info_lines(entity)

        # Assert
        assert lines == [
            "Entity: sensor.kitchen",
            "Type: temperature",
            "Unit: °C",
            "Battery: true",
            "Changed: 2024-01-01T12:00:00.00...",
        ]

    def test_info_lines_when_line_over_45_chars_then_skipped(self, make_entity: EntityFactory) -> None:
        entity = make_entity("sensor.kitchen", "21", battery=10**40, temperature=21.5)

        lines = info_lines(entity)

        assert lines == ["Entity: sensor.kitchen", "Temp: 21.5"]

    def test_render_when_card_short_then_info_lines_stop_before_bottom(
        self, make_entity: EntityFactory
    ) -> None:
        """Only lines ending above height - 10 are drawn; the rest of the band stays empty."""
        # Arrange
        entity = make_entity("sensor.kitchen", "21", device_class="temperature", humidity=40)
        info_fill = np.array(PanelColors.INFO_FILL, dtype=np.uint8)

        # Act
        short = render_status_card(entity, 400, 130)
        tall = render_status_card(entity, 400, 200)

        # Assert
        entity_line = short.pixels[95:103, 15:200]
        assert (entity_line == PanelColors.INFO_ENTITY_TEXT).all(axis=-1).any()
        below = short.pixels[103:121, 9:391]
        assert (below == info_fill).all()

        second_line = tall.pixels[113:121, 15:200]
        assert (second_line == PanelColors.INFO_ATTRIBUTE_TEXT).all(axis=-1).any()


class TestMultiSensor:
    """Test suite for render_multi_sensor."""

    def test_render_when_default_height_then_fits_rows(self, make_entity: EntityFactory) -> None:
        entities = [make_entity(f"sensor.s{i}", str(i)) for i in range(3)]

        canvas = render_multi_sensor(entities)

        assert canvas.size == (500, default_height(3))
        assert default_height(3) == 220

    def test_render_when_eleven_entities_then_rejected(self, make_entity: EntityFactory) -> None:
        """More than 10 entities is an error, never a silent truncation."""
        entities = [make_entity(f"sensor.s{i}") for i in range(11)]

        with pytest.raises(TooManyEntitiesError) as exc_info:
            render_multi_sensor(entities)

        assert exc_info.value.limit == 10
        assert exc_info.value.count == 11

    def test_render_when_mixed_availability_then_dot_colors_differ(
        self, make_entity: EntityFactory
    ) -> None:
        # Arrange
        entities = [make_entity("sensor.a", "5"), EntityRecord.placeholder("sensor.b")]

        # Act
        canvas = render_multi_sensor(entities)

        # Assert
        assert canvas.get_pixel(479, 74) == PanelColors.DOT_AVAILABLE
        assert canvas.get_pixel(479, 114) == PanelColors.DOT_UNAVAILABLE

    def test_render_when_height_too_small_then_skips_rows(self, make_entity: EntityFactory) -> None:
        """Rows that would not fit are skipped without error."""
        entities = [make_entity(f"sensor.s{i}") for i in range(5)]

        canvas = render_multi_sensor(entities, width=300, height=100)

        assert canvas.size == (300, 100)
        # Only the first row (y = 60) fits; the second would start at 100
        assert canvas.get_pixel(20, 60) == PanelColors.ROW_SEPARATOR

    def test_render_when_empty_title_then_default_title(self, make_entity: EntityFactory) -> None:
        entities = [make_entity()]

        with_empty = render_multi_sensor(entities, title="")
        with_default = render_multi_sensor(entities)

        assert np.array_equal(with_empty.pixels, with_default.pixels)

    def test_render_when_invalid_width_then_raises(self, make_entity: EntityFactory) -> None:
        with pytest.raises(InvalidDimensionsError):
            render_multi_sensor([make_entity()], width=0)


class TestTrmnlPanel:
    """Test suite for the TRMNL e-paper panel."""

    def test_render_when_any_input_then_pure_black_and_white(self, make_entity: EntityFactory) -> None:
        """The rendered panel is 800x480 and contains only 0 and 255."""
        # Arrange
        entities = [
            make_entity("sensor.battery", "42", unit="%", friendly_name="Battery"),
            make_entity("sensor.power", "12.5", unit="kWh"),
            EntityRecord.placeholder("sensor.missing"),
        ]

        # Act
        canvas = render_trmnl_panel(entities, title="Home")

        # Assert
        assert canvas.size == (800, 480)
        assert canvas.mode == "L"
        assert set(np.unique(canvas.pixels).tolist()) <= {0, 255}

    def test_compose_when_42_percent_then_gauge_fill_ends_at_563(self, make_entity: EntityFactory) -> None:
        """A 42% reading fills round(194 * 0.42) = 81 interior pixels starting at x = 483."""
        # Arrange
        entity = make_entity("sensor.battery", "42", unit="%")

        # Act
        canvas = compose_trmnl_panel([entity])

        # Assert
        region = canvas.pixels[113:123, 482:678]
        black_columns = np.nonzero((region == 0).any(axis=0))[0]
        assert 482 + int(black_columns.max()) == 563

    def test_compose_when_sixteen_entities_then_rejected(self, make_entity: EntityFactory) -> None:
        entities = [make_entity(f"sensor.s{i}") for i in range(16)]

        with pytest.raises(TooManyEntitiesError):
            compose_trmnl_panel(entities)

    def test_compose_when_fifteen_entities_then_renders(self, make_entity: EntityFactory) -> None:
        entities = [make_entity(f"sensor.s{i}", str(i)) for i in range(15)]

        assert render_trmnl_panel(entities).size == (800, 480)

    def test_compose_when_unavailable_value_row_then_outlined_square(
        self, make_entity: EntityFactory
    ) -> None:
        """Available rows get a filled square, unavailable rows an outlined one."""
        entities = [make_entity("sensor.a", "5"), EntityRecord.placeholder("sensor.b")]

        canvas = compose_trmnl_panel(entities)

        # Row 0 square at (775, 105), row 1 at (775, 170)
        assert canvas.get_pixel(777, 107) == 0
        assert canvas.get_pixel(775, 170) == 0
        assert canvas.get_pixel(777, 172) == 255

    def test_compose_when_single_row_then_dotted_separator(self, make_entity: EntityFactory) -> None:
        canvas = compose_trmnl_panel([make_entity("sensor.a", "5")])

        assert canvas.get_pixel(60, 143) == 0
        assert canvas.get_pixel(61, 143) == 255

    def test_compose_when_drawn_then_frame_and_header_rules(self, make_entity: EntityFactory) -> None:
        canvas = compose_trmnl_panel([])

        assert canvas.get_pixel(1, 240) == 0
        assert canvas.get_pixel(400, 10) == 0
        assert canvas.get_pixel(400, 65) == 0
        assert canvas.get_pixel(400, 300) == 255

    @pytest.mark.parametrize("count,expected", [(1, 65), (6, 65), (7, 54), (15, 25)])
    def test_row_height_when_count_given_then_compresses_above_six(
        self, count: int, expected: int
    ) -> None:
        assert row_height(count) == expected

    @pytest.mark.parametrize(
        "state,expected",
        [("42", 0.42), ("150", 1.0), ("-5", 0.0), ("abc", 0.0), ("nan", 0.0)],
    )
    def test_gauge_fraction_when_state_given_then_clamped(
        self, make_entity: EntityFactory, state: str, expected: float
    ) -> None:
        assert gauge_fraction(make_entity("sensor.x", state, unit="%")) == pytest.approx(expected)
