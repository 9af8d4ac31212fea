"""Pygame 2D visualization for the soil-moisture simulation.

Renders the grid coloured by moisture, tap and override markers, and a
side panel with parameters, the selected cell, and its recent history.
The simulation steps at a configurable tick rate while the display
refreshes at the Pygame frame rate.
"""

from __future__ import annotations

import logging
import textwrap
from typing import TYPE_CHECKING, ClassVar

import pygame

if TYPE_CHECKING:
    from soilsim.simulation.engine import SimulationEngine

from soilsim.display.colors import moisture_colour, text_colour
from soilsim.display.units import (
    PARAMETER_EXPLANATIONS,
    PARAMETER_FORMULAS,
    format_moisture,
    from_display_value,
    legend_labels,
    parameter_label,
    to_display_value,
)
from soilsim.simulation.config import COLOR_SCHEMES, MOISTURE_UNITS, UNITS_SYSTEMS
from soilsim.simulation.errors import InvalidParameter

logger = logging.getLogger(__name__)

# Colour palette
_BG = (25, 25, 30)
_GRID_LINE = (90, 90, 90)
_TAP_BORDER = (255, 220, 0)
_OVERRIDE_INSET = (220, 30, 30)
_SELECTED = (255, 255, 255)
_TEXT = (200, 200, 200)
_SPARK = (136, 132, 216)

# Manual moisture step per key press, in display units
_MANUAL_STEP: dict[str, float] = {"percentage": 5.0, "volumetric": 0.025}
_MANUAL_STEP_LABEL: dict[str, str] = {"percentage": "5%", "volumetric": "0.025 m³/m³"}

# Adjustable parameters: (min, max, step) per key press
_PARAM_RANGES: dict[str, tuple[float, float, float]] = {
    "diffusion_coefficient": (0.0, 1.0, 0.01),
    "evapotranspiration_rate": (0.0, 0.5, 0.01),
    "irrigation_rate": (0.0, 0.5, 0.01),
    "moisture_threshold": (0.0, 1.0, 0.01),
    "time_step_size": (0.1, 24.0, 0.1),
}


class PygameRenderer:
    """Renders a SimulationEngine state into a Pygame window.

    Attributes:
        engine: The simulation engine to visualise.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    # Speed presets in ticks per second
    _SPEED_STEPS: ClassVar[list[float]] = [
        0.25,
        0.5,
        1.0,
        2.0,
        5.0,
        10.0,
        30.0,
        60.0,
    ]

    def __init__(
        self,
        engine: SimulationEngine,
        cell_size: int = 40,
        ticks_per_second: float = 1.0,
    ) -> None:
        """Initialise the renderer.

        Args:
            engine: An initialized simulation engine.
            cell_size: Pixel width/height per grid cell.
            ticks_per_second: Simulation ticks per real-time second.
        """
        self.engine = engine
        self.cell_size = cell_size
        self.ticks_per_second = ticks_per_second
        self._speed_index = self._nearest_speed(ticks_per_second)
        self._tick_accumulator = 0.0

        config = engine.config
        self.color_scheme = config.color_scheme
        self.moisture_unit = config.moisture_unit
        self.units_system = config.units_system
        self.display_values = config.display_values_in_cells
        self.selected_param = next(iter(_PARAM_RANGES))

        grid = engine.snapshot()
        w = grid.cols * cell_size
        h = grid.rows * cell_size
        self._panel_width = 320
        self._legend_height = 30
        self._win_w = w + self._panel_width
        self._win_h = max(h + self._legend_height, 720)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Soil Moisture Simulation")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.small_font = pygame.font.SysFont("monospace", max(8, cell_size // 4))
        self.running = True
        self.paused = True

    def _nearest_speed(self, tps: float) -> int:
        """Return the index of the closest speed preset."""
        return min(
            range(len(self._SPEED_STEPS)),
            key=lambda i: abs(self._SPEED_STEPS[i] - tps),
        )

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, step sim, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0  # seconds elapsed
            self._handle_events()
            if not self.paused:
                self._tick_accumulator += self.ticks_per_second * dt
                steps = int(self._tick_accumulator)
                self._tick_accumulator -= steps
                for _ in range(steps):
                    self.engine.step()
            self._draw()

        pygame.quit()

    # -- Input ---------------------------------------------------------------

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._select_at(*event.pos)
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

    def _handle_key(self, key: int) -> None:
        """Dispatch a single key press."""
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_SPACE:
            self.paused = not self.paused
        elif key == pygame.K_s and self.paused:
            self.engine.step()
        elif key == pygame.K_r:
            self.paused = True
            self._tick_accumulator = 0.0
            self.engine.reset()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._speed_index = min(len(self._SPEED_STEPS) - 1, self._speed_index + 1)
            self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
        elif key == pygame.K_MINUS:
            self._speed_index = max(0, self._speed_index - 1)
            self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
        elif key == pygame.K_c:
            self.color_scheme = _cycle(COLOR_SCHEMES, self.color_scheme)
        elif key == pygame.K_u:
            self.moisture_unit = _cycle(MOISTURE_UNITS, self.moisture_unit)
        elif key == pygame.K_v:
            self.display_values = not self.display_values
        elif key == pygame.K_m:
            self.units_system = _cycle(UNITS_SYSTEMS, self.units_system)
        elif key == pygame.K_TAB:
            self.selected_param = _cycle(tuple(_PARAM_RANGES), self.selected_param)
        elif key in (pygame.K_LEFT, pygame.K_RIGHT):
            self._nudge_parameter(1 if key == pygame.K_RIGHT else -1)
        else:
            self._handle_cell_key(key)

    def _handle_cell_key(self, key: int) -> None:
        """Keys that act on the selected cell."""
        selected = self.engine.history.selected
        if selected is None:
            return
        row, col = selected
        if key == pygame.K_t:
            self.engine.toggle_tap(row, col)
        elif key == pygame.K_o:
            self.engine.clear_override(row, col)
        elif key in (pygame.K_UP, pygame.K_DOWN):
            # Step in the unit being displayed, then convert back
            step = _MANUAL_STEP[self.moisture_unit]
            if key == pygame.K_DOWN:
                step = -step
            shown = to_display_value(
                self.engine.grid.cell_at(row, col).moisture,
                self.moisture_unit,
            )
            self.engine.set_cell_moisture(
                row,
                col,
                from_display_value(shown + step, self.moisture_unit),
            )

    def _parameter_value(self, name: str) -> float:
        """Return the engine's current value for an adjustable parameter."""
        if name == "time_step_size":
            return self.engine.time_step_size
        return self.engine.params.as_dict()[name]

    def _nudge_parameter(self, direction: int) -> None:
        """Move the selected parameter one step, clamped to its range."""
        name = self.selected_param
        lo, hi, step = _PARAM_RANGES[name]
        value = self._parameter_value(name) + direction * step
        value = round(min(max(value, lo), hi), 6)
        try:
            if name == "time_step_size":
                self.engine.set_time_step_size(value)
            else:
                self.engine.set_parameters(**{name: value})
        except InvalidParameter as exc:
            logger.warning("Rejected %s=%s: %s", name, value, exc)

    def _select_at(self, px: int, py: int) -> None:
        """Observe the cell under a mouse click, if any."""
        grid = self.engine.grid
        row, col = py // self.cell_size, px // self.cell_size
        if grid.in_bounds(row, col):
            self.engine.observe((row, col))
            logger.debug("Selected cell (%d, %d)", row, col)

    # -- Drawing -------------------------------------------------------------

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_grid()
        self._draw_legend()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_grid(self) -> None:
        """Draw each cell with tap and override markers."""
        cs = self.cell_size
        for r, row in enumerate(self.engine.grid.rows_of_cells()):
            for c, cell in enumerate(row):
                rect = pygame.Rect(c * cs, r * cs, cs, cs)
                pygame.draw.rect(
                    self.screen,
                    moisture_colour(cell.moisture, self.color_scheme),
                    rect,
                )
                if cell.override_active:
                    pygame.draw.rect(self.screen, _OVERRIDE_INSET, rect.inflate(-4, -4), 2)
                if cell.tap_active:
                    pygame.draw.rect(self.screen, _TAP_BORDER, rect, 2)
                else:
                    pygame.draw.rect(self.screen, _GRID_LINE, rect, 1)
                if self.display_values:
                    label = self.small_font.render(
                        format_moisture(cell.moisture, self.moisture_unit),
                        True,
                        text_colour(cell.moisture),
                    )
                    self.screen.blit(label, label.get_rect(center=rect.center))

        selected = self.engine.history.selected
        if selected is not None:
            r, c = selected
            pygame.draw.rect(self.screen, _SELECTED, (c * cs, r * cs, cs, cs), 3)

    def _draw_legend(self) -> None:
        """Draw dry/mid/wet swatches below the grid."""
        y = self.engine.grid.rows * self.cell_size + 8
        x = 4
        for moisture, label in zip((0.0, 0.5, 1.0), legend_labels(self.moisture_unit)):
            pygame.draw.rect(
                self.screen,
                moisture_colour(moisture, self.color_scheme),
                (x, y, 14, 14),
            )
            surf = self.font.render(label, True, _TEXT)
            self.screen.blit(surf, (x + 18, y))
            x += surf.get_width() + 34

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        panel_x = self.engine.grid.cols * self.cell_size + 10
        y = 10
        for line in self._panel_lines():
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18

        self._draw_sparkline(panel_x, y + 10, self._panel_width - 30, 60)

    def _panel_lines(self) -> list[str]:
        """Return the text lines of the side panel."""
        engine = self.engine
        lines = [
            f"Tick: {engine.tick}",
            f"Speed: {self.ticks_per_second:.2f} t/s",
            f"{'PAUSED' if self.paused else 'RUNNING'}",
            f"Units: {self.units_system}",
            "",
            "--- Parameters ---",
        ]
        for name in _PARAM_RANGES:
            label = parameter_label(name, self.units_system, self.moisture_unit)
            marker = ">" if name == self.selected_param else " "
            lines.append(f"{marker}{label}: {self._parameter_value(name):.2f}")

        lines += textwrap.wrap(PARAMETER_EXPLANATIONS[self.selected_param], width=38)
        formula = PARAMETER_FORMULAS.get(self.selected_param)
        if formula:
            lines.append(f"  {formula}")

        selected = engine.history.selected
        lines += ["", "--- Cell ---"]
        if selected is None:
            lines.append("(click a cell)")
        else:
            row, col = selected
            cell = engine.grid.cell_at(row, col)
            lines += [
                f"Row {row}, Col {col}",
                f"Moisture: {format_moisture(cell.moisture, self.moisture_unit)}",
                f"Tap: {'On' if cell.tap_active else 'Off'}",
                f"Override: {'Yes' if cell.override_active else 'No'}",
            ]

        lines += [
            "",
            "--- Controls ---",
            "SPACE: run/pause  S: step",
            "R: reset  +/-: speed",
            "T: toggle tap  O: clear override",
            f"UP/DOWN: moisture +/-{_MANUAL_STEP_LABEL[self.moisture_unit]}",
            "TAB: parameter  LEFT/RIGHT: adjust",
            "C: colours  U: moisture unit",
            "M: metric/imperial  V: values",
            "ESC: quit",
        ]
        return lines

    def _draw_sparkline(self, x: int, y: int, width: int, height: int) -> None:
        """Plot the observed cell's recent moisture samples."""
        samples = self.engine.history.samples
        pygame.draw.rect(self.screen, _GRID_LINE, (x, y, width, height), 1)
        if len(samples) < 2:
            return
        span = max(1, self.engine.history.max_length - 1)
        points = [
            (
                x + int(i * width / span),
                y + height - int(s.moisture * height),
            )
            for i, s in enumerate(samples)
        ]
        pygame.draw.lines(self.screen, _SPARK, False, points, 2)


def _cycle(choices: tuple[str, ...], current: str) -> str:
    """Return the choice after ``current``, wrapping around."""
    return choices[(choices.index(current) + 1) % len(choices)]
