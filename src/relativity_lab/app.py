"""Interactive special relativity lab built around a Minkowski diagram."""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import pygame

from relativity_lab.core.config import PHYSICS_CFG, RENDER_CFG
from relativity_lab.core.controller import InteractionController, SessionRecorder, StateChange
from relativity_lab.core.kinematics import (
    contracted_length,
    doppler_factor,
    doppler_tint,
    format_gamma,
    format_velocity,
    lorentz_factor,
    parse_velocity,
    proper_time,
    relativistic_velocity_addition,
)
from relativity_lab.core.logging_utils import SessionLogger, setup_logging
from relativity_lab.core.model import Frame, FrameModel
from relativity_lab.core.timekeeping import DilationClocks
from relativity_lab.data.scenarios import SCENARIO_DISPLAY_ORDER, VELOCITY_PRESETS
from relativity_lab.render import (
    Button,
    ButtonVisualStyle,
    CanvasGeometry,
    FontLibrary,
    RadioGroup,
    Slider,
    SliderStyle,
    SpacetimeDiagramRenderer,
    build_text_panel,
    draw_ruler,
    draw_scene,
    draw_swatch,
    get_text_surface,
)

logger = logging.getLogger(__name__)

EXPORT_DIR = Path("data") / "exports"
PRESET_KEYS = (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5)
SCENARIO_KEYS = (pygame.K_F1, pygame.K_F2, pygame.K_F3)


@dataclass
class AdditionState:
    v1: float = 0.5
    v2: float = 0.5


def canvas_size_for(window_size: tuple[int, int]) -> tuple[int, int]:
    min_w, min_h = RENDER_CFG.min_canvas_size
    width = max(min_w, window_size[0] - RENDER_CFG.panel_width)
    height = max(min_h, window_size[1])
    return width, height


def export_current(
    renderer: SpacetimeDiagramRenderer,
    model: FrameModel,
    geometry: CanvasGeometry,
    out_path: Path,
    *,
    si_units: bool,
) -> Path:
    from relativity_lab.render.figure import export_scene

    scene = renderer.render(model, geometry, si_units=si_units)
    path = export_scene(scene, out_path, si_units=si_units)
    logger.info("Diagram exported to %s", path)
    return path


def final_state(model: FrameModel, si_units: bool) -> dict:
    return {
        "velocity": model.velocity,
        "frame": model.active_frame.value,
        "si_units": si_units,
        "events": [[event.x, event.ct] for event in model.iter_events()],
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interactive special relativity visualizer.")
    parser.add_argument("--velocity", default=str(PHYSICS_CFG.default_velocity), help="Initial velocity as a fraction of c")
    parser.add_argument("--frame", choices=[frame.value for frame in Frame], default=Frame.STATIONARY.value)
    parser.add_argument("--si", action="store_true", help="Show SI units instead of natural units")
    parser.add_argument("--width", type=int, default=RENDER_CFG.width)
    parser.add_argument("--height", type=int, default=RENDER_CFG.height)
    parser.add_argument("--scenario", choices=SCENARIO_DISPLAY_ORDER, help="Start from a predefined event scenario")
    parser.add_argument("--export", metavar="PATH", help="Render the diagram to an image file and exit")
    parser.add_argument("--sessions-dir", default="data/sessions", help="Where session recordings are written")
    parser.add_argument("--no-record", action="store_true", help="Do not record the session")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", help="Also write diagnostics to this file")
    return parser


class RelativityApp:
    """Window, widgets and the main loop."""

    def __init__(self, args: argparse.Namespace) -> None:
        self.args = args
        self.model = FrameModel()
        self.model.set_velocity(parse_velocity(args.velocity))
        self.model.set_active_frame(args.frame)
        self.geometry = CanvasGeometry(canvas_size_for((args.width, args.height)))
        self.controller = InteractionController(self.model, self.geometry, si_units=args.si)
        if args.scenario:
            self.controller.load_scenario(args.scenario)
        self.renderer = SpacetimeDiagramRenderer()
        self.clocks = DilationClocks(velocity=self.model.velocity)
        self.addition = AdditionState()
        self.session: SessionLogger | None = None
        self.running = True

        pygame.init()
        pygame.display.set_caption("Special Relativity Lab")
        self.screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
        self.fonts = FontLibrary(RENDER_CFG.font_names)
        self.font = self.fonts.get(14)
        self.heading_font = self.fonts.get(15, bold=True)
        self.title_font = self.fonts.get(20, bold=True)
        self.diagram_surface = pygame.Surface(self.geometry.size)
        self._build_widgets()

        self.controller.add_listener(self.on_state_change)
        if not args.no_record:
            self._start_session()
        self.render_diagram()

    def _start_session(self) -> None:
        self.session = SessionLogger(self.args.sessions_dir)
        self.session.write_meta(
            {
                "started": datetime.now().isoformat(timespec="seconds"),
                "canvas_size": list(self.geometry.size),
                "initial_state": final_state(self.model, self.controller.si_units),
            }
        )
        self.controller.add_listener(SessionRecorder(self.session))
        logger.info("Recording session to %s", self.session.session_dir)

    def _build_widgets(self) -> None:
        cfg = RENDER_CFG
        x0 = self.geometry.size[0] + 20
        width = cfg.panel_width - 40
        slider_style = SliderStyle(
            track_color=cfg.slider_track_color,
            fill_color=cfg.slider_fill_color,
            knob_color=cfg.slider_knob_color,
            label_color=cfg.text_color,
            value_color=cfg.value_color,
        )
        button_style = ButtonVisualStyle(
            base_color=cfg.button_color,
            hover_color=cfg.button_hover_color,
            text_color=cfg.text_color,
            radius=cfg.button_radius,
            border_color=cfg.button_border_color,
            border_width=1,
        )
        limit = PHYSICS_CFG.max_velocity
        self.velocity_slider = Slider(
            (x0, 70, width, 12),
            "Velocity v",
            -limit,
            limit,
            self.model.velocity,
            self.controller.handle_velocity_input,
            step=0.001,
            value_getter=lambda: format_velocity(self.model.velocity, self.controller.si_units),
            style=slider_style,
        )
        self.frame_radio = RadioGroup(
            (x0, 96),
            [(Frame.STATIONARY.value, "Stationary"), (Frame.MOVING.value, "Moving")],
            self.model.active_frame.value,
            self.controller.handle_frame_selected,
            item_width=width // 2,
            style=button_style,
        )
        third = width // 3
        self.buttons = [
            Button((x0, 136, third - 6, 28), "Clear", self.controller.handle_clear_events, style=button_style),
            Button(
                (x0 + third, 136, third - 6, 28),
                "Units",
                lambda: self.controller.set_si_units(not self.controller.si_units),
                lambda: "SI units" if self.controller.si_units else "c units",
                style=button_style,
            ),
            Button((x0 + 2 * third, 136, third - 6, 28), "Export", self.export_interactive, style=button_style),
            Button(
                (x0, 290, third - 6, 24),
                "Pause",
                self.clocks.toggle,
                lambda: "Pause" if self.clocks.playing else "Play",
                style=button_style,
            ),
            Button((x0 + third, 290, third - 6, 24), "Reset", self.clocks.reset, style=button_style),
        ]
        self.addition_sliders = [
            Slider(
                (x0, 510, width, 10),
                "Frame S' relative to S (v1)",
                -limit,
                limit,
                self.addition.v1,
                lambda raw: setattr(self.addition, "v1", parse_velocity(raw)),
                step=0.001,
                value_getter=lambda: format_velocity(self.addition.v1, self.controller.si_units),
                style=slider_style,
            ),
            Slider(
                (x0, 552, width, 10),
                "Object relative to S' (v2)",
                -limit,
                limit,
                self.addition.v2,
                lambda raw: setattr(self.addition, "v2", parse_velocity(raw)),
                step=0.001,
                value_getter=lambda: format_velocity(self.addition.v2, self.controller.si_units),
                style=slider_style,
            ),
        ]

    def on_state_change(self, change: StateChange) -> None:
        if change.kind in ("velocity", "scenario"):
            self.velocity_slider.set_value(change.velocity)
            self.clocks.set_velocity(change.velocity)
        if change.kind == "resize":
            self.diagram_surface = pygame.Surface(self.geometry.size)
            self._build_widgets()
        self.frame_radio.selected = change.frame.value
        self.render_diagram()

    def render_diagram(self) -> None:
        scene = self.renderer.render(self.model, self.geometry, si_units=self.controller.si_units)
        draw_scene(
            self.diagram_surface,
            scene,
            self.geometry,
            background=RENDER_CFG.background_color,
            font_getter=self.fonts,
        )

    def export_interactive(self) -> None:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        export_current(
            self.renderer,
            self.model,
            self.geometry,
            EXPORT_DIR / f"diagram_{stamp}.png",
            si_units=self.controller.si_units,
        )

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.VIDEORESIZE:
            self.screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
            self.controller.handle_resize(canvas_size_for(event.size))
        elif event.type == pygame.KEYDOWN:
            self.handle_key(event)
        else:
            widgets = [self.velocity_slider, self.frame_radio, *self.buttons, *self.addition_sliders]
            if any(widget.handle_event(event) for widget in widgets):
                return
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.controller.handle_pointer_click(*event.pos)

    def handle_key(self, event: pygame.event.Event) -> None:
        key = event.key
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key in (pygame.K_LEFT, pygame.K_RIGHT):
            steps = 10 if event.mod & pygame.KMOD_SHIFT else 1
            self.controller.nudge_velocity(steps if key == pygame.K_RIGHT else -steps)
        elif key == pygame.K_f:
            self.controller.toggle_frame()
        elif key == pygame.K_c:
            self.controller.handle_clear_events()
        elif key == pygame.K_u:
            self.controller.set_si_units(not self.controller.si_units)
        elif key == pygame.K_e:
            self.export_interactive()
        elif key == pygame.K_SPACE:
            self.clocks.toggle()
        elif key == pygame.K_r:
            self.clocks.reset()
        elif key in PRESET_KEYS:
            self.controller.apply_preset(VELOCITY_PRESETS[PRESET_KEYS.index(key)].key)
        elif key in SCENARIO_KEYS:
            self.controller.load_scenario(SCENARIO_DISPLAY_ORDER[SCENARIO_KEYS.index(key)])

    def draw_panel(self) -> None:
        cfg = RENDER_CFG
        si = self.controller.si_units
        canvas_w = self.geometry.size[0]
        panel_rect = pygame.Rect(canvas_w, 0, self.screen.get_width() - canvas_w, self.screen.get_height())
        pygame.draw.rect(self.screen, cfg.panel_color, panel_rect)
        pygame.draw.line(self.screen, cfg.panel_border_color, panel_rect.topleft, panel_rect.bottomleft, 1)
        x0 = canvas_w + 20
        width = cfg.panel_width - 40

        title = get_text_surface(self.title_font, "Special Relativity Lab", cfg.text_color)
        self.screen.blit(title, (x0, 14))

        self.velocity_slider.draw(self.screen, self.font)
        self.frame_radio.draw(self.screen, self.font)
        for button in self.buttons:
            button.draw(self.screen, self.font)

        v = self.model.velocity
        gamma = lorentz_factor(v)
        unit = "meters" if si else "units"
        proper = PHYSICS_CFG.proper_length
        earth_years = PHYSICS_CFG.twin_earth_years
        lines = [
            (f"v = {format_velocity(v, si)}    γ = {format_gamma(gamma)}", cfg.value_color),
            (f"Events placed: {self.model.event_count}", cfg.text_color),
            ("", cfg.text_color),
            ("Time dilation", cfg.text_color),
            (f"  Stationary clock: {self.clocks.stationary_time:6.2f} s", cfg.text_color),
            (f"  Moving clock:     {self.clocks.moving_time:6.2f} s", cfg.text_color),
        ]
        readout = build_text_panel(self.font, lines, background_color=(0, 0, 0, 0), padding=(0, 0), min_width=width)
        self.screen.blit(readout, (x0, 180))

        contracted = contracted_length(proper, v)
        heading = get_text_surface(self.heading_font, "Length contraction", cfg.text_color)
        self.screen.blit(heading, (x0, 340))
        draw_ruler(self.screen, pygame.Rect(x0, 366, width, 10), 1.0, color=cfg.ruler_proper_color, tick_color=cfg.panel_color)
        draw_ruler(
            self.screen,
            pygame.Rect(x0, 382, width, 10),
            contracted / proper,
            color=cfg.ruler_contracted_color,
            tick_color=cfg.panel_color,
        )
        length_text = f"L0 = {proper:.0f} {unit}   L = {contracted:.2f} {unit}"
        self.screen.blit(get_text_surface(self.font, length_text, cfg.text_color), (x0, 398))

        traveller = proper_time(earth_years, v)
        twin_text = f"Twins: earth {earth_years:.2f} years, traveller {traveller:.2f} years"
        self.screen.blit(get_text_surface(self.font, twin_text, cfg.text_color), (x0, 422))

        factor = doppler_factor(v)
        doppler_text = f"Doppler f_obs/f_emit = {format_gamma(factor)}"
        self.screen.blit(get_text_surface(self.font, doppler_text, cfg.text_color), (x0, 444))
        draw_swatch(self.screen, (x0 + width - 10, 451), 9, doppler_tint(v), outline=cfg.muted_text_color)

        heading = get_text_surface(self.heading_font, "Velocity addition", cfg.text_color)
        self.screen.blit(heading, (x0, 468))
        for slider in self.addition_sliders:
            slider.draw(self.screen, self.font)
        total = relativistic_velocity_addition(self.addition.v1, self.addition.v2)
        result = f"Combined velocity: {format_velocity(total, si)}"
        self.screen.blit(get_text_surface(self.font, result, cfg.value_color), (x0, 574))

        hints = ("F frame  C clear  U units  E export", "1-5 presets  F1-F3 scenarios  Space/R clocks")
        for row, hint in enumerate(hints):
            y = self.screen.get_height() - 44 + row * 20
            self.screen.blit(get_text_surface(self.font, hint, cfg.muted_text_color), (x0, y))

    def run(self) -> None:
        clock = pygame.time.Clock()
        try:
            while self.running:
                clock.tick(RENDER_CFG.fps)
                for event in pygame.event.get():
                    self.handle_event(event)
                self.clocks.tick()
                self.screen.blit(self.diagram_surface, self.geometry.offset)
                self.draw_panel()
                pygame.display.flip()
        finally:
            self.close()

    def close(self) -> None:
        if self.session is not None:
            self.session.update_meta(
                {
                    "canvas_size": list(self.geometry.size),
                    "final_state": final_state(self.model, self.controller.si_units),
                    "finished": datetime.now().isoformat(timespec="seconds"),
                }
            )
            self.session.close()
            self.session = None
        pygame.quit()


def run_export(args: argparse.Namespace) -> Path:
    model = FrameModel()
    model.set_velocity(parse_velocity(args.velocity))
    model.set_active_frame(args.frame)
    geometry = CanvasGeometry(canvas_size_for((args.width, args.height)))
    if args.scenario:
        InteractionController(model, geometry).load_scenario(args.scenario)
    return export_current(SpacetimeDiagramRenderer(), model, geometry, Path(args.export), si_units=args.si)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)
    if args.export:
        run_export(args)
        return 0
    RelativityApp(args).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
