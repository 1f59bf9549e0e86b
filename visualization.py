# visualization.py
"""
Handles the visualization of the particle simulation using Pygame.

The Visualizer is the host side of the engine: it owns the window, draws
the particles after every step and forwards mouse and keyboard input to
the SimulationEngine.
"""
import logging
import pygame
import numpy as np
from typing import Optional, Tuple

from constants import (
    BACKGROUND_COLOR, FPS, DEFAULT_FRAME_OPACITY, FRAME_OPACITY_STEP,
    DOUBLE_CLICK_MS, DOUBLE_CLICK_SLOP
)
from simulation import MouseButton, SimulationEngine
from vector import Vector2D

# --- Data Contracts ---
#
# class ClickTracker:
#   - press(self, button, pos, time_ms) -> int:
#     - Outputs: The click multiplicity of this press: 1 for a single click,
#       2 for a double click, and so on. Presses of the same button within
#       DOUBLE_CLICK_MS and DOUBLE_CLICK_SLOP pixels of the previous one
#       extend the current run.
#
# class Visualizer:
#   - __init__(self, width: int, height: int, frame_opacity: float = 0.5)
#     - Side Effects: Initializes Pygame and creates a display surface.
#   - set_frame_opacity(self, frame_opacity: float) -> None:
#     - Side Effects: Sets how strongly each frame covers the previous one.
#       Values outside [0, 1] are clamped when converted to an alpha.
#   - draw(self, engine: SimulationEngine) -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: Forwards input events to the engine and renders the
#       particles. SPACE pauses, N steps one frame while paused, R
#       restarts, C toggles collisions, [ and ] change the frame opacity.

# Pygame mouse button numbers.
PYGAME_BUTTONS = {
    1: MouseButton.PRIMARY,
    2: MouseButton.MIDDLE,
    3: MouseButton.SECONDARY,
}


class ClickTracker:
    """Counts repeated clicks, since Pygame only reports single presses."""
    def __init__(self, interval_ms: int = DOUBLE_CLICK_MS, slop: int = DOUBLE_CLICK_SLOP):
        self.interval_ms = interval_ms
        self.slop = slop
        self.count = 0
        self._last_button: Optional[int] = None
        self._last_pos: Optional[Tuple[int, int]] = None
        self._last_time: Optional[int] = None

    def press(self, button: int, pos: Tuple[int, int], time_ms: int) -> int:
        repeated = (
            button == self._last_button
            and self._last_time is not None
            and time_ms - self._last_time <= self.interval_ms
            and abs(pos[0] - self._last_pos[0]) <= self.slop
            and abs(pos[1] - self._last_pos[1]) <= self.slop
        )
        self.count = self.count + 1 if repeated else 1
        self._last_button = button
        self._last_pos = pos
        self._last_time = time_ms
        return self.count


class Visualizer:
    """
    Renders the particle system state and forwards user input to the engine.
    """
    def __init__(self, width: int, height: int, frame_opacity: float = DEFAULT_FRAME_OPACITY):
        pygame.init()

        self.sim_width = width
        self.sim_height = height
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Particle Simulator")
        self.clock = pygame.time.Clock()

        # Drawn over the previous frame instead of a full clear, which
        # leaves fading trails behind moving particles.
        self.blur_surface = pygame.Surface((width, height), pygame.SRCALPHA)
        self.set_frame_opacity(frame_opacity)
        self.screen.fill(BACKGROUND_COLOR)

        self.clicks = ClickTracker()
        self.paused = False
        # Frames advanced with the N key; the main loop doesn't see them.
        self.manual_steps = 0

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    def set_frame_opacity(self, frame_opacity: float) -> None:
        self.frame_opacity = frame_opacity
        alpha = min(255, max(0, int(frame_opacity * 255)))
        self.blur_surface.fill((*BACKGROUND_COLOR, alpha))
        logging.info(f"Frame opacity set to {frame_opacity:.2f} (alpha {alpha}).")

    def _handle_events(self, engine: SimulationEngine) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    logging.info("ESC key pressed. Shutting down visualizer.")
                    return False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                    logging.info("Simulation paused." if self.paused else "Simulation resumed.")
                elif event.key == pygame.K_n:
                    if self.paused:
                        engine.step(self.sim_width, self.sim_height)
                        self.manual_steps += 1
                elif event.key == pygame.K_LEFTBRACKET:
                    self.set_frame_opacity(max(0.0, self.frame_opacity - FRAME_OPACITY_STEP))
                elif event.key == pygame.K_RIGHTBRACKET:
                    self.set_frame_opacity(min(1.0, self.frame_opacity + FRAME_OPACITY_STEP))
                elif event.key == pygame.K_r:
                    self.screen.fill(BACKGROUND_COLOR)
                    engine.initialize(self.sim_width, self.sim_height)
                elif event.key == pygame.K_c:
                    engine.set_collisions_enabled(not engine.config.collisions_enabled)

            elif event.type == pygame.MOUSEMOTION:
                pos = Vector2D(*event.pos)
                if any(event.buttons):
                    engine.on_pointer_drag(pos)
                else:
                    engine.on_pointer_move(pos)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in PYGAME_BUTTONS:
                self.clicks.press(event.button, event.pos, pygame.time.get_ticks())
                engine.on_pointer_down()

            elif event.type == pygame.MOUSEBUTTONUP and event.button in PYGAME_BUTTONS:
                engine.on_pointer_up()
                engine.on_multi_click(PYGAME_BUTTONS[event.button], self.clicks.count)

        return True

    def _draw_particles(self, engine: SimulationEngine) -> None:
        size = engine.config.particle_size
        colors = (engine.particles.colors * 255).astype(np.int32)

        for pos, color in zip(engine.particles.positions, colors):
            color = (int(color[0]), int(color[1]), int(color[2]))
            if size >= 1:
                pygame.draw.circle(self.screen, color, (pos[0], pos[1]), size)
            else:
                # Too small for a circle, use a single pixel.
                self.screen.set_at((int(pos[0]), int(pos[1])), color)

    def draw(self, engine: SimulationEngine) -> bool:
        """
        Handles events, then draws all particles.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        if not self._handle_events(engine):
            return False

        self.screen.blit(self.blur_surface, (0, 0))
        self._draw_particles(engine)
        pygame.display.flip()
        self.clock.tick(FPS)
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
