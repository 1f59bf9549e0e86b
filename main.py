# main.py
"""
Main entry point for the particle simulator.

This script orchestrates the entire simulation lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Sets up the simulation engine and, unless running headless, the window.
4. Runs the main loop, one engine step per frame.
5. Handles clean shutdown.
"""
import logging
import sys
from utils import config_section, setup_logging, load_config
import numpy as np
import cProfile
import pstats
import io

from constants import DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT, DEFAULT_FRAME_OPACITY


def main(config_path: str = 'config.json'):
    """
    The main function to run the simulation.

    Returns:
        Optional[int]: The number of frames the loop stepped, or None if the
        configuration could not be loaded.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except Exception as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return None

    setup_logging(config)

    logging.info("--- Particle Simulator Starting ---")

    from configuration import Configuration, InvalidConfigurationError
    from simulation import SimulationEngine

    # --- Component Initialization ---
    try:
        run_params = config_section(config, 'run_control')
        vis_params = config_section(config, 'visualization')
        sim_config = Configuration.from_params(
            config_section(config, 'simulation_parameters')
        )
    except InvalidConfigurationError:
        # Already logged by the parser.
        logging.info("--- Particle Simulator Shutting Down ---")
        return None
    engine = SimulationEngine(sim_config)

    width = vis_params.get('width', DEFAULT_WINDOW_WIDTH)
    height = vis_params.get('height', DEFAULT_WINDOW_HEIGHT)

    visualizer = None
    if vis_params.get('enabled', True):
        # Only import Pygame when a window is actually wanted.
        from visualization import Visualizer
        visualizer = Visualizer(
            width, height,
            frame_opacity=vis_params.get('frame_opacity', DEFAULT_FRAME_OPACITY)
        )
        width, height = visualizer.sim_width, visualizer.sim_height
    else:
        logging.info(f"Running headless on a {width}x{height} canvas.")

    engine.initialize(width, height)

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    log_throttle = run_params.get('log_throttle_steps', 100)
    # 0 runs until the window is closed.
    max_steps = run_params.get('max_steps', 0)
    if visualizer is None and max_steps <= 0:
        max_steps = 1000
        logging.warning(f"Headless runs need a step limit. Using max_steps={max_steps}.")

    running = True
    step_num = 0

    if profiler:
        profiler.enable()
    while running:
        paused = visualizer is not None and visualizer.paused
        if not paused:
            engine.step(width, height)
            step_num += 1

        # The visualizer's draw method controls the loop by checking for
        # the QUIT event. It returns False if the user quits.
        if visualizer is not None and not visualizer.draw(engine):
            running = False

        # Hot loops must throttle logs
        if not paused and step_num % log_throttle == 0:
            logging.info(f"Simulation step {step_num}")

            if len(engine.particles):
                avg_velocity = np.mean(np.linalg.norm(engine.particles.velocities, axis=1))
            else:
                avg_velocity = 0.0
            logging.debug(
                f"Step {step_num} | Average Velocity: {avg_velocity:.4f} | "
                f"Collisions: {engine.last_collision_count} | "
                f"Shape: {engine.shape_mode.value}"
            )

        if max_steps and step_num >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping simulation.")
            running = False

    if visualizer is not None:
        visualizer.close()
    logging.info("Simulation loop finished.")

    if profiler:
        profiler.disable()
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Particle Simulator Shutting Down ---")
    return step_num


if __name__ == "__main__":
    main(*sys.argv[1:2])
