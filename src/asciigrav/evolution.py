"""
Time evolution engine for the ASCII N-body simulator.

Two drivers share the same per-tick physics (asciigrav.physics.integrate_tick):

run_live:
    Paced loop that draws a frame, prints the tick counter, then integrates.
    Runs at most ticks_per_second ticks per second, until a stop condition
    fires (or forever when none is given).

evolve_system:
    Headless loop for a fixed number of ticks with a progress bar. No
    rendering, no pacing.

Per tick, rendering always sees positions from before that tick's drift;
the force kick sees drifted positions from before that tick's velocity
updates.
"""

import sys
import threading
import time
import warnings
from typing import Callable, Optional, TextIO

from tqdm import tqdm

from asciigrav.config import SimulationParameters
from asciigrav.diagnostics import (
    centroid_offset,
    check_numerical_health,
    momentum_drift,
    total_momentum,
)
from asciigrav.physics import integrate_tick
from asciigrav.state import SimulationState
from asciigrav.terminal import Terminal
from asciigrav.visualization import render

StopCondition = Callable[[SimulationState], bool]

# Relative momentum drift per tick above which a warning is raised
MOMENTUM_DRIFT_TOLERANCE = 1e-6


class TickClock:
    """
    Paces ticks so that consecutive ticks are at least 1/ticks_per_second apart.

    Sleeps instead of spinning. A late tick is not compensated for; the
    next interval is measured from when the late tick actually fired.
    """

    def __init__(
        self,
        ticks_per_second: float,
        time_source: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep
    ):
        if ticks_per_second <= 0:
            raise ValueError(f"ticks_per_second must be positive, got {ticks_per_second}")
        self.interval = 1.0 / ticks_per_second
        self._time = time_source
        self._sleep = sleep
        self.last_tick = None

    def now(self) -> float:
        return self._time()

    def reset(self) -> None:
        """Start measuring the first interval from now."""
        self.last_tick = self._time()

    def wait(self) -> float:
        """
        Block until the next tick is due.

        Returns:
            float: Time at which the tick fires
        """
        now = self._time()
        if self.last_tick is not None:
            deadline = self.last_tick + self.interval
            while now < deadline:
                self._sleep(deadline - now)
                now = self._time()
        self.last_tick = now
        return now


class TickLimit:
    """Stop once the state has completed max_ticks ticks."""

    def __init__(self, max_ticks: int):
        self.max_ticks = max_ticks

    def __call__(self, state: SimulationState) -> bool:
        return state.tick_count >= self.max_ticks


class StopFlag:
    """Cancellation token; safe to set from another thread or a signal handler."""

    def __init__(self):
        self._event = threading.Event()

    def set(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()

    def __call__(self, state: SimulationState) -> bool:
        return self._event.is_set()


def any_of(*conditions: StopCondition) -> StopCondition:
    """Combine stop conditions; stops when any of them fires."""
    def stop(state: SimulationState) -> bool:
        return any(condition(state) for condition in conditions)
    return stop


def draw_frame(
    state: SimulationState,
    terminal: Terminal,
    out: TextIO,
    reserve_status_row: bool = False
) -> None:
    """
    Clear the display and write one frame plus the status line.

    The grid fills every terminal row and the tick counter follows it, so
    the screen scrolls by one line per frame. With reserve_status_row the
    grid gives up its bottom row to the counter instead.
    """
    terminal.clear_display()
    width, height = terminal.query_dimensions()

    grid_height = max(1, height - 1 if reserve_status_row else height)
    grid_width = max(1, width)

    out.write(render(grid_height, grid_width, state))
    out.write(f"\r{state.tick_count}")
    out.flush()


def run_live(
    state: SimulationState,
    params: SimulationParameters,
    terminal: Terminal,
    stop: Optional[StopCondition] = None,
    clock: Optional[TickClock] = None,
    out: Optional[TextIO] = None
) -> dict:
    """
    Run the paced render/integrate loop.

    Steps per tick:
    1. Wait until the tick is due
    2. Clear the display, query its size, draw the frame and tick counter
    3. Integrate one tick (drift, kick, recenter)
    4. Increment the tick counter

    Args:
        state: SimulationState (modified in place)
        params: SimulationParameters object
        terminal: Display capability (query_dimensions, clear_display)
        stop: Predicate checked before every tick; defaults to
            TickLimit(params.max_ticks), or no limit if that is None
        clock: Tick pacing (default: TickClock(params.ticks_per_second))
        out: Stream frames are written to (default: sys.stdout)

    Returns:
        Dictionary with run statistics:
        - ticks: Number of ticks run by this call
        - final_tick: state.tick_count at exit
        - elapsed: Wall-clock duration [s]
        - is_finite: Whether the final state is free of NaN/Inf
    """
    if out is None:
        out = sys.stdout
    if stop is None and params.max_ticks is not None:
        stop = TickLimit(params.max_ticks)
    if clock is None:
        clock = TickClock(params.ticks_per_second)

    start_tick = state.tick_count
    start_time = clock.now()
    clock.reset()

    reported_blowup = False

    while stop is None or not stop(state):
        clock.wait()

        draw_frame(state, terminal, out, reserve_status_row=params.reserve_status_row)

        integrate_tick(
            state,
            G=params.G,
            min_distance=params.min_distance,
            method=params.force_method
        )
        state.tick_count += 1

        if not reported_blowup:
            health = check_numerical_health(state)
            if not health['is_finite']:
                for message in health['warnings']:
                    warnings.warn(message)
                reported_blowup = True

    return {
        'ticks': state.tick_count - start_tick,
        'final_tick': state.tick_count,
        'elapsed': clock.now() - start_time,
        'is_finite': check_numerical_health(state)['is_finite']
    }


def evolve_system(
    state: SimulationState,
    params: SimulationParameters,
    n_steps: int,
    show_progress: bool = True
) -> dict:
    """
    Evolve the simulation forward for n_steps ticks without rendering.

    Args:
        state: SimulationState object (modified in place)
        params: SimulationParameters object
        n_steps: Number of ticks to evolve
        show_progress: Whether to show progress bar (tqdm)

    Returns:
        Dictionary with simulation statistics:
        - final_tick: Final tick count
        - max_momentum_drift: Largest relative momentum change of any
          tick (only tracked with check_momentum_conservation, else 0.0)
        - is_finite: Whether the final state is free of NaN/Inf
    """
    max_drift = 0.0

    if show_progress:
        pbar = tqdm(total=n_steps, desc="Evolving system", unit="ticks")

    for _ in range(n_steps):
        if params.check_momentum_conservation:
            p_before = total_momentum(state)

        integrate_tick(
            state,
            G=params.G,
            min_distance=params.min_distance,
            method=params.force_method
        )
        state.tick_count += 1

        if params.check_momentum_conservation:
            drift = momentum_drift(p_before, total_momentum(state))
            if drift > MOMENTUM_DRIFT_TOLERANCE:
                warnings.warn(
                    f"Momentum conservation violated by {drift:.2e} (relative) "
                    f"at tick {state.tick_count}"
                )
            max_drift = max(max_drift, drift)

        if show_progress:
            pbar.update(1)

    if show_progress:
        pbar.close()

    return {
        'final_tick': state.tick_count,
        'max_momentum_drift': max_drift,
        'is_finite': check_numerical_health(state)['is_finite']
    }


def run_simulation(
    params: SimulationParameters,
    n_steps: int,
    seed: Optional[int] = None,
    show_progress: bool = True
) -> tuple:
    """
    Run a headless simulation from initialization to completion.

    Args:
        params: SimulationParameters object
        n_steps: Number of ticks
        seed: Random seed (falls back to params.seed)
        show_progress: Whether to show progress bar

    Returns:
        (state, stats) tuple:
        - state: Final SimulationState object
        - stats: Dictionary with simulation statistics
    """
    from asciigrav.initialization import initialize_simulation

    print("Initializing simulation...")
    state = initialize_simulation(params, seed=seed)

    print(f"Running simulation: {n_steps} ticks, {state.n_bodies} bodies, "
          f"force method '{params.force_method}'")

    stats = evolve_system(state, params, n_steps, show_progress=show_progress)

    print(f"\nSimulation complete!")
    print(f"  Final tick: {stats['final_tick']}")
    print(f"  Centroid offset: {centroid_offset(state):.3e}")
    if params.check_momentum_conservation:
        print(f"  Max momentum drift: {stats['max_momentum_drift']:.3e}")

    return state, stats
