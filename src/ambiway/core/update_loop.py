"""Fixed-cadence loop gathering monitor outputs into device updates."""

import logging
import threading
import time
from collections.abc import Sequence
from typing import Optional

from ambiway.controller import LightingClient
from ambiway.core.sequencer import sequence
from ambiway.core.worker import MonitorWorker
from ambiway.exceptions import ControllerError
from ambiway.models import DeviceUpdate, LedSequence, black_sequence

logger = logging.getLogger(__name__)

# Log a status line every this many ticks (DEBUG level)
STATUS_EVERY_TICKS = 100


class UpdateLoop:
    """
    Sends one device update per tick built from every worker's latest output.

    The loop never waits on a worker: each tick reads the last published
    sequence of every monitor (black of the right length if a monitor has
    not produced one yet), so a stalled monitor only freezes its own zone.
    Controller errors are logged and the next tick proceeds.
    """

    def __init__(
        self,
        workers: Sequence[MonitorWorker],
        client: LightingClient,
        device_id: int,
        zone_ids: Sequence[int],
        interval: float,
        stop_event: Optional[threading.Event] = None,
    ):
        """
        Initialize the loop.

        Args:
            workers: Monitor workers in configured order
            client: Lighting controller client
            device_id: Controller device receiving the updates
            zone_ids: Zone per worker, same order as workers
            interval: Seconds between ticks
            stop_event: Shared shutdown signal (a private one if None)
        """
        if len(workers) != len(zone_ids):
            raise ValueError(f"{len(workers)} workers for {len(zone_ids)} zones")

        self.workers = list(workers)
        self.client = client
        self.device_id = device_id
        self.zone_ids = list(zone_ids)
        self.interval = interval
        self._stop_event = stop_event or threading.Event()

        self.ticks = 0
        self.failed_updates = 0
        self._consecutive_failures = 0

    def stop(self) -> None:
        """Ask the loop to exit after the current tick."""
        self._stop_event.set()

    def gather(self) -> list[LedSequence]:
        """Latest sequence of every worker, in worker order."""
        sequences = []
        for worker in self.workers:
            latest = worker.latest()
            if latest is None:
                latest = black_sequence(worker.led_count)
            sequences.append(latest)
        return sequences

    def tick(self) -> Optional[DeviceUpdate]:
        """
        Build and send one device update.

        Returns:
            The update that was sent, or None if the controller rejected it
        """
        update = sequence(self.gather(), self.zone_ids, self.device_id)
        self.ticks += 1

        try:
            self.client.update(update)
        except ControllerError as e:
            self.failed_updates += 1
            self._consecutive_failures += 1
            # Avoid flooding the log at 10 Hz while the controller is away
            if self._consecutive_failures == 1 or self._consecutive_failures % 50 == 0:
                logger.error(
                    f"Device update failed ({self._consecutive_failures} in a row): "
                    f"{e.technical_message}"
                )
            return None

        if self._consecutive_failures:
            logger.info(f"Device updates recovered after {self._consecutive_failures} failures")
            self._consecutive_failures = 0

        if self.ticks % STATUS_EVERY_TICKS == 0:
            states = ", ".join(f"{w.index}:{w.state.value}" for w in self.workers)
            logger.debug(f"Tick {self.ticks}: workers [{states}], {self.failed_updates} failed updates")
        return update

    def run(self) -> None:
        """Tick at the configured cadence until stopped."""
        logger.info(
            f"Update loop running at {1.0 / self.interval:.1f} Hz for {len(self.workers)} monitor(s)"
        )
        next_tick = time.monotonic()

        while not self._stop_event.is_set():
            self.tick()

            next_tick += self.interval
            delay = next_tick - time.monotonic()
            if delay < 0:
                # Running behind; don't try to catch up with a burst of ticks
                next_tick = time.monotonic()
                delay = 0
            self._stop_event.wait(delay)

        logger.info(f"Update loop stopped after {self.ticks} ticks")
