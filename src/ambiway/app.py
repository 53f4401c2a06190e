"""
Application orchestrator.

Builds the whole pipeline from a validated AppConfig and owns its lifecycle:

    AmbiwayApp
    ├── capture sources   one per monitor, opened at startup
    ├── regions           computed once per monitor from the frame size
    ├── workers           one thread per monitor
    ├── update loop       runs on the calling thread
    └── lighting client   OpenRGB (or a logging client for dry runs)

Everything that can be a configuration problem (capture devices, frame
sizes, layout geometry, controller zones and their LED counts) is checked
in `initialize()`, before the first device update is sent.
"""

import logging
import threading
from collections.abc import Callable
from typing import Optional

from ambiway.capture import CaptureSource, OpenCVCaptureSource
from ambiway.controller import LightingClient, LoggingLightingClient, OpenRGBLightingClient
from ambiway.core import FrameSampler, MonitorWorker, UpdateLoop, compute_regions
from ambiway.exceptions import (
    AmbiwayError,
    CaptureFailure,
    ConfigurationError,
    ErrorContext,
    collect_errors,
)
from ambiway.models import AppConfig, SampleRegion

logger = logging.getLogger(__name__)

SourceFactory = Callable[[int, Optional[tuple[int, int]]], CaptureSource]


def _default_source_factory(camera_id: int, frame_size: Optional[tuple[int, int]]) -> CaptureSource:
    return OpenCVCaptureSource(camera_id, frame_size=frame_size)


class AmbiwayApp:
    """Top-level orchestrator for one ambient lighting session."""

    def __init__(
        self,
        config: AppConfig,
        client: Optional[LightingClient] = None,
        source_factory: Optional[SourceFactory] = None,
        dry_run: bool = False,
    ):
        """
        Initialize the application (nothing is opened yet).

        Args:
            config: Validated application configuration
            client: Lighting client; OpenRGB (or logging for dry runs) if None
            source_factory: Builds a capture source from (camera_id, frame_size)
            dry_run: Log updates instead of sending them
        """
        self.config = config
        self.settings = config.settings
        if client is None:
            client = LoggingLightingClient() if dry_run else OpenRGBLightingClient(self.settings.controller)
        self.client = client
        self._source_factory = source_factory or _default_source_factory

        self.stop_event = threading.Event()
        self.sources: list[CaptureSource] = []
        self.regions: list[tuple[SampleRegion, ...]] = []
        self.workers: list[MonitorWorker] = []
        self.loop: Optional[UpdateLoop] = None

        self._initialized = False
        self._client_connected = False
        self._shut_down = False

    # =================================================================
    # Lifecycle
    # =================================================================

    def initialize(self) -> None:
        """
        Open devices, compute layouts and connect to the controller.

        Raises:
            CaptureFailure: If any capture device cannot be opened
            LayoutError: If a monitor's geometry does not fit its frame
            ConfigurationError: If a controller zone's LED count differs
                from its monitor's LED count
            ControllerConnectionError: If the controller is unreachable
        """
        if self._initialized:
            return

        try:
            self._open_sources()
            frame_sizes = [self._resolve_frame_size(i) for i in range(len(self.sources))]

            with ErrorContext("compute sampling regions", logger_instance=logger):
                self.regions = [
                    compute_regions(
                        layout,
                        width,
                        height,
                        self.settings.region_size,
                        self.settings.edge_order,
                        monitor_index=i,
                    )
                    for i, (layout, (width, height)) in enumerate(
                        zip(self.config.monitor_layouts(), frame_sizes)
                    )
                ]

            self.client.connect()
            self._client_connected = True
            self._check_zone_sizes()

            interval = self.settings.tick_interval
            self.workers = [
                MonitorWorker(
                    index=i,
                    source=source,
                    sampler=FrameSampler(regions, size, camera_id=source.camera_id),
                    brightness=self.settings.brightness,
                    smooth=self.settings.smooth,
                    interval=interval,
                    capture_timeout=self.settings.capture_timeout,
                    failure_policy=self.settings.failure_policy,
                    stop_event=self.stop_event,
                )
                for i, (source, regions, size) in enumerate(
                    zip(self.sources, self.regions, frame_sizes)
                )
            ]
            self.loop = UpdateLoop(
                self.workers,
                self.client,
                device_id=self.settings.device_id,
                zone_ids=self.settings.zone_ids,
                interval=interval,
                stop_event=self.stop_event,
            )
        except AmbiwayError:
            self._release()
            raise

        self._initialized = True
        logger.info(
            f"Initialized {len(self.workers)} monitor(s): "
            + ", ".join(f"camera {w.camera_id} -> {w.led_count} LEDs" for w in self.workers)
        )

    def run(self) -> None:
        """Initialize if needed, start workers and block in the update loop."""
        self.initialize()
        assert self.loop is not None

        for worker in self.workers:
            worker.start()
        try:
            self.loop.run()
        finally:
            self.shutdown()

    def request_stop(self) -> None:
        """Signal every worker and the loop to exit (safe from signal handlers)."""
        self.stop_event.set()

    def shutdown(self) -> None:
        """Stop the loop and workers, release devices, disconnect the client."""
        if self._shut_down:
            return
        self._shut_down = True

        logger.info("Shutting down")
        self.stop_event.set()
        for worker in self.workers:
            worker.stop()
        self._release()

    # =================================================================
    # Startup helpers
    # =================================================================

    def _open_sources(self) -> None:
        frame_sizes = self.settings.frame_sizes
        collector = collect_errors("open capture devices")

        for i, camera_id in enumerate(self.settings.camera_ids):
            requested = tuple(frame_sizes[i]) if frame_sizes else None
            source = self._source_factory(camera_id, requested)
            with collector.try_operation(f"open camera {camera_id}"):
                source.open()
                self.sources.append(source)

        if collector.has_errors:
            raise CaptureFailure(None, collector.get_summary())

    def _resolve_frame_size(self, index: int) -> tuple[int, int]:
        """
        Configured size, else the size the device reports, else a probe frame.

        Raises:
            ConfigurationError: If the device reports a size other than the
                configured one
        """
        source = self.sources[index]
        if self.settings.frame_sizes:
            width, height = self.settings.frame_sizes[index]
            configured = (int(width), int(height))
            if source.frame_size and tuple(source.frame_size) != configured:
                actual_w, actual_h = source.frame_size
                raise ConfigurationError(
                    user_message=(
                        f"Camera {source.camera_id} delivers {actual_w}x{actual_h} "
                        f"but frame_size is set to {configured[0]}x{configured[1]}"
                    ),
                    technical_message=(
                        f"Frame size mismatch for monitor {index} (camera {source.camera_id}): "
                        f"device {actual_w}x{actual_h}, configured {configured[0]}x{configured[1]}"
                    ),
                    recovery_hint=(
                        "Set frame_size to a resolution the device supports, or remove it "
                        "to use the device's own size. Run 'ambiway cams list' to see sizes"
                    ),
                )
            return configured

        if source.frame_size:
            return source.frame_size

        frame = source.next_frame(self.settings.capture_timeout * 5)
        height, width = frame.shape[:2]
        logger.info(f"Camera {source.camera_id}: probed frame size {width}x{height}")
        return int(width), int(height)

    def _check_zone_sizes(self) -> None:
        """Every zone must hold exactly as many LEDs as its monitor has regions."""
        problems = []
        for i, (zone_id, regions) in enumerate(zip(self.settings.zone_ids, self.regions)):
            zone_leds = self.client.zone_led_count(self.settings.device_id, zone_id)
            if zone_leds is not None and zone_leds != len(regions):
                problems.append(
                    f"monitor {i} has {len(regions)} LEDs but zone {zone_id} has {zone_leds}"
                )
        if problems:
            raise ConfigurationError(
                user_message="LED counts do not match the controller zones: " + "; ".join(problems),
                recovery_hint=(
                    "Adjust the [led] counts or resize the zones in OpenRGB. "
                    "Run 'ambiway controller list' to see zone sizes"
                ),
            )

    def _release(self) -> None:
        for source in self.sources:
            try:
                source.close()
            except Exception as e:
                logger.error(f"Error releasing camera {source.camera_id}: {e}")

        if self._client_connected:
            try:
                self.client.disconnect()
            except Exception as e:
                logger.error(f"Error disconnecting lighting client: {e}")
            self._client_connected = False

    def __enter__(self):
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
