"""Pairing each monitor's ordered colors with its controller zone."""

from collections.abc import Sequence

from ambiway.models import DeviceUpdate, LedSequence, ZoneUpdate


def sequence(
    per_monitor_sequences: Sequence[LedSequence],
    zone_ids: Sequence[int],
    device_id: int,
) -> DeviceUpdate:
    """
    Build the device update for one tick.

    Each monitor's sequence is attached verbatim to the zone at the same
    position in `zone_ids`; zone order follows monitor order. Inputs are
    not modified.

    Raises:
        ValueError: If the number of sequences and zone ids differ
    """
    if len(per_monitor_sequences) != len(zone_ids):
        raise ValueError(
            f"{len(per_monitor_sequences)} monitor sequences for {len(zone_ids)} zones"
        )

    zones = tuple(
        ZoneUpdate(zone_id=zone_id, colors=tuple(colors))
        for colors, zone_id in zip(per_monitor_sequences, zone_ids)
    )
    return DeviceUpdate(device_id=device_id, zones=zones)
