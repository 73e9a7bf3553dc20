"""Threshold simulator: stands in for the weather station's threshold outputs.

It is a sending device. Its setters return the GroupWrite telegrams it puts
on the bus as (address, KnxValue) pairs; devices.base.dispatch delivers them
to the shutters listening on the shared threshold addresses. Writes from
elsewhere on those addresses only update its view of the state.

Group addresses (see devices.addresses.threshold_addresses):
  brightness_threshold_1        — 0/2/3, DPT 1.002
  brightness_threshold_2        — 0/2/4, DPT 1.002
  outdoor_temperature_threshold — 0/2/8, DPT 1.002
  monitoring_block              — 0/2/12, DPT 1.003, blocks the real brightness monitor
"""

import logging
from typing import Optional

from dpt.value import KnxValue

from .addresses import threshold_addresses
from .base import BaseDevice, Feedback

logger = logging.getLogger("knxvalue.devices")

THRESHOLDS = ("brightness_threshold_1", "brightness_threshold_2", "outdoor_temperature_threshold")


class ThresholdSimulator(BaseDevice):
    GA_DPT_MAP = {
        "brightness_threshold_1": "1.002",
        "brightness_threshold_2": "1.002",
        "outdoor_temperature_threshold": "1.002",
        "monitoring_block": "1.003",
    }

    def __init__(
        self,
        device_id: str,
        group_addresses: Optional[dict] = None,
        initial_state: Optional[dict] = None,
    ):
        super().__init__(device_id, group_addresses or threshold_addresses(), initial_state)
        for name in (*THRESHOLDS, "monitoring_block"):
            self.state.setdefault(name, False)

    @property
    def brightness_threshold_1(self) -> bool:
        return bool(self.state["brightness_threshold_1"])

    @property
    def brightness_threshold_2(self) -> bool:
        return bool(self.state["brightness_threshold_2"])

    @property
    def outdoor_temperature_threshold(self) -> bool:
        return bool(self.state["outdoor_temperature_threshold"])

    @property
    def is_monitoring_blocked(self) -> bool:
        return bool(self.state["monitoring_block"])

    # -- sending ------------------------------------------------------------

    def _send(self, slot: str, active: bool) -> list[Feedback]:
        self.state[slot] = bool(active)
        logger.info("%s → %s %s", self.device_id, slot, "ON" if active else "OFF")
        return self._feedback(slot, bool(active))

    def set_brightness_threshold_1(self, exceeded: bool) -> list[Feedback]:
        return self._send("brightness_threshold_1", exceeded)

    def set_brightness_threshold_2(self, exceeded: bool) -> list[Feedback]:
        return self._send("brightness_threshold_2", exceeded)

    def set_outdoor_temperature_threshold(self, exceeded: bool) -> list[Feedback]:
        return self._send("outdoor_temperature_threshold", exceeded)

    def set_monitoring_block(self, blocked: bool) -> list[Feedback]:
        return self._send("monitoring_block", blocked)

    def simulate(self, brightness_1=False, brightness_2=False, temperature=False) -> list[Feedback]:
        """Send all three thresholds, brightness first."""
        return (
            self.set_brightness_threshold_1(brightness_1)
            + self.set_brightness_threshold_2(brightness_2)
            + self.set_outdoor_temperature_threshold(temperature)
        )

    def simulate_normal_conditions(self) -> list[Feedback]:
        return self.simulate()

    def simulate_moderate_brightness(self) -> list[Feedback]:
        return self.simulate(brightness_1=True)

    def simulate_high_brightness(self) -> list[Feedback]:
        return self.simulate(brightness_1=True, brightness_2=True)

    def simulate_maximum_sun_protection(self) -> list[Feedback]:
        return self.simulate(brightness_1=True, brightness_2=True, temperature=True)

    def enter_testing_isolation(self, brightness_1=False, brightness_2=False, temperature=False):
        """Block the real brightness monitor, then take over the thresholds."""
        return self.set_monitoring_block(True) + self.simulate(brightness_1, brightness_2, temperature)

    def exit_testing_isolation(self) -> list[Feedback]:
        return self.simulate_normal_conditions() + self.set_monitoring_block(False)

    def restore_saved_state(self) -> list[Feedback]:
        """Restore the saved states and send them again. Empty if nothing was saved."""
        if not self.restore_state():
            return []
        return self.simulate(*(self.state[name] for name in THRESHOLDS)) + self.set_monitoring_block(
            self.state["monitoring_block"]
        )

    # -- bus ----------------------------------------------------------------

    def _handle_write(self, name: str, value: KnxValue) -> list[Feedback]:
        self.state[name] = value.as_boolean()
        logger.debug("%s ← %s %s", self.device_id, name, self.state[name])
        return []

    def _handle_read(self, name: str) -> Optional[KnxValue]:
        return KnxValue(bool(self.state[name]))
