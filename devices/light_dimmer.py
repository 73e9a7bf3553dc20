"""Dimmable light (DPT 1.001 for switch, DPT 5.001 for brightness).

Group addresses:
  switch_cmd        — receives GroupWrite ON/OFF
  switch_status     — feedback with on/off state
  brightness_cmd    — receives GroupWrite 0–100%
  brightness_status — feedback with brightness level
  lock_cmd          — receives GroupWrite lock ON/OFF (echoed on itself)

Note: Real KNX dimmers send both switch and brightness status when state
changes, so every accepted command answers on both feedback addresses.
"""

import logging
from typing import Optional

from dpt.percent import Percent
from dpt.value import KnxValue

from .addresses import dimmer_addresses
from .base import Feedback, LockableDevice

logger = logging.getLogger("knxvalue.devices")


class LightDimmer(LockableDevice):
    GA_DPT_MAP = {
        "switch_cmd": "1.001",
        "switch_status": "1.001",
        "brightness_cmd": "5.001",
        "brightness_status": "5.001",
        "lock_cmd": "1.003",
        "lock_status": "1.003",
    }

    LOCKED_COMMANDS = frozenset({"switch_cmd", "brightness_cmd"})

    def __init__(self, device_id: str, group_addresses: dict, initial_state: Optional[dict] = None):
        super().__init__(device_id, group_addresses, initial_state)
        self.state.setdefault("on", False)
        self.state.setdefault("brightness", 0.0)

    @classmethod
    def for_sub_group(cls, device_id: str, sub_group, initial_state: Optional[dict] = None):
        return cls(device_id, dimmer_addresses(sub_group), initial_state)

    @property
    def brightness(self) -> float:
        return float(self.state["brightness"])

    def set_brightness(self, percentage: float) -> list[Feedback]:
        """Write a brightness command as a controller would."""
        if percentage < 0 or percentage > 100:
            raise ValueError(f"Brightness must be between 0 and 100, got {percentage}")
        return self.on_group_write(self.group_addresses["brightness_cmd"], KnxValue(float(percentage)))

    def _status_feedback(self) -> list[Feedback]:
        level = Percent.from_percentage(self.brightness)
        return self._feedback("switch_status", self.state["on"]) + self._feedback(
            "brightness_status", level
        )

    def _handle_write(self, name: str, value: KnxValue) -> list[Feedback]:
        if name == "brightness_cmd":
            brightness = value.as_percentage_value()
            self.state["brightness"] = brightness
            # Setting brightness > 0 implies ON
            self.state["on"] = brightness > 0
            logger.info("%s ← brightness %.1f%%", self.device_id, brightness)
            return self._status_feedback()

        if name == "switch_cmd":
            on = value.as_boolean()
            self.state["on"] = on
            # When turning on with brightness 0, default to 100%
            if on and self.brightness == 0:
                self.state["brightness"] = 100.0
            logger.info("%s ← switch %s", self.device_id, "ON" if on else "OFF")
            return self._status_feedback()

        return []

    def _handle_read(self, name: str) -> Optional[KnxValue]:
        if name in ("brightness_cmd", "brightness_status"):
            return KnxValue(Percent.from_percentage(self.brightness))
        if name in ("switch_cmd", "switch_status"):
            return KnxValue(bool(self.state["on"]))
        return super()._handle_read(name)
