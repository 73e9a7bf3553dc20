"""Shutter with position, movement, lock and threshold-based sun protection.

Group addresses (see devices.addresses.shutter_addresses):
  movement_cmd / movement_status   — DPT 1.008, True = down, False = up
  stop_cmd / activity_status       — DPT 1.017 stop, DPT 1.010 moving
  position_cmd / position_status   — DPT 5.001, 0% = open, 100% = closed
  lock_cmd / lock_status           — DPT 1.003
  sun_block_cmd / sun_block_status — DPT 1.003, blocks automatic sun protection
  sun_protection_status            — DPT 1.002, sun protection currently active
  brightness_threshold_1/2         — weather station brightness thresholds
  outdoor_temperature_threshold    — weather station temperature threshold

Sun protection engages when a brightness threshold is active and the outdoor
temperature threshold (if the shutter has one configured) is active, unless
the shutter is locked or its sun protection is blocked. Engaging drives the
shutter to its sun protection position; releasing only clears the status.

Movement is simulated as instantaneous.
"""

import logging
from typing import Optional

from dpt.percent import Percent
from dpt.value import KnxValue

from .addresses import shutter_addresses
from .base import Feedback, LockableDevice

logger = logging.getLogger("knxvalue.devices")

_THRESHOLDS = ("brightness_threshold_1", "brightness_threshold_2", "outdoor_temperature_threshold")


class Blind(LockableDevice):
    GA_DPT_MAP = {
        "movement_cmd": "1.008",
        "movement_status": "1.008",
        "stop_cmd": "1.017",
        "activity_status": "1.010",
        "position_cmd": "5.001",
        "position_status": "5.001",
        "lock_cmd": "1.003",
        "lock_status": "1.003",
        "sun_block_cmd": "1.003",
        "sun_block_status": "1.003",
        "sun_protection_status": "1.002",
        "brightness_threshold_1": "1.002",
        "brightness_threshold_2": "1.002",
        "outdoor_temperature_threshold": "1.002",
    }

    LOCKED_COMMANDS = frozenset({"movement_cmd", "position_cmd"})

    def __init__(
        self,
        device_id: str,
        group_addresses: dict,
        initial_state: Optional[dict] = None,
        sun_protection_position: float = 100.0,
    ):
        super().__init__(device_id, group_addresses, initial_state)
        if sun_protection_position < 0 or sun_protection_position > 100:
            raise ValueError(
                f"Sun protection position must be between 0 and 100, got {sun_protection_position}"
            )
        self.sun_protection_position = float(sun_protection_position)
        self.state.setdefault("position", 0.0)
        self.state.setdefault("moving", False)
        self.state.setdefault("sun_block", False)
        self.state.setdefault("sun_protection", False)
        for name in _THRESHOLDS:
            self.state.setdefault(name, False)

    @classmethod
    def for_sub_group(cls, device_id: str, sub_group, initial_state: Optional[dict] = None, **kwargs):
        return cls(device_id, shutter_addresses(sub_group), initial_state, **kwargs)

    @property
    def position(self) -> float:
        return float(self.state["position"])

    @property
    def is_sun_protection_active(self) -> bool:
        return bool(self.state["sun_protection"])

    @property
    def is_sun_protection_blocked(self) -> bool:
        return bool(self.state["sun_block"])

    def set_position(self, percentage: float) -> list[Feedback]:
        """Write a position command as a controller would."""
        if percentage < 0 or percentage > 100:
            raise ValueError(f"Position must be between 0 and 100, got {percentage}")
        return self.on_group_write(self.group_addresses["position_cmd"], KnxValue(float(percentage)))

    def _position_feedback(self) -> list[Feedback]:
        return self._feedback("position_status", Percent.from_percentage(self.position))

    def _move_to(self, position: float) -> None:
        self.state["position"] = position
        self.state["moving"] = False

    def _handle_write(self, name: str, value: KnxValue) -> list[Feedback]:
        if name == "position_cmd":
            self._move_to(value.as_percentage_value())
            logger.info("%s ← position %.1f%%", self.device_id, self.position)
            return self._position_feedback()

        if name == "movement_cmd":
            down = value.as_boolean()
            self._move_to(100.0 if down else 0.0)
            logger.info("%s ← move %s", self.device_id, "DOWN" if down else "UP")
            return self._feedback("movement_status", down) + self._position_feedback()

        if name == "stop_cmd":
            self.state["moving"] = False
            logger.info("%s ← stop at %.1f%%", self.device_id, self.position)
            return self._feedback("activity_status", False) + self._position_feedback()

        if name == "sun_block_cmd":
            blocked = value.as_boolean()
            self.state["sun_block"] = blocked
            logger.info("%s ← sun protection block %s", self.device_id, "ON" if blocked else "OFF")
            return self._evaluate_sun_protection()

        if name in _THRESHOLDS:
            self.state[name] = value.as_boolean()
            logger.debug("%s ← %s %s", self.device_id, name, self.state[name])
            return self._evaluate_sun_protection()

        return []

    def _set_lock(self, locked: bool) -> list[Feedback]:
        return super()._set_lock(locked) + self._evaluate_sun_protection()

    def _evaluate_sun_protection(self) -> list[Feedback]:
        bright = self.state["brightness_threshold_1"] or self.state["brightness_threshold_2"]
        # Without a temperature threshold address, brightness alone decides
        warm = (
            "outdoor_temperature_threshold" not in self.group_addresses
            or self.state["outdoor_temperature_threshold"]
        )
        wanted = bool(
            bright
            and warm
            and not self.is_sun_protection_blocked
            and not self.is_locked
        )
        if wanted == self.is_sun_protection_active:
            return []

        self.state["sun_protection"] = wanted
        logger.info("%s sun protection %s", self.device_id, "active" if wanted else "inactive")
        feedback = self._feedback("sun_protection_status", wanted)
        if wanted:
            self._move_to(self.sun_protection_position)
            feedback += self._position_feedback()
        return feedback

    def _handle_read(self, name: str) -> Optional[KnxValue]:
        if name in ("position_cmd", "position_status"):
            return KnxValue(Percent.from_percentage(self.position))
        if name == "activity_status":
            return KnxValue(bool(self.state["moving"]))
        if name in ("sun_block_cmd", "sun_block_status"):
            return KnxValue(self.is_sun_protection_blocked)
        if name == "sun_protection_status":
            return KnxValue(self.is_sun_protection_active)
        if name in _THRESHOLDS:
            return KnxValue(bool(self.state[name]))
        if name in ("movement_cmd", "movement_status"):
            return KnxValue(self.position >= 100.0)
        return super()._handle_read(name)
