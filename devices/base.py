"""Base classes for simulated KNX devices.

Each device has:
  - A device id
  - Named group addresses (control and feedback slots, e.g. "switch_cmd")
  - Internal state that updates on GroupWrite and is reported on GroupRead

Payloads travel as KnxValue. A write returns the feedback the actuator
would send: a list of (feedback address, KnxValue) pairs, empty when
nothing changes.
"""

import logging
from typing import Optional

from dpt.group_address import parse_group_address
from dpt.value import KnxValue

logger = logging.getLogger("knxvalue.devices")

Feedback = tuple[str, KnxValue]


class BaseDevice:
    """Base class for all simulated KNX devices."""

    # Maps ga_name → DPT ID string (e.g., "switch_cmd" → "1.001")
    GA_DPT_MAP: dict[str, str] = {}

    def __init__(self, device_id: str, group_addresses: dict, initial_state: Optional[dict] = None):
        self.device_id = device_id
        # name → canonical "main/middle/sub"
        self.group_addresses = {
            name: str(parse_group_address(ga)) for name, ga in group_addresses.items() if ga
        }
        self.state = dict(initial_state or {})
        self._saved_state: Optional[dict] = None

        # Reverse lookup: GA → ga_name. Control slots are listed before their
        # feedback slots, so a shared address resolves to the control name.
        self._ga_to_name: dict[str, str] = {}
        for name, ga in self.group_addresses.items():
            self._ga_to_name.setdefault(ga, name)

    def handles_ga(self, ga) -> bool:
        """Check if this device handles the given group address."""
        return str(parse_group_address(ga)) in self._ga_to_name

    def get_ga_name(self, ga) -> Optional[str]:
        """Get the semantic name of a GA (e.g., 'switch_cmd')."""
        return self._ga_to_name.get(str(parse_group_address(ga)))

    def get_dpt_for_ga(self, ga) -> Optional[str]:
        """Get the DPT ID for a group address, or None if unmapped."""
        ga_name = self.get_ga_name(ga)
        if ga_name:
            return self.GA_DPT_MAP.get(ga_name)
        return None

    def on_group_write(self, ga, value: KnxValue) -> list[Feedback]:
        """Handle a GroupWrite and return the feedback telegrams."""
        name = self.get_ga_name(ga)
        if name is None:
            return []
        return self._handle_write(name, value)

    def on_group_read(self, ga) -> Optional[KnxValue]:
        """Handle a GroupRead. Returns the current value for that address."""
        name = self.get_ga_name(ga)
        if name is None:
            return None
        return self._handle_read(name)

    def _handle_write(self, name: str, value: KnxValue) -> list[Feedback]:
        raise NotImplementedError

    def _handle_read(self, name: str) -> Optional[KnxValue]:
        raise NotImplementedError

    def _feedback(self, slot: str, value) -> list[Feedback]:
        """Feedback on ``slot`` if the device has that address configured."""
        ga = self.group_addresses.get(slot)
        if ga is None:
            return []
        return [(ga, value if isinstance(value, KnxValue) else KnxValue(value))]

    def save_state(self) -> None:
        self._saved_state = dict(self.state)
        logger.info("%s state saved: %s", self.device_id, self._saved_state)

    def restore_state(self) -> bool:
        """Restore the last saved state. Returns False if nothing was saved."""
        if self._saved_state is None:
            return False
        self.state = dict(self._saved_state)
        logger.info("%s state restored: %s", self.device_id, self.state)
        return True


class LockableDevice(BaseDevice):
    """Device with a lock object that blocks its commands while active."""

    # Command slots ignored while the device is locked
    LOCKED_COMMANDS: frozenset = frozenset()

    def __init__(self, device_id: str, group_addresses: dict, initial_state: Optional[dict] = None):
        super().__init__(device_id, group_addresses, initial_state)
        self.state.setdefault("locked", False)

    @property
    def is_locked(self) -> bool:
        return bool(self.state["locked"])

    def on_group_write(self, ga, value: KnxValue) -> list[Feedback]:
        name = self.get_ga_name(ga)
        if name is None:
            return []

        if name == "lock_cmd":
            return self._set_lock(value.as_boolean())

        if self.is_locked and name in self.LOCKED_COMMANDS:
            logger.warning("%s is locked, ignoring %s", self.device_id, name)
            return []

        return self._handle_write(name, value)

    def _set_lock(self, locked: bool) -> list[Feedback]:
        self.state["locked"] = locked
        logger.info("%s ← lock %s", self.device_id, "ON" if locked else "OFF")

        # Lock echoed on its own control address produces no extra telegram
        status = self.group_addresses.get("lock_status")
        if status is None or status == self.group_addresses.get("lock_cmd"):
            return []
        return self._feedback("lock_status", locked)

    def _handle_read(self, name: str) -> Optional[KnxValue]:
        if name in ("lock_cmd", "lock_status"):
            return KnxValue(self.is_locked)
        return None


def dispatch(devices, telegrams) -> list[Feedback]:
    """Deliver GroupWrite telegrams to every device listening on their address.

    Returns the feedback the devices answer with, in delivery order.
    """
    responses: list[Feedback] = []
    for ga, value in telegrams:
        for device in devices:
            if device.handles_ga(ga):
                responses.extend(device.on_group_write(ga, value))
    return responses
