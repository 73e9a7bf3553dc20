"""Simple on/off light switch (DPT 1.001) with a lock object.

Group addresses:
  switch_cmd    — receives GroupWrite ON/OFF
  switch_status — sends feedback with current state
  lock_cmd      — receives GroupWrite lock ON/OFF
  lock_status   — lock state (same address as lock_cmd on lights)
"""

import logging
from typing import Optional

from dpt.value import KnxValue

from .addresses import light_addresses
from .base import Feedback, LockableDevice

logger = logging.getLogger("knxvalue.devices")


class LightSwitch(LockableDevice):
    GA_DPT_MAP = {
        "switch_cmd": "1.001",
        "switch_status": "1.001",
        "lock_cmd": "1.003",
        "lock_status": "1.003",
    }

    LOCKED_COMMANDS = frozenset({"switch_cmd"})

    def __init__(self, device_id: str, group_addresses: dict, initial_state: Optional[dict] = None):
        super().__init__(device_id, group_addresses, initial_state)
        self.state.setdefault("on", False)

    @classmethod
    def for_sub_group(cls, device_id: str, sub_group, initial_state: Optional[dict] = None):
        return cls(device_id, light_addresses(sub_group), initial_state)

    @property
    def is_on(self) -> bool:
        return bool(self.state["on"])

    def _handle_write(self, name: str, value: KnxValue) -> list[Feedback]:
        if name != "switch_cmd":
            return []

        on = value.as_boolean()
        self.state["on"] = on
        logger.info("%s ← switch %s", self.device_id, "ON" if on else "OFF")
        return self._feedback("switch_status", on)

    def _handle_read(self, name: str) -> Optional[KnxValue]:
        if name in ("switch_cmd", "switch_status"):
            return KnxValue(self.is_on)
        return super()._handle_read(name)
