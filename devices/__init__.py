"""Simulated KNX devices driven by KnxValue payloads."""

from .base import BaseDevice, LockableDevice, dispatch
from .blind import Blind
from .light_dimmer import LightDimmer
from .light_switch import LightSwitch
from .threshold_simulator import ThresholdSimulator

__all__ = [
    "BaseDevice",
    "Blind",
    "LightDimmer",
    "LightSwitch",
    "LockableDevice",
    "ThresholdSimulator",
    "dispatch",
]
