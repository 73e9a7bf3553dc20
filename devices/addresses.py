"""Group address layout of the installation.

Devices are numbered by their control sub group X. Each function lives in
its own middle group, and the actuator answers on sub group X + 100:

  lights    1/1/X switch (feedback 1/1/X+100), 1/2/X lock (echoed on 1/2/X)
  dimmers   2/1/X switch, 2/2/X brightness, 2/3/X lock (echoed on 2/3/X)
  shutters  4/0/X movement, 4/1/X stop (movement status on 4/1/X+100),
            4/2/X position, 4/3/X lock, 4/4/X sun protection block (echoed),
            4/4/X+100 sun protection status

Weather-station thresholds shared by all shutters sit in 0/2: brightness
0/2/3 and 0/2/4, outdoor temperature 0/2/8, and 0/2/12 blocks the real
brightness monitor so a simulator can drive the thresholds alone.
"""

from __future__ import annotations

from dpt.group_address import FEEDBACK_OFFSET, feedback_address

LIGHTS_MAIN_GROUP = 1
LIGHTS_SWITCH_MIDDLE_GROUP = 1
LIGHTS_LOCK_MIDDLE_GROUP = 2

DIMMERS_MAIN_GROUP = 2
DIMMERS_SWITCH_MIDDLE_GROUP = 1
DIMMERS_BRIGHTNESS_MIDDLE_GROUP = 2
DIMMERS_LOCK_MIDDLE_GROUP = 3

SHUTTERS_MAIN_GROUP = 4
SHUTTERS_MOVEMENT_MIDDLE_GROUP = 0
SHUTTERS_STOP_MIDDLE_GROUP = 1
SHUTTERS_POSITION_MIDDLE_GROUP = 2
SHUTTERS_LOCK_MIDDLE_GROUP = 3
SHUTTERS_SUN_PROTECTION_MIDDLE_GROUP = 4

BRIGHTNESS_THRESHOLD_1 = "0/2/3"
BRIGHTNESS_THRESHOLD_2 = "0/2/4"
OUTDOOR_TEMPERATURE_THRESHOLD = "0/2/8"
BRIGHTNESS_MONITORING_BLOCK = "0/2/12"


def _ga(main: int, middle: int, sub) -> str:
    return f"{main}/{middle}/{int(sub)}"


def light_addresses(sub_group) -> dict[str, str]:
    switch = _ga(LIGHTS_MAIN_GROUP, LIGHTS_SWITCH_MIDDLE_GROUP, sub_group)
    lock = _ga(LIGHTS_MAIN_GROUP, LIGHTS_LOCK_MIDDLE_GROUP, sub_group)
    return {
        "switch_cmd": switch,
        "switch_status": feedback_address(switch, FEEDBACK_OFFSET),
        "lock_cmd": lock,
        # Lock actuators send no feedback; the write itself is the status
        "lock_status": lock,
    }


def dimmer_addresses(sub_group) -> dict[str, str]:
    switch = _ga(DIMMERS_MAIN_GROUP, DIMMERS_SWITCH_MIDDLE_GROUP, sub_group)
    brightness = _ga(DIMMERS_MAIN_GROUP, DIMMERS_BRIGHTNESS_MIDDLE_GROUP, sub_group)
    lock = _ga(DIMMERS_MAIN_GROUP, DIMMERS_LOCK_MIDDLE_GROUP, sub_group)
    return {
        "switch_cmd": switch,
        "switch_status": feedback_address(switch),
        "brightness_cmd": brightness,
        "brightness_status": feedback_address(brightness),
        "lock_cmd": lock,
        "lock_status": lock,
    }


def shutter_addresses(sub_group) -> dict[str, str]:
    movement = _ga(SHUTTERS_MAIN_GROUP, SHUTTERS_MOVEMENT_MIDDLE_GROUP, sub_group)
    stop = _ga(SHUTTERS_MAIN_GROUP, SHUTTERS_STOP_MIDDLE_GROUP, sub_group)
    position = _ga(SHUTTERS_MAIN_GROUP, SHUTTERS_POSITION_MIDDLE_GROUP, sub_group)
    lock = _ga(SHUTTERS_MAIN_GROUP, SHUTTERS_LOCK_MIDDLE_GROUP, sub_group)
    sun = _ga(SHUTTERS_MAIN_GROUP, SHUTTERS_SUN_PROTECTION_MIDDLE_GROUP, sub_group)
    return {
        "movement_cmd": movement,
        "movement_status": feedback_address(movement),
        "stop_cmd": stop,
        "activity_status": feedback_address(stop),
        "position_cmd": position,
        "position_status": feedback_address(position),
        "lock_cmd": lock,
        "lock_status": feedback_address(lock),
        "sun_block_cmd": sun,
        "sun_block_status": sun,
        "sun_protection_status": feedback_address(sun),
        "brightness_threshold_1": BRIGHTNESS_THRESHOLD_1,
        "brightness_threshold_2": BRIGHTNESS_THRESHOLD_2,
        "outdoor_temperature_threshold": OUTDOOR_TEMPERATURE_THRESHOLD,
    }


def threshold_addresses() -> dict[str, str]:
    return {
        "brightness_threshold_1": BRIGHTNESS_THRESHOLD_1,
        "brightness_threshold_2": BRIGHTNESS_THRESHOLD_2,
        "outdoor_temperature_threshold": OUTDOOR_TEMPERATURE_THRESHOLD,
        "monitoring_block": BRIGHTNESS_MONITORING_BLOCK,
    }
