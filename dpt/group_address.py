"""Group address helpers for the three-level ``main/middle/sub`` convention."""

from __future__ import annotations

from typing import NamedTuple, Union

# Control sub group + offset = feedback sub group (e.g. 4/2/17 -> 4/2/117)
FEEDBACK_OFFSET = 100


class GroupAddress(NamedTuple):
    main: int
    middle: int
    sub: int

    @property
    def main_middle(self) -> str:
        return f"{self.main}/{self.middle}"

    def to_int(self) -> int:
        """Encode as the 16-bit bus form (main/middle/sub as 5.3.8 bits)."""
        return (self.main << 11) | (self.middle << 8) | self.sub

    @classmethod
    def from_int(cls, addr: int) -> GroupAddress:
        """Decode 0x0900 → GroupAddress(1, 1, 0)."""
        return cls((addr >> 11) & 0x1F, (addr >> 8) & 0x07, addr & 0xFF)

    def __str__(self) -> str:
        return f"{self.main}/{self.middle}/{self.sub}"


def parse_group_address(text: Union[str, GroupAddress]) -> GroupAddress:
    """Parse "4/2/17" → GroupAddress(4, 2, 17).

    Raises ValueError for anything that is not a valid three-level address.
    """
    if isinstance(text, GroupAddress):
        return text

    parts = str(text).strip().split("/")
    if len(parts) != 3:
        raise ValueError(f"Group address must be main/middle/sub, got '{text}'")
    try:
        main, middle, sub = (int(p) for p in parts)
    except ValueError:
        raise ValueError(f"Group address parts must be integers, got '{text}'") from None

    if not (0 <= main <= 31 and 0 <= middle <= 7 and 0 <= sub <= 255):
        raise ValueError(f"Group address out of range: '{text}'")
    return GroupAddress(main, middle, sub)


def format_group_address(addr: int) -> str:
    """Format 0x0900 → "1/1/0"."""
    return str(GroupAddress.from_int(addr))


def feedback_address(control: Union[str, GroupAddress], offset: int = FEEDBACK_OFFSET) -> str:
    """Derive the feedback address by adding ``offset`` to the sub group."""
    ga = parse_group_address(control)
    return str(parse_group_address(f"{ga.main}/{ga.middle}/{ga.sub + offset}"))
