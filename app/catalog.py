"""Position catalog - capacity limits and display order for council seats."""

from app.errors import InvalidPositionTypeError
from app.models.council.position import PositionType

UNLIMITED = -1
UNKNOWN_RANK = 99

_CAPACITY: dict[PositionType, int] = {
    PositionType.PRESIDENT: 1,
    PositionType.VICE_PRESIDENT: 1,
    PositionType.BOARD_TREASURER: 1,
    PositionType.BOARD_SECRETARY: 1,
    PositionType.BOARD_MEMBER: 6,
    PositionType.NON_COUNCIL: UNLIMITED,
}

_PRIORITY: dict[PositionType, int] = {
    PositionType.PRESIDENT: 1,
    PositionType.VICE_PRESIDENT: 2,
    PositionType.BOARD_TREASURER: 3,
    PositionType.BOARD_SECRETARY: 4,
    PositionType.BOARD_MEMBER: 5,
    PositionType.NON_COUNCIL: 6,
}


def all_position_types() -> list[PositionType]:
    """Every position type, in priority order."""
    return sorted(PositionType, key=priority_rank)


def council_seats() -> list[PositionType]:
    """Seat types managed by the engine (everything but NonCouncil)."""
    return [p for p in all_position_types() if is_council_seat(p)]


def max_capacity(position_type: PositionType) -> int:
    """Maximum simultaneously active holders per term; UNLIMITED (-1) for NonCouncil."""
    return _CAPACITY[PositionType.parse(position_type)]


def is_unlimited(position_type: PositionType) -> bool:
    return max_capacity(position_type) == UNLIMITED


def is_council_seat(position_type: PositionType) -> bool:
    return PositionType.parse(position_type) is not PositionType.NON_COUNCIL


def is_leadership(position_type: PositionType) -> bool:
    return PositionType.parse(position_type) in (PositionType.PRESIDENT, PositionType.VICE_PRESIDENT)


def priority_rank(position_type: PositionType | str) -> int:
    """Lower ranks first. Unrecognized values rank last."""
    try:
        return _PRIORITY[PositionType.parse(position_type)]
    except InvalidPositionTypeError:
        return UNKNOWN_RANK
