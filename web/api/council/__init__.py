"""Council API."""

from web.api.council.views import (
    assign_position,
    create_council,
    deactivate_council,
    get_active_council,
    get_all_councils,
    get_available_positions,
    get_composition,
    get_composition_details,
    get_council,
    get_member_history,
    get_position,
    remove_position,
    update_council,
    update_position,
    validate_position,
)

__all__ = [
    "get_all_councils",
    "get_active_council",
    "get_council",
    "create_council",
    "update_council",
    "deactivate_council",
    "get_composition",
    "get_composition_details",
    "get_available_positions",
    "validate_position",
    "assign_position",
    "get_position",
    "update_position",
    "remove_position",
    "get_member_history",
]
