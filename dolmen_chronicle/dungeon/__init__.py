"""
Dungeon delves for Dolmenwood.

Turn-by-turn dungeon exploration: light sources, wandering monster checks and
the encounters they start.
"""

from dolmen_chronicle.dungeon.delve import (
    LIGHT_SOURCE_SEQUENCE,
    LightSource,
    ActiveLightSource,
    Delve,
    light_type_name,
    standard_light_duration,
    start_delve,
    save_delve,
    load_delve,
)

__all__ = [
    "LIGHT_SOURCE_SEQUENCE",
    "LightSource",
    "ActiveLightSource",
    "Delve",
    "light_type_name",
    "standard_light_duration",
    "start_delve",
    "save_delve",
    "load_delve",
]
