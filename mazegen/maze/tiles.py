# Block type constants centralized for modular imports
WALL = "wall"
EMPTY = "empty"
GHOST_HOUSE = "ghost-house"
TELEPORTER = "teleporter"  # tunnel exit on the outer column, mirrored on both sides

# Cell types a player can stand on; connectivity and dead-end checks use this set
WALKABLE = frozenset({EMPTY, TELEPORTER})

__all__ = ["WALL", "EMPTY", "GHOST_HOUSE", "TELEPORTER", "WALKABLE"]
