"""Central configuration for runtime-tunable parameters.

All constants can be overridden via environment variables so that the
client talks to a local development server by default, while a deployed
client or the automated test-suite can point it elsewhere.
"""

from __future__ import annotations

import os


# ===========================================================================
# Network Defaults
# ===========================================================================
# PLANEWAR_URL: Websocket endpoint of the game server.
#   Defaults to the reference server's local address and /ws path.
#   Example: export PLANEWAR_URL=wss://planes.example.org/ws
DEFAULT_URL: str = os.getenv("PLANEWAR_URL", "ws://127.0.0.1:8080/ws")

# PLANEWAR_OPEN_TIMEOUT: Seconds to wait for the websocket opening handshake.
#   Defaults to 10 seconds. Example: export PLANEWAR_OPEN_TIMEOUT=3
OPEN_TIMEOUT: float = float(os.getenv("PLANEWAR_OPEN_TIMEOUT", "10"))


# ===========================================================================
# Game Constants
# ===========================================================================
# Width and height of both grids. The plane shapes and the wire protocol
# (cell index = row * 10 + col) assume 10, so this is not an env var.
GRID_SIZE: int = 10
CELL_COUNT: int = GRID_SIZE * GRID_SIZE

# Planes each player places before battle, and cells per plane footprint.
MAX_PLANES: int = 3
PLANE_CELLS: int = 10


# ===========================================================================
# Debugging and Logging
# ===========================================================================
# PLANEWAR_DEBUG: If "1", enables detailed debug logging across modules.
#   Defaults to "0" (disabled).
#   Example: export PLANEWAR_DEBUG=1
DEBUG: bool = os.getenv("PLANEWAR_DEBUG", "0") == "1"

# PLANEWAR_QUIET: Comma-separated list of output categories that the CLI
#   client should *not* print. Known categories: grid, shot, error, raw.
#   Defaults to an empty list (all categories printed).
#   Example: export PLANEWAR_QUIET="grid,raw"
QUIET_CATEGORIES: list[str] = os.getenv("PLANEWAR_QUIET", "").split(",") if os.getenv("PLANEWAR_QUIET") else []
