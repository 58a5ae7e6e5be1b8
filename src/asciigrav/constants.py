"""
Reference-configuration constants for the ASCII N-body simulator.

UNITS:
- Distance: arbitrary simulation units (the initial cloud spans [-N, N])
- Time: one tick (velocities are added to positions once per tick)
- Mass: arbitrary units in (0, 1]

This means:
- There is no explicit timestep; simulation speed is tied to tick rate
- G is a pure scale factor on the pairwise force
"""

# Gravitational constant [simulation units]
G = 1.0

# Number of bodies in the reference configuration
N_BODIES = 1000

# Target logical tick rate [ticks/s]
TICKS_PER_SECOND = 10

# Pairs closer than this contribute no force for the tick
# (coincident bodies would otherwise divide by zero)
MIN_DISTANCE = 1.0e-9

# Depth characters, least z (sparse) to greatest z (dense)
DEPTH_PALETTE = ('.', "'", ':', '-', '_', '^', '+', '=',
                 '~', '*', 'o', 'O', '#', '%', '&', '@')

# Grid size used when the terminal cannot be queried [columns, rows]
FALLBACK_WIDTH = 80
FALLBACK_HEIGHT = 24

# Force kernels available to the integrator
FORCE_METHODS = ('pairwise', 'parallel')
