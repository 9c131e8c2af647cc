"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import date

# Training night. Matches date.weekday() (Monday == 0).
TRAINING_WEEKDAY = 3

# Fee tracking starts here; the fee grid cannot navigate earlier.
FEE_EPOCH = date(2025, 7, 1)

ADMIN_ROLE = "admin"
