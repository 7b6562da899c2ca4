"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LOCAL_TIMEZONE = "America/Los_Angeles"
DEFAULT_DIVISION = "vendor"
DEFAULT_SYNC_BATCH_TIMEOUT_SECONDS = 120

MAX_MEAL_PERIODS = 2

OFFLINE_SYNC_ORIGIN = "offline-kiosk-sync"
KIOSK_ORIGIN = "kiosk"
AUTO_MEAL_END_NOTE = "Auto-ended on clock out"
SIGNED_CLOCK_OUT_NOTE = "Signed clock-out via kiosk"
KIOSK_NOTE = "Kiosk check-in"
