import os

# -----------------------------
# Storage / logging
# -----------------------------
DB_FILE = os.getenv("BUDGET_DB_FILE", "budget.duckdb")
LOG_FILE = os.getenv("BUDGET_LOG_FILE", "forecast.log")

# -----------------------------
# Forecast windows
# -----------------------------
FORECAST_HORIZON_DAYS = int(os.getenv("FORECAST_HORIZON_DAYS", "30"))
UPCOMING_LOOKAHEAD_DAYS = int(os.getenv("UPCOMING_LOOKAHEAD_DAYS", "45"))
UPCOMING_LOOKBEHIND_MONTHS = int(os.getenv("UPCOMING_LOOKBEHIND_MONTHS", "12"))
UPCOMING_MAX_PER_RULE = 50

# Calendar filter toggles enabled when the caller sends none
DEFAULT_ACTIVE_TYPES = ("event", "task", "transaction", "forecast")
