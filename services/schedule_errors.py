"""
Schedule Errors: per-rule failures raised by the occurrence engine.

Batch services catch ``ScheduleError`` for one rule, record it, and carry on
with the remaining rules.
"""


class ScheduleError(Exception):
    def __init__(self, rule_id, message):
        self.rule_id = rule_id
        super().__init__(f"rule {rule_id}: {message}")


class ConfigurationError(ScheduleError):
    """Unrecognized frequency or out-of-range rule fields."""


class MissingStartDateError(ScheduleError):
    """Rule has no start date and cannot be anchored."""


class InvariantViolation(ScheduleError):
    """A generated occurrence failed to move past the previous one."""
