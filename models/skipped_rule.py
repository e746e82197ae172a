from dataclasses import dataclass


@dataclass(frozen=True)
class SkippedRule:
    rule_id: str
    error: str
    message: str

    @classmethod
    def from_error(cls, rule_id, exc: Exception):
        return cls(rule_id=str(rule_id), error=type(exc).__name__, message=str(exc))
