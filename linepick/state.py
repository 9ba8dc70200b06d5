from __future__ import annotations

from dataclasses import dataclass

RUNNING = "running"
CONFIRMED = "confirmed"
CANCELLED = "cancelled"


@dataclass
class PromptState:
    query: str = ""
    cursor: int = 0
    outcome: str = RUNNING
    autoselected: int | None = None
