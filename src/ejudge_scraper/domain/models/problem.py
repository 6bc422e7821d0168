from dataclasses import dataclass


@dataclass(frozen=True)
class Problem:
    """One row of the contest summary table."""

    id: str = ""
    name: str = ""
    accepted: bool = False
    run_id: int = 0
