from dataclasses import dataclass, field


@dataclass(frozen=True)
class Submission:
    """One retained row of the submissions table.

    ``source_url`` is where the raw source is downloaded from; it is kept out of
    the repr and of every exported schema.
    """

    problem_id: str = ""
    language: str = ""
    accepted: bool = False
    source: bytes | None = None
    source_url: str = field(default="", repr=False, compare=False)
