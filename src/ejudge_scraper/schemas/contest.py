"""Pydantic schemas for the exported contest results."""

from pydantic import BaseModel

from ejudge_scraper.domain.models import ContestResults


class ProblemSchema(BaseModel):
    """A problem of the contest summary."""

    id: str
    name: str
    accepted: bool
    run_id: int

    class Config:
        from_attributes = True


class SubmissionSchema(BaseModel):
    """A retained submission; the source is serialized as base64."""

    problem_id: str
    language: str
    accepted: bool
    source: bytes | None = None

    class Config:
        from_attributes = True
        ser_json_bytes = "base64"
        val_json_bytes = "base64"


class ActionLinksSchema(BaseModel):
    """Pages the results were extracted from."""

    summary: str
    standings: str
    submissions: str

    class Config:
        from_attributes = True


class ContestResultsSchema(BaseModel):
    """Everything written to ``contest.json``."""

    entry_url: str
    links: ActionLinksSchema
    problems: list[ProblemSchema]
    submissions: list[SubmissionSchema]

    @classmethod
    def from_results(cls, results: ContestResults) -> "ContestResultsSchema":
        return cls(
            entry_url=results.session.entry_url,
            links=ActionLinksSchema.model_validate(results.links),
            problems=[ProblemSchema.model_validate(p) for p in results.problems],
            submissions=[SubmissionSchema.model_validate(s) for s in results.submissions],
        )
