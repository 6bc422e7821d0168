from .contest import ActionLinksSchema, ContestResultsSchema, ProblemSchema, SubmissionSchema

__all__ = ["ActionLinksSchema", "ContestResultsSchema", "ProblemSchema", "SubmissionSchema"]
