from .orchestrator import ContestScrapeOrchestrator, PipelineState, PipelineStep

__all__ = ["ContestScrapeOrchestrator", "PipelineState", "PipelineStep"]
