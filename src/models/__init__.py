from src.models.review import ExtractionResult, ReviewRecord, ScrapeRequest, ScrapeResult

__all__ = ["ScrapeRequest", "ReviewRecord", "ExtractionResult", "ScrapeResult"]
