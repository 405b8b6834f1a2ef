from .reporting import ReportingService, ReportFilterCriteria, ScoringPolicy

__all__ = [
    "ReportingService",
    "ReportFilterCriteria",
    "ScoringPolicy",
]
