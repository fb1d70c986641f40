from ApiBlame.report.usage_report import FileUsage, RepositoryUsage

__all__ = ["FileUsage", "RepositoryUsage"]
