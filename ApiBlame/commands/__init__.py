from ApiBlame.commands.analyze_file import analyze_file, analyze_source_file
from ApiBlame.commands.analyze_repository import analyze_repository

__all__ = ["analyze_file", "analyze_source_file", "analyze_repository"]
