import os
from typing import Iterable, List, Optional

from tqdm import tqdm

DEFAULT_EXTENSIONS = (".js", ".cjs", ".jsx")

EXCLUDED_DIRECTORIES = {
    "node_modules",
    "bower_components",
    ".git",
    "dist",
    "build",
    "coverage",
}


class SourceFileIterator:
    def __init__(self, repository: str, extensions: Optional[Iterable[str]] = None):
        self.repository = repository
        self.extensions = tuple(extensions) if extensions else DEFAULT_EXTENSIONS
        self.results: List[str] = []

    def __iter__(self):
        for result in tqdm(self.collect(), desc="Analyzed files"):
            yield result

    def __len__(self) -> int:
        return len(self.results)

    def collect(self) -> List[str]:
        self.results = []
        for root, directories, files in os.walk(self.repository):
            # pruned in place so os.walk does not descend
            directories[:] = sorted(d for d in directories if d not in EXCLUDED_DIRECTORIES)
            for name in files:
                if name.endswith(self.extensions):
                    path = os.path.join(root, name)
                    self.results.append(os.path.relpath(path, self.repository))
        self.results.sort()
        return self.results
