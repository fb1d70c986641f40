import os
from typing import Dict, List

import pandas as pd
from pydantic import BaseModel, Field

USAGE_COLUMNS = ["file", "module", "author", "calls"]
SUMMARY_COLUMNS = ["module", "author", "calls"]


class FileUsage(BaseModel):
    file: str = Field(..., description="Path of the analyzed file, relative to the repository.")
    uses: Dict[str, Dict[str, int]] = Field(
        default_factory=dict,
        description="Calls per external module, broken down by the author of the calling line.",
    )

    def total_calls(self) -> int:
        return sum(count for authors in self.uses.values() for count in authors.values())


class RepositoryUsage(BaseModel):
    repository: str
    files: List[FileUsage] = Field(default_factory=list)
    failed_files: List[str] = Field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        rows = [
            {"file": usage.file, "module": module, "author": author, "calls": calls}
            for usage in self.files
            for module, authors in usage.uses.items()
            for author, calls in authors.items()
        ]
        return pd.DataFrame(rows, columns=USAGE_COLUMNS)

    def module_summary(self) -> pd.DataFrame:
        df = self.to_dataframe()
        if df.empty:
            return pd.DataFrame(columns=SUMMARY_COLUMNS)
        summary = df.groupby(["module", "author"], as_index=False)["calls"].sum()
        summary = summary.sort_values(
            by=["calls", "module", "author"], ascending=[False, True, True]
        )
        return summary.reset_index(drop=True)[SUMMARY_COLUMNS]

    def save(self, output_dir: str) -> Dict[str, str]:
        os.makedirs(output_dir, exist_ok=True)
        paths = {
            "json": os.path.join(output_dir, "usage.json"),
            "csv": os.path.join(output_dir, "usage.csv"),
            "summary": os.path.join(output_dir, "usage_summary.csv"),
        }
        with open(paths["json"], "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))
        self.to_dataframe().to_csv(paths["csv"], index=False)
        self.module_summary().to_csv(paths["summary"], index=False)
        return paths
