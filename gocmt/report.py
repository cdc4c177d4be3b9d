"""
JSON report of a gocmt run.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class FileReport(BaseModel):
    path: str
    modified: bool = False
    actions: Dict[str, int] = Field(default_factory=dict)
    error: Optional[str] = None


class RunReport(BaseModel):
    version: str
    files: List[FileReport] = Field(default_factory=list)

    @property
    def modified_count(self) -> int:
        return sum(1 for f in self.files if f.modified)

    @property
    def failed_count(self) -> int:
        return sum(1 for f in self.files if f.error is not None)


__all__ = ["FileReport", "RunReport"]
