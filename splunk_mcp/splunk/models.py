"""Data model for search requests, jobs and results."""

from typing import Any, Dict, List

from pydantic import BaseModel, Field, computed_field, field_validator


class SearchRequest(BaseModel):
    """A single search to run against Splunk."""

    query: str
    earliest_time: str = "-24h"
    latest_time: str = "now"
    max_count: int = Field(default=100, ge=1)

    model_config = {"frozen": True}

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("query must not be empty")
        return v.strip()


class Job(BaseModel):
    """A search job on the backend, tracked for the duration of one search."""

    id: str
    done: bool = False
    attempt: int = 0


class SearchResult(BaseModel):
    """Rows returned by a finished search job, in backend order."""

    rows: List[Dict[str, Any]] = Field(default_factory=list)
    job_id: str

    model_config = {"frozen": True}

    @computed_field
    @property
    def row_count(self) -> int:
        return len(self.rows)
