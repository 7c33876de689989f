from typing import Literal

from pydantic import BaseModel, Field

ClusterMethod = Literal["lexical", "semantic", "category"]


class ClusterRequest(BaseModel):
    skills: list[str] = Field(default_factory=list, description="Raw skill labels")
    method: ClusterMethod = "lexical"
    num_clusters: int | None = Field(default=None, ge=0, description="Requested cluster count")
    weights: list[float] | None = None
    categories: list[str] | None = None
