"""Target-role input for the matching layer."""

from pydantic import BaseModel


class JobRequirement(BaseModel):
    """A target role. Empty skill lists mean "no requirement"."""
    id: str
    title: str = ""
    required_skills: list[str] = []
    nice_to_have_skills: list[str] = []
    tools: list[str] = []
    description: str | None = None  # not used by the matching algorithms


class RankedJob(JobRequirement):
    """A JobRequirement annotated with the user's match against it."""
    match_score: float = 0.0
    coverage_score: float = 0.0
