from pydantic import BaseModel

from models.schemas.skill_node import Point3D, SkillNode


class ClusterMetadata(BaseModel):
    total_skills: int = 0
    num_clusters: int = 0
    categories: list[str] = []
    avg_weight: float = 0.0
    method: str = "lexical"


class ClusterResponse(BaseModel):
    nodes: list[SkillNode] = []
    positions: list[Point3D] = []  # one per node, same order
    metadata: ClusterMetadata = ClusterMetadata()
