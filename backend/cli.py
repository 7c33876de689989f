"""Command-line entry point for clustering skills and matching them against jobs.

Usage:
    skillmap cluster skills.json [--method lexical|semantic|category] [--clusters N]
    skillmap rank skills.json jobs.json
    skillmap recommend skills.json jobs.json [--max N]

skills.json holds a JSON list of skill strings; jobs.json a list of job
requirement objects (id, title, required_skills, nice_to_have_skills, tools).
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, TypeAdapter

from config import settings
from models.requests import ClusterRequest
from models.schemas.job_requirement import JobRequirement
from services import job_matching
from services.providers.base import ProviderError
from services.skill_clustering import cluster_skill_set

logger = logging.getLogger(__name__)

USER_ERROR_MESSAGE = "could not cluster/match skills; please retry"

_skills_adapter = TypeAdapter(list[str])
_jobs_adapter = TypeAdapter(list[JobRequirement])


class RankedJobReport(BaseModel):
    id: str
    title: str
    match_score: float
    coverage_score: float
    missing_required: list[str] = []
    missing_nice_to_have: list[str] = []


def load_skills(path: str) -> list[str]:
    return _skills_adapter.validate_json(Path(path).read_text(encoding="utf-8"))


def load_jobs(path: str) -> list[JobRequirement]:
    return _jobs_adapter.validate_json(Path(path).read_text(encoding="utf-8"))


def _dump(payload) -> str:
    if isinstance(payload, BaseModel):
        return payload.model_dump_json(indent=2)
    return json.dumps([item.model_dump(mode="json") for item in payload], indent=2)


def run_cluster(args: argparse.Namespace) -> str:
    request = ClusterRequest(
        skills=load_skills(args.skills),
        method=args.method,
        num_clusters=args.clusters,
    )
    return _dump(asyncio.run(cluster_skill_set(request)))


def run_rank(args: argparse.Namespace) -> str:
    skills = load_skills(args.skills)
    ranked = job_matching.rank_jobs_by_skill_match(skills, load_jobs(args.jobs))
    reports = []
    for job in ranked:
        gap = job_matching.calculate_skill_gap(skills, job)
        reports.append(RankedJobReport(
            id=job.id,
            title=job.title,
            match_score=job.match_score,
            coverage_score=job.coverage_score,
            missing_required=gap.missing_required,
            missing_nice_to_have=gap.missing_nice_to_have,
        ))
    return _dump(reports)


def run_recommend(args: argparse.Namespace) -> str:
    recommendations = job_matching.get_recommended_skills(
        load_skills(args.skills), load_jobs(args.jobs), max_recommendations=args.max
    )
    return _dump(recommendations)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="skillmap", description="Skill clustering and job matching")
    subparsers = parser.add_subparsers(dest="command", required=True)

    cluster = subparsers.add_parser("cluster", help="Cluster a list of skills")
    cluster.add_argument("skills", help="JSON file with a list of skill strings")
    cluster.add_argument("--method", choices=["lexical", "semantic", "category"], default="lexical")
    cluster.add_argument("--clusters", type=int, default=None, help="Requested cluster count")
    cluster.set_defaults(handler=run_cluster)

    rank = subparsers.add_parser("rank", help="Rank jobs by skill coverage")
    rank.add_argument("skills")
    rank.add_argument("jobs", help="JSON file with a list of job requirements")
    rank.set_defaults(handler=run_rank)

    recommend = subparsers.add_parser("recommend", help="Recommend skills to acquire")
    recommend.add_argument("skills")
    recommend.add_argument("jobs")
    recommend.add_argument("--max", type=int, default=10)
    recommend.set_defaults(handler=run_recommend)

    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    args = build_parser().parse_args(argv)
    try:
        output = args.handler(args)
    except ProviderError as e:
        logger.error("Embedding provider %s failed: %s", e.provider or "unknown", e)
        print(USER_ERROR_MESSAGE, file=sys.stderr)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
