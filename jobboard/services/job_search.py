"""
Job search: turns open-ended query parameters into SQL filter clauses over active jobs
and returns one bounded, deterministically ordered page.

Every supplied filter must match (AND). Within the free-text query the title,
description and company name are alternatives (OR). Salary bounds are accepted but
deliberately not applied.
"""

import logging
from typing import Any, Mapping

from sqlalchemy import or_
from sqlalchemy.orm import Session

from jobboard.models.job import Job, JobSkill
from jobboard.repos import job_repo
from jobboard.schemas.common import Pagination, parse_model
from jobboard.schemas.job import JobSearchParams
from jobboard.services.pagination import paginate

logger = logging.getLogger(__name__)


def _contains(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_job_filters(params: JobSearchParams, active_only: bool = True) -> list:
    filters = []
    if active_only:
        filters.append(Job.is_active.is_(True))
    if params.query:
        term = _contains(params.query)
        filters.append(
            or_(
                Job.title.ilike(term, escape="\\"),
                Job.description.ilike(term, escape="\\"),
                Job.company_name.ilike(term, escape="\\"),
            )
        )
    if params.location:
        filters.append(Job.location.ilike(_contains(params.location), escape="\\"))
    if params.type is not None:
        filters.append(Job.type == params.type.value)
    if params.experience is not None:
        filters.append(Job.experience == params.experience.value)
    if params.skills:
        filters.append(Job.skill_rows.any(JobSkill.name.in_(params.skills)))
    if params.is_remote is not None:
        filters.append(Job.is_remote.is_(params.is_remote))
    return filters


def search_jobs(
    db: Session,
    params: JobSearchParams | Mapping[str, Any] | None = None,
) -> tuple[list[Job], Pagination]:
    params = parse_model(JobSearchParams, params)
    if params.min_salary is not None or params.max_salary is not None:
        logger.debug("Salary bounds supplied to job search are ignored")
    filters = build_job_filters(params)
    jobs, pagination = paginate(
        lambda limit, offset: job_repo.get_paginated(db, filters, limit=limit, offset=offset),
        params,
    )
    logger.debug("Job search page=%d limit=%d total=%d", params.page, params.limit, pagination.total)
    return jobs, pagination
