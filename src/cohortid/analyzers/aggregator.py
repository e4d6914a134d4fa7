"""Cohort statistics over classified repositories."""

from collections.abc import Callable, Iterable, Sequence

from cohortid.models.schemas import Cohort, CohortAggregate, CohortAssignment, GroupAggregate

UNKNOWN_GROUP = "Unknown"


def _average(total: int, count: int) -> float:
    return total / count if count > 0 else 0.0


def summarize_cohort(cohort: Cohort, assignments: Sequence[CohortAssignment]) -> CohortAggregate:
    """Count and weight statistics for one cohort's assignments."""
    total_weight = sum(a.weight for a in assignments)
    return CohortAggregate(
        cohort=cohort,
        repository_count=len(assignments),
        total_weight=total_weight,
        average_weight=_average(total_weight, len(assignments)),
    )


def aggregate(
    assignments: Iterable[CohortAssignment],
    include_empty: bool = False,
) -> list[CohortAggregate]:
    """Group assignments by cohort and compute statistics.

    Args:
        assignments: Classified repositories.
        include_empty: Also report cohorts with no repositories (all zeros).

    Returns:
        Aggregates sorted by average weight, most complex first. Ties keep the
        order in which each cohort first appeared.
    """
    groups: dict[Cohort, list[CohortAssignment]] = {}
    for assignment in assignments:
        groups.setdefault(assignment.cohort, []).append(assignment)

    if include_empty:
        for cohort in Cohort:
            groups.setdefault(cohort, [])

    summaries = [summarize_cohort(cohort, members) for cohort, members in groups.items()]
    return sorted(summaries, key=lambda s: s.average_weight, reverse=True)


def enterprise_key(assignment: CohortAssignment) -> str:
    """Default grouping key: the enterprise name."""
    return assignment.enterprise_name


def aggregate_by_group(
    assignments: Iterable[CohortAssignment],
    key: Callable[[CohortAssignment], str | None] = enterprise_key,
) -> list[GroupAggregate]:
    """Cohort statistics nested under a grouping key.

    Assignments whose key is missing or empty fall into the "Unknown" group.
    Groups are sorted by name, ignoring case.
    """
    groups: dict[str, list[CohortAssignment]] = {}
    for assignment in assignments:
        name = key(assignment) or UNKNOWN_GROUP
        groups.setdefault(name, []).append(assignment)

    results = []
    for name, members in groups.items():
        total_weight = sum(a.weight for a in members)
        results.append(
            GroupAggregate(
                name=name,
                cohorts=tuple(aggregate(members)),
                total_repositories=len(members),
                total_weight=total_weight,
                average_weight=_average(total_weight, len(members)),
            )
        )

    return sorted(results, key=lambda g: (g.name.casefold(), g.name))
