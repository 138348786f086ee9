"""
FILE: protask/core/projector.py
PURPOSE: Compute the visible task list from the canonical collection
EXPORTS:
  - matches_filter(task, filter_type) -> bool
  - project(tasks, filter_type, query, order) -> List[Task]
DEPENDENCIES:
  - protask.core.models (Task, FilterType, SortOrder)
NOTES:
  - Pure: never mutates the collection or the tasks in it
  - Ties on priority keep canonical order, whatever the sort direction
"""

from typing import List, Sequence

from .models import Task, FilterType, SortOrder


def matches_filter(task: Task, filter_type: FilterType) -> bool:
    if filter_type is FilterType.PENDING:
        return not task.is_done
    if filter_type is FilterType.COMPLETED:
        return task.is_done
    return True


def project(
    tasks: Sequence[Task],
    filter_type: FilterType = FilterType.ALL,
    query: str = "",
    order: SortOrder = SortOrder.ASCENDING,
) -> List[Task]:
    """
    Filter, search and sort tasks into the visible sequence.

    Args:
        tasks: Canonical collection, in canonical order
        filter_type: Status filter
        query: Case-insensitive title substring; empty means no search
        order: Priority sort direction

    Returns:
        New list of the visible tasks (the Task objects themselves are shared)
    """
    needle = query.lower()

    # Pair each task with its canonical index before filtering so the
    # tie-break never depends on filtered positions.
    indexed = [
        (index, task)
        for index, task in enumerate(tasks)
        if matches_filter(task, filter_type)
        and (not needle or needle in task.title.lower())
    ]

    # Ascending walks priority rank (High is rank 1), so High comes first.
    if order is SortOrder.ASCENDING:
        indexed.sort(key=lambda pair: (-int(pair[1].priority), pair[0]))
    else:
        indexed.sort(key=lambda pair: (int(pair[1].priority), pair[0]))

    return [task for _, task in indexed]
