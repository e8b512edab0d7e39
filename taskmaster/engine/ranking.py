"""Ranking logic for TaskMaster.

Filters a user's tasks by category and free-text search, then sorts them by
one of four modes. Completion always dominates: incomplete tasks come before
completed ones in every mode.

This is the single implementation shared by the API and any other caller.
It never raises on malformed task records and never copies or mutates them.
"""

import logging
import unicodedata
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple

from taskmaster.models.task import TaskCategory, SortMode, CATEGORY_ALL
from taskmaster.models.constants import DEFAULT_SORT_MODE
from taskmaster.engine.scoring import (
    read_field,
    deadline_ms,
    priority_weight,
    smart_score,
    to_epoch_ms,
)

logger = logging.getLogger(__name__)

_CATEGORIES_LOWER = {category.value.lower(): category for category in TaskCategory}
_SORT_MODES_LOWER = {mode.value: mode for mode in SortMode}


def rank(
    tasks: Sequence[Any],
    category_selector: Any = CATEGORY_ALL,
    search_text: Optional[str] = "",
    sort_mode: Any = DEFAULT_SORT_MODE,
    *,
    now: datetime,
) -> List[Any]:
    """Filter and order tasks for display.

    Pipeline (fixed order):
    1. Category filter ("All" keeps everything)
    2. Search filter (case-insensitive substring on title, description, tags)
    3. Stable sort by the requested mode

    This function is deterministic - `now` is captured once by the caller and
    used for every comparison.

    Args:
        tasks: Task models or mappings
        category_selector: "All" or a TaskCategory value (unknown -> "All")
        search_text: Free-text query (blank -> no filtering)
        sort_mode: SortMode value (unknown -> smart)
        now: Reference time for urgency and overdue checks

    Returns:
        The same task objects, filtered and ordered
    """
    filtered = filter_by_category(tasks, category_selector)
    filtered = filter_by_search(filtered, search_text)
    return sort_tasks(filtered, sort_mode, now=now)


def resolve_category_selector(value: Any) -> Optional[TaskCategory]:
    """Resolve a category selector to a concrete category.

    Returns:
        TaskCategory, or None meaning "All" (including unrecognized values)
    """
    if isinstance(value, TaskCategory):
        return value
    if not isinstance(value, str):
        if value is not None:
            logger.debug(f"Ignoring non-string category selector {value!r}")
        return None
    key = value.strip().lower()
    if key == CATEGORY_ALL.lower() or not key:
        return None
    category = _CATEGORIES_LOWER.get(key)
    if category is None:
        logger.debug(f"Unknown category selector {value!r}; not filtering by category")
    return category


def resolve_sort_mode(value: Any) -> SortMode:
    """Resolve a sort mode, falling back to smart for unrecognized values."""
    if isinstance(value, SortMode):
        return value
    if isinstance(value, str):
        mode = _SORT_MODES_LOWER.get(value.strip().lower())
        if mode is not None:
            return mode
    if value is not None:
        logger.debug(f"Unknown sort mode {value!r}; using {DEFAULT_SORT_MODE.value}")
    return DEFAULT_SORT_MODE


def filter_by_category(tasks: Sequence[Any], category_selector: Any) -> List[Any]:
    """Keep tasks in the selected category ("All" keeps everything)."""
    category = resolve_category_selector(category_selector)
    if category is None:
        return list(tasks)
    return [task for task in tasks if _category_value(read_field(task, "category")) == category.value]


def filter_by_search(tasks: Sequence[Any], search_text: Optional[str]) -> List[Any]:
    """Keep tasks whose title, description or any tag contains the search text.

    Matching is case-insensitive. Blank or non-string search text keeps everything.
    """
    if not isinstance(search_text, str):
        if search_text is not None:
            logger.debug(f"Ignoring non-string search text {search_text!r}")
        return list(tasks)
    if not search_text.strip():
        return list(tasks)
    query = search_text.lower()
    return [task for task in tasks if _matches_search(task, query)]


def sort_tasks(tasks: Sequence[Any], sort_mode: Any, *, now: datetime) -> List[Any]:
    """Stable-sort tasks by mode, incomplete tasks first.

    Args:
        tasks: Task models or mappings
        sort_mode: SortMode value (unknown -> smart)
        now: Reference time for the Smart score

    Returns:
        New list with the same task objects in sorted order
    """
    mode = resolve_sort_mode(sort_mode)

    if mode == SortMode.ALPHABETICAL:
        def mode_key(task):
            return title_sort_key(str(read_field(task, "title", "")))
    elif mode == SortMode.PRIORITY:
        def mode_key(task):
            return -priority_weight(read_field(task, "priority"))
    elif mode == SortMode.DEADLINE:
        mode_key = deadline_ms
    else:
        now_ms = to_epoch_ms(now)

        def mode_key(task):
            return -smart_score(task, now_ms)

    # Keys are computed once per task; sorted() is stable so ties keep input order
    keyed: List[Tuple[Tuple[bool, Any], Any]] = [
        ((_completion_sort_key(task), mode_key(task)), task) for task in tasks
    ]
    keyed.sort(key=lambda pair: pair[0])
    return [task for _, task in keyed]


def title_sort_key(title: str) -> Tuple[str, str]:
    """Get a locale-style collation key for a title.

    Primary comparison ignores case and accents; on otherwise equal titles,
    unaccented sorts before accented and lower case before upper case.
    """
    decomposed = unicodedata.normalize("NFKD", title)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return (base, title.swapcase())


def _completion_sort_key(task: Any) -> bool:
    # False (incomplete) sorts before True (completed)
    return read_field(task, "is_completed", False) is True


def _category_value(value: Any) -> Any:
    if isinstance(value, TaskCategory):
        return value.value
    return value


def _matches_search(task: Any, query: str) -> bool:
    title = read_field(task, "title", "")
    if isinstance(title, str) and query in title.lower():
        return True

    description = read_field(task, "description")
    if isinstance(description, str) and query in description.lower():
        return True

    tags = read_field(task, "tags", [])
    if isinstance(tags, (list, tuple)):
        return any(isinstance(tag, str) and query in tag.lower() for tag in tags)
    return False
