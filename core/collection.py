"""Ordered task collection with stable source indices."""

from typing import Callable, Iterable, Iterator, List, Optional, Sequence

from .task import Task, parse_task


class TaskCollection:
    """Ordered sequence of tasks in file order.

    Filtered and sorted views remember the index each task has in the
    collection they were derived from, so mutations made through a view can be
    written back in place.
    """

    def __init__(self, tasks: Iterable[Task] = (), origins: Optional[Sequence[int]] = None):
        self._tasks: List[Task] = list(tasks)
        if origins is None:
            self._origins: List[int] = list(range(len(self._tasks)))
        else:
            if len(origins) != len(self._tasks):
                raise ValueError("origins must match tasks one to one")
            self._origins = list(origins)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "TaskCollection":
        """Parse raw lines (blank lines skipped); raises ParseError on the first bad line."""
        return cls(parse_task(line) for line in lines if line.strip())

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __getitem__(self, index: int) -> Task:
        return self._tasks[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskCollection):
            return NotImplemented
        return self._tasks == other._tasks

    def __repr__(self) -> str:
        return f"TaskCollection({self._tasks!r})"

    def origin(self, index: int) -> int:
        """Index of the view's `index`-th task in the source collection."""
        return self._origins[index]

    def filter(self, predicate: Callable[[Task], bool]) -> "TaskCollection":
        tasks: List[Task] = []
        origins: List[int] = []
        for task, origin in zip(self._tasks, self._origins):
            if predicate(task):
                tasks.append(task)
                origins.append(origin)
        return TaskCollection(tasks, origins)

    def sorted_by(self, key: Callable[[Task], object]) -> "TaskCollection":
        """Stable sort; the source collection is left untouched."""
        pairs = sorted(zip(self._tasks, self._origins), key=lambda pair: key(pair[0]))
        return TaskCollection([t for t, _ in pairs], [o for _, o in pairs])

    def replace(self, index: int, task: Task) -> None:
        self._tasks[index] = task

    def append(self, task: Task) -> int:
        self._tasks.append(task)
        self._origins.append(len(self._origins))
        return len(self._tasks) - 1

    def index_of_line(self, line: str) -> int:
        """First index whose serialization equals `line`, or -1."""
        for idx, task in enumerate(self._tasks):
            if task.serialize() == line:
                return idx
        return -1

    def lines(self) -> List[str]:
        return [task.serialize() for task in self._tasks]


__all__ = ["TaskCollection"]
