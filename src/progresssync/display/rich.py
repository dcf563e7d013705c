"""Rich-based completion display."""

from __future__ import annotations

from types import TracebackType
from typing import ClassVar

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.progress import TaskID as RichTaskID

from progresssync.contracts.observer import EngineState, SyncObserver


class RichProgressDisplay(SyncObserver):
    """Live terminal bars showing each content item's high-water mark.

    Use as a context manager so the live display is properly started/stopped::

        with RichProgressDisplay() as display:
            session = ContentSession.for_content(..., observer=display)
    """

    _STATE_STYLES: ClassVar[dict[EngineState, str]] = {
        EngineState.UNINITIALIZED: "dim",
        EngineState.AWAITING_FETCH: "yellow",
        EngineState.READY: "green",
        EngineState.CLOSED: "dim",
    }

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._progress = Progress(
            TextColumn("{task.description:>24}"),
            BarColumn(bar_width=30),
            TaskProgressColumn(),
            TextColumn("{task.fields[status]}"),
            console=self._console,
            transient=False,
        )
        self._task_ids: dict[str, RichTaskID] = {}

    # -- context manager --------------------------------------------------

    def __enter__(self) -> RichProgressDisplay:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    # -- SyncObserver implementation --------------------------------------

    def state_changed(self, content_id: str, state: EngineState) -> None:
        style = self._STATE_STYLES.get(state, "")
        self._progress.update(self._task(content_id), status=f"[{style}]{state}[/]" if style else str(state))

    def mark_changed(self, content_id: str, mark: int) -> None:
        # -1 means unknown; the bar shows it as empty.
        self._progress.update(self._task(content_id), completed=max(0, mark))

    def write_issued(self, content_id: str, percentage: int) -> None:
        self._progress.update(self._task(content_id), status=f"[cyan]saving {percentage}%[/]")

    def write_failed(self, content_id: str, percentage: int, error: BaseException) -> None:
        self._progress.update(self._task(content_id), status=f"[red]save of {percentage}% failed[/]")

    def completed(self, content_id: str) -> float | None:
        task_id = self._task_ids.get(content_id)
        if task_id is None:
            return None
        return self._progress.tasks[task_id].completed

    def _task(self, content_id: str) -> RichTaskID:
        task_id = self._task_ids.get(content_id)
        if task_id is None:
            task_id = self._progress.add_task(content_id, total=100, status="")
            self._task_ids[content_id] = task_id
        return task_id
