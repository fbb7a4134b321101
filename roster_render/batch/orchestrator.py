"""
Batch orchestrator - renders the selected compositions once per roster entry.

Pipeline per run:
1. VALIDATING: resolve the selector, selected compositions, roster lists,
   index range and destination. Read-only; the current selector value is
   captured for restoration.
2. ITERATING: for each roster index, ascending:
     clear queue -> selector = index -> resolve naming -> ensure folder
     -> enqueue one job per selected composition -> start -> await drain
3. RESTORING: write the captured selector value back.
4. DONE / FATAL

Failure policy:
- Every failure is terminal. No retries, no skipping an index.
- Precondition failures abort before anything is mutated.
- Mid-run failures abort the remaining range. Outputs already written
  stay on disk; the queue is left as-is.
- The selector is restored on every exit path once iteration began,
  unless settings.restore_on_failure is False (then only on success).

Rendered outcome is not inspected: a job that fails in the engine still
counts as "done, proceed".

An orchestrator performs ONE run. Create a new one per run.
"""

import logging
import os
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .models import BatchContext, BatchRequest, BatchRunResult, IndexBatchResult, IndexRange
from .state import BatchState, validate_transition
from ..deliver.paths import OutputPathBuilder
from ..errors import BatchError, PreconditionError
from ..execution.base import RenderQueueBackend, RenderStatus
from ..execution.queue import RenderQueueAdapter
from ..project.base import HostProject, ProjectItem
from ..project.registry import ItemRegistry
from ..project.selector import SelectorControl
from ..project.text_source import IndexedTextSource
from ..settings import DEFAULT_RENDER_SETTINGS, RenderSettings

logger = logging.getLogger(__name__)


SUCCESS_MESSAGE = "Rendering completed successfully!"
NO_SELECTION_MESSAGE = (
    "Error: No compositions selected. Please select at least one composition to render."
)
MISSING_LISTS_MESSAGE = "Error: One or more of the required name list compositions not found!"
NO_OUTPUT_FOLDER_MESSAGE = "Error: No output folder selected"


class BatchOrchestrator:
    """
    Drives the render queue across a roster index range.

    Collaborators are injected: the registry over the host project, the
    queue adapter over the host's render queue, and the path builder.
    """

    def __init__(
        self,
        registry: ItemRegistry,
        queue: RenderQueueAdapter,
        settings: RenderSettings = DEFAULT_RENDER_SETTINGS,
        path_builder: Optional[OutputPathBuilder] = None,
    ):
        self.registry = registry
        self.queue = queue
        self.settings = settings
        self.path_builder = path_builder or OutputPathBuilder(settings.container_extension)
        self.state = BatchState.IDLE

    @classmethod
    def for_host(
        cls,
        project: HostProject,
        backend: RenderQueueBackend,
        settings: RenderSettings = DEFAULT_RENDER_SETTINGS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> "BatchOrchestrator":
        """Wire an orchestrator to a host project and render queue."""
        queue = RenderQueueAdapter(
            backend,
            poll_interval=settings.poll_interval_seconds,
            backoff_factor=settings.poll_backoff_factor,
            max_poll_interval=settings.max_poll_interval_seconds,
            sleep=sleep,
        )
        return cls(ItemRegistry(project), queue, settings=settings)

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(self, request: BatchRequest) -> BatchContext:
        """
        Resolve everything a run needs, without mutating anything.

        Project-side checks run first, then the operator inputs (range
        and destination).

        Raises:
            PreconditionError: With the operator-facing message for the
                first unmet precondition
        """
        control, selector, original_value, selected_items, text_source = (
            self.validate_project()
        )

        index_range = IndexRange.create(request.start, request.end, self.settings.roster_size)
        output_root = self._resolve_output_root(request.output_root)

        return BatchContext(
            control=control,
            selector=selector,
            original_selector_value=original_value,
            selected_items=selected_items,
            text_source=text_source,
            index_range=index_range,
            output_root=output_root,
        )

    def validate_project(
        self,
    ) -> Tuple[ProjectItem, SelectorControl, int, List[ProjectItem], IndexedTextSource]:
        """
        Resolve the selector, selection and roster lists.

        Needs no operator input, so it can run before anything is asked.
        The only host interaction with the selector is a read of its
        current value.

        Returns:
            (control, selector, original selector value, selected items,
            text source)

        Raises:
            PreconditionError: First unmet project-side precondition
        """
        s = self.settings

        control = self.registry.require(
            s.control_composition,
            f"Error: Composition '{s.control_composition}' not found!",
        )

        selector_layer = control.layer_by_name(s.selector_layer)
        if selector_layer is None:
            raise PreconditionError(
                f"Error: Layer '{s.selector_layer}' not found in '{s.control_composition}'!"
            )

        selector_effect = selector_layer.effect(s.selector_effect)
        if selector_effect is None:
            raise PreconditionError(
                f"Error: Effect '{s.selector_effect}' not found on '{s.selector_layer}' layer!"
            )

        menu = selector_effect.property(s.selector_property)
        if menu is None:
            raise PreconditionError(
                f"Error: Property '{s.selector_property}' not found on '{s.selector_effect}' effect!"
            )

        selector = SelectorControl(
            menu, label=f"{s.control_composition}/{s.selector_layer}/{s.selector_effect}"
        )
        try:
            original_value = selector.read()
        except (TypeError, ValueError):
            raise PreconditionError(
                f"Error: '{s.selector_property}' on '{s.selector_effect}' does not hold a menu index!"
            )

        selected_items = self.registry.selected_items()
        if not selected_items:
            raise PreconditionError(NO_SELECTION_MESSAGE)

        self.registry.require(
            s.name_list_composition,
            f"Error: Composition '{s.name_list_composition}' not found!",
        )

        first_names, last_names, numbers = (
            self.registry.find_by_name(name) for name in s.roster_compositions
        )
        if first_names is None or last_names is None or numbers is None:
            raise PreconditionError(MISSING_LISTS_MESSAGE)

        return (
            control,
            selector,
            original_value,
            selected_items,
            IndexedTextSource(first_names, last_names, numbers),
        )

    @staticmethod
    def _resolve_output_root(output_root: Optional[str]) -> Path:
        if output_root is None or not str(output_root).strip():
            raise PreconditionError(NO_OUTPUT_FOLDER_MESSAGE)

        root = Path(output_root).expanduser().resolve()
        if not root.is_dir():
            raise PreconditionError(f"Error: Output folder not found: {root}")
        if not os.access(root, os.W_OK):
            raise PreconditionError(f"Error: Output folder is not writable: {root}")
        return root

    # =========================================================================
    # Run
    # =========================================================================

    def run(self, request: BatchRequest) -> BatchRunResult:
        """
        Execute one batch run.

        Never raises for run failures: the returned result carries the
        final state, the failure kind and one human-facing message.

        Raises:
            InvalidStateTransitionError: If this orchestrator already ran
        """
        result = BatchRunResult(
            state=self.state,
            message="",
            start=request.start,
            end=request.end,
            output_root=request.output_root,
        )

        self._transition(BatchState.VALIDATING)
        try:
            context = self.validate(request)
        except PreconditionError as e:
            logger.error(f"[Batch] Precondition failed: {e.message}")
            self._transition(BatchState.FATAL)
            return self._finish(result, failure=e, message=e.message)

        result.selector_original = context.original_selector_value
        result.output_root = str(context.output_root)

        logger.info(
            f"[Batch] Rendering {len(context.selected_items)} composition(s) for entries "
            f"{context.index_range.start}..{context.index_range.end} into {context.output_root}"
        )

        self._transition(BatchState.ITERATING)
        failure: Optional[BatchError] = None
        try:
            for index in context.index_range.indices():
                self._render_index(context, index, result)
        except BatchError as e:
            failure = e
        except KeyboardInterrupt:
            failure = BatchError("Interrupted by operator")
        except Exception as e:
            logger.exception("[Batch] Unexpected failure during iteration")
            failure = BatchError(str(e))

        if failure is not None:
            logger.error(f"[Batch] Aborted: {failure.message}")

        if failure is None or self.settings.restore_on_failure:
            self._transition(BatchState.RESTORING)
            failure = self._restore(context, result, failure)
        else:
            logger.warning(
                "[Batch] Selector left at its last written value "
                "(restore_on_failure disabled)"
            )

        if failure is None:
            self._transition(BatchState.DONE)
            logger.info(f"[Batch] {SUCCESS_MESSAGE}")
            return self._finish(result, message=SUCCESS_MESSAGE)

        self._transition(BatchState.FATAL)
        return self._finish(result, failure=failure, message=f"Error in script: {failure.message}")

    def _render_index(
        self,
        context: BatchContext,
        index: int,
        result: BatchRunResult,
    ) -> IndexBatchResult:
        """
        Render every selected composition for one roster index.

        The index is recorded on the result once its folder exists, so a
        failure while enqueuing still shows the jobs left in the queue.
        """
        s = self.settings

        self.queue.clear()
        context.selector.write(index)

        naming = context.text_source.naming_at(index)
        folder = self.path_builder.folder_for(context.output_root, naming)

        batch = IndexBatchResult(index=index, naming=naming, folder=str(folder))
        result.batches.append(batch)

        for item in context.selected_items:
            destination = self.path_builder.file_for(folder, item.name, index)
            batch.jobs.append(
                self.queue.enqueue(item, s.output_template, destination, index)
            )

        if self.queue.size > 0:
            self.queue.start()
            batch.drain = self.queue.await_drain()

            for job, (_, status) in zip(batch.jobs, self.queue.statuses()):
                job.final_status = status
                if status in (RenderStatus.FAILED, RenderStatus.STOPPED):
                    logger.warning(
                        f"[Batch] {job.source_name} for entry {index} ended {status.value}; continuing"
                    )

        logger.info(
            f"[Batch] Entry {index}/{context.index_range.end} -> {folder.name} "
            f"({len(batch.jobs)} job(s))"
        )
        return batch

    def _restore(
        self,
        context: BatchContext,
        result: BatchRunResult,
        failure: Optional[BatchError],
    ) -> Optional[BatchError]:
        """
        Write the captured selector value back.

        Returns:
            The failure to report: the original one if there was one,
            otherwise a failure of the restoring write itself
        """
        try:
            context.selector.write(context.original_selector_value)
            result.selector_restored = True
            logger.info(
                f"[Batch] Selector restored to {context.original_selector_value}"
            )
        except Exception as e:
            logger.error(f"[Batch] Failed to restore selector: {e}")
            if failure is None:
                return BatchError(f"Failed to restore selector: {e}")
        return failure

    def _transition(self, target: BatchState) -> None:
        validate_transition(self.state, target)
        logger.debug(f"[Batch] {self.state.value} -> {target.value}")
        self.state = target

    def _finish(
        self,
        result: BatchRunResult,
        message: str,
        failure: Optional[BatchError] = None,
    ) -> BatchRunResult:
        result.state = self.state
        result.message = message
        result.failure_kind = failure.kind if failure is not None else None
        result.completed_at = datetime.now()
        return result
