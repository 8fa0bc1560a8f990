"""Sequential chunk loop committing a checkpoint together with every chunk."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import batched, islice
from typing import TYPE_CHECKING

from docbridge.domain.checkpoint import StepCheckpoint
from docbridge.domain.errors import DeferredWriteFailedError
from docbridge.domain.ports.chunking import ChunkListener

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from docbridge.domain.ports.chunking import ItemWriter
    from docbridge.domain.ports.unit_of_work import StepUnitOfWork

DEFAULT_CHUNK_SIZE = 100

log = logging.getLogger(__name__)


@dataclass(slots=True)
class StepResult:
    """Outcome of one run of a chunked step."""

    step_name: str
    chunks: int
    items: int
    resumed_from: int


def run_chunked_step[TItem](
    *,
    step_name: str,
    items: Iterable[TItem],
    writer: ItemWriter[TItem],
    unit_of_work_factory: Callable[[], StepUnitOfWork],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    listeners: Sequence[ChunkListener] = (),
) -> StepResult:
    """Write ``items`` chunk by chunk, each chunk in its own unit of work.

    Items already covered by the step's checkpoint are skipped, so a failed run
    can be restarted with the same input. Chunk listeners (including ``writer``
    when it implements the hooks) run around every chunk; ``after_chunk`` runs
    once the chunk's transaction has ended, which is where deferred write
    failures surface.
    """

    if chunk_size < 1:
        raise ValueError("chunk_size must be positive")

    hooks: list[ChunkListener] = list(listeners)
    if isinstance(writer, ChunkListener) and writer not in hooks:
        hooks.append(writer)

    resumed_from = _committed_items(step_name, unit_of_work_factory)
    if resumed_from:
        log.info("Resuming step %s after %s committed item(s)", step_name, resumed_from)

    chunks = 0
    written = 0
    for chunk in batched(islice(items, resumed_from, None), chunk_size):
        for hook in hooks:
            hook.before_chunk()

        with unit_of_work_factory() as uow:
            writer.write(chunk)
            checkpoints = uow.repositories.checkpoints
            checkpoint = checkpoints.get(step_name)
            if checkpoint is None:
                checkpoint = StepCheckpoint(step_name=step_name)
                checkpoints.add(checkpoint)
            checkpoint.advance(len(chunk))
            chunk_number = checkpoint.committed_chunks
            uow.commit()

        chunks += 1
        written += len(chunk)
        try:
            for hook in hooks:
                hook.after_chunk()
        except DeferredWriteFailedError:
            log.error(  # noqa: TRY400
                "Step %s aborted after chunk %s: its checkpoint is committed but the "
                "document store write failed; reconcile before restarting",
                step_name,
                chunk_number,
            )
            raise

    log.info("Step %s finished: chunks=%s, items=%s", step_name, chunks, written)
    return StepResult(step_name=step_name, chunks=chunks, items=written, resumed_from=resumed_from)


def _committed_items(
    step_name: str, unit_of_work_factory: Callable[[], StepUnitOfWork]
) -> int:
    with unit_of_work_factory() as uow:
        checkpoint = uow.repositories.checkpoints.get(step_name)
        return checkpoint.committed_items if checkpoint is not None else 0
