"""
Parallel Processing for FOV Estimation

Per-image analyses share no state; a batch is mapped across a thread
pool and results come back in input order.
"""

import multiprocessing as mp
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Callable, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


class ParallelProcessor:
    """Maps an analysis function over image files on a thread pool"""

    def __init__(self, max_workers: Optional[int] = None):
        self.max_workers = max_workers or mp.cpu_count()
        logger.info(f"Analysis pool size: {self.max_workers} threads")

    def process_batch_parallel(self, items: Sequence[T], processing_func: Callable[[T], R]) -> List[R]:
        """Return processing_func(item) for every item, in input order.

        processing_func must catch its own per-item failures; an exception
        escaping it is re-raised here and ends the batch.
        """
        if not items:
            return []

        workers = min(self.max_workers, len(items))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(processing_func, items))
