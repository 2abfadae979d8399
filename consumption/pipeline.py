"""
Composition helpers and the sample run over the bundled dataset.
"""

from __future__ import annotations

import sys
from functools import reduce
from typing import Any, Callable, Dict, Optional, TextIO, TypeVar

from .aggregate import average_therms
from .filters import con_ed_only, national_only
from .loader import load_csv
from .logging_config import get_logger
from .parse import parse_csv
from .paths import retrieve_file_path
from .rules import CON_ED, DEFAULT_DATASET, NATIONAL_GRID

log = get_logger(__name__)

T = TypeVar("T")


def log_and_return(value: T, stream: Optional[TextIO] = None) -> T:
    """Print ``value`` and hand it back unchanged."""
    print(value, file=stream if stream is not None else sys.stdout)
    return value


def pipe(*steps: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Compose single-argument callables left to right."""
    if not steps:
        raise ValueError("pipe() needs at least one step")

    def run(value: Any) -> Any:
        return reduce(lambda acc, step: step(acc), steps, value)

    return run


def run_sample(file_name: str = DEFAULT_DATASET) -> Dict[str, float]:
    """
    Walk the bundled dataset through every stage and print what comes out.

    Returns the average therms per provider.
    """
    log.info("sample_run_started", file_name=file_name)

    log_and_return(load_csv(retrieve_file_path(file_name)))

    read_dataset = pipe(retrieve_file_path, load_csv, parse_csv)
    pipe(read_dataset, national_only, log_and_return)(file_name)

    dataset = read_dataset(file_name)
    averages = {
        NATIONAL_GRID: log_and_return(average_therms(national_only(dataset))),
        CON_ED: log_and_return(average_therms(con_ed_only(dataset))),
    }

    log.info("sample_run_finished", averages=averages)
    return averages
