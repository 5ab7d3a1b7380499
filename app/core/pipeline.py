"""
Ordered, fail-fast step runner used by the account flows.

A step is a callable taking the previous step's output and returning the input
of the next one. A step fails by raising; the first failure stops the run and
propagates unchanged, and nothing already applied is undone.
"""
from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

Step = Callable[[Any], Any]


def step_name(step: Step) -> str:
    name = getattr(step, "__name__", None)
    if name is None:
        name = getattr(getattr(step, "func", None), "__name__", repr(step))
    return name


def run_steps(value: Any, *steps: Step) -> Any:
    for step in steps:
        logger.debug("running step %s", step_name(step))
        value = step(value)
    return value
