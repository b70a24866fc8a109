"""
Phased cascade deletion.

A cascade is a list of phases, each deleting one kind of child record.
Phases run strictly in order and each commits on its own, so a failure
leaves earlier phases deleted and later ones untouched. Every phase is a
filtered delete: records already gone are simply not matched, which makes
re-running a half-finished cascade safe.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List

from django.db import DatabaseError, transaction
from django.db.models import QuerySet

from .exceptions import CascadeDeleteError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CascadePhase:
    """One step of a cascade: a name and a callable building its queryset."""

    name: str
    queryset: Callable[[], QuerySet]


def run_cascade(*, label: str, phases: List[CascadePhase]) -> Dict[str, int]:
    """
    Run cascade phases in order.

    Must not be called inside an outer ``transaction.atomic`` block if the
    phases are expected to commit independently.

    Args:
        label: Human readable description used in logs and errors
        phases: Phases in the order they must run

    Returns:
        Mapping of phase name to number of rows deleted

    Raises:
        CascadeDeleteError: If any phase fails
    """
    completed = []
    deleted = {}

    for phase in phases:
        try:
            with transaction.atomic():
                count, _ = phase.queryset().delete()
        except DatabaseError as e:
            logger.error(
                "Cascade %s failed in phase %s after %s: %s",
                label, phase.name, completed, e,
            )
            raise CascadeDeleteError(
                f"Deleting {label} stopped at phase '{phase.name}'",
                failed_phase=phase.name,
                completed_phases=completed,
            ) from e

        completed.append(phase.name)
        deleted[phase.name] = count
        logger.info("Cascade %s: phase %s deleted %d row(s)", label, phase.name, count)

    return deleted
