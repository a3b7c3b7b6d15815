"""
Design Run Context
Per-run ID counters plus the constants and catalog a run uses
"""

import itertools

from .catalog import Catalog
from .design_rules import DEFAULT_CONSTANTS


class DesignContext:
    """
    State scoped to a single design run.

    IDs ('H-1', 'Z-1', 'P-1', ...) restart for every context, so they are
    only meaningful within the design that produced them.
    """

    def __init__(self, constants=None, catalog=None):
        self.constants = constants or DEFAULT_CONSTANTS
        self.catalog = catalog or Catalog()
        self._head_counter = itertools.count(1)
        self._zone_counter = itertools.count(1)
        self._pipe_counter = itertools.count(1)

    def next_head_id(self):
        return f"H-{next(self._head_counter)}"

    def next_zone_number(self):
        return next(self._zone_counter)

    def next_pipe_id(self):
        return f"P-{next(self._pipe_counter)}"
