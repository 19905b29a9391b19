"""Drive the editor into a target layout using toggle-only host commands.

The host has no "set layout" command. Editor mode is a binary toggle, so one
flip always lands in the right mode. Visible panes cycle through a small set
of states of unknown period, so they are toggled and re-read until they match
or the toggle budget runs out.
"""

import logging

from pinlayout.config.constants import (
    CMD_TOGGLE_EDITORS,
    CMD_TOGGLE_VISIBLE_PANES,
    GLOBAL_SOURCE_VIEW,
    GLOBAL_VISIBLE_PANES,
    MAX_PANE_TOGGLES,
)
from pinlayout.models.layouts import LayoutSelection, normalize_panes

logger = logging.getLogger(__name__)


class PaneConvergence:
    """Converge the host editor state onto a LayoutSelection."""

    def __init__(self, host, max_toggles: int = MAX_PANE_TOGGLES):
        if max_toggles < 1:
            raise ValueError(f"max_toggles must be >= 1, got {max_toggles}")
        self.host = host
        self.max_toggles = max_toggles

    def read_source_view(self) -> bool:
        return bool(self.host.get_global_setting(GLOBAL_SOURCE_VIEW))

    def read_visible_panes(self) -> frozenset:
        return normalize_panes(self.host.get_global_setting(GLOBAL_VISIBLE_PANES))

    def apply(self, target: LayoutSelection) -> bool:
        """Switch the editor to the target layout.

        Returns:
            True if the editor ended up in the target layout, False if the
            pane toggle budget ran out first. Running out is not an error:
            the host's pane cycle may not contain the target at all.
        """
        if not target.is_recognized():
            return True

        if self.read_source_view() != target.uses_source_view():
            self.host.execute_command(CMD_TOGGLE_EDITORS)

        if not target.uses_source_view():
            return True

        wanted = target.visible_panes()
        for _ in range(self.max_toggles):
            if self.read_visible_panes() == wanted:
                return True
            self.host.execute_command(CMD_TOGGLE_VISIBLE_PANES)

        converged = self.read_visible_panes() == wanted
        if not converged:
            logger.debug(
                f"Panes did not reach {sorted(wanted)} after {self.max_toggles} toggles"
            )
        return converged
