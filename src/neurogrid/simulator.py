from __future__ import annotations

import logging

from .algebra import ToggleMatrix
from .board import BoardState, toggle
from .strategies.base import NoPlanError

logger = logging.getLogger(__name__)


class Simulator:
    def __init__(self, topology: ToggleMatrix):
        self.topology = topology

    def step(self, state: BoardState, action: int) -> BoardState:
        return toggle(state, action)

    def run(self, init: BoardState, policy, T: int):
        s = init
        counts = [s.count_on()]
        actions = []
        for t in range(T):
            if counts[-1] == 0:
                break
            try:
                a = policy.select_action(s, t, counts)
            except NoPlanError as exc:
                # Stop immediately: no action taken, no additional count appended.
                logger.debug("Policy stopped at step %d: %s", t, exc)
                break
            s = self.step(s, a)
            actions.append(a)
            counts.append(s.count_on())
        return s, actions, counts
