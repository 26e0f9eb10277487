from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterator


class RunState(Enum):
    CLEAR = "clear"
    INITIALIZED = "initialized"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class StepAlgorithm(ABC):
    """
    An algorithm that advances one unit of work per `step()` call.
    Every step leaves the object in a resumable state, so a caller can stop
    stepping at any point and pick up later (or call `restart()`).
    """
    def __init__(self):
        self.state = RunState.CLEAR
        self.step_count = 0

    @abstractmethod
    def initialize(self):
        pass

    @abstractmethod
    def step(self):
        pass

    @abstractmethod
    def restart(self):
        pass

    def is_done(self) -> bool:
        return self.state is RunState.DONE

    def run(self) -> Iterator[RunState]:
        """
        Yields the run state after every step until DONE.
        The renderer pulls from this with next() to interleave work with drawing.
        """
        while not self.is_done():
            self.step()
            yield self.state

    def run_all(self):
        """Helper to run the algorithm to completion."""
        for _ in self.run():
            pass
