class StepClock:
    """
    Converts elapsed frame time into a number of algorithm steps.
    Time accumulates between calls; whole delays are drained as steps and
    the remainder carries over, so step rate is independent of frame rate.
    """
    def __init__(self, delay: float):
        if delay <= 0:
            raise ValueError(f"Step delay must be positive, got {delay}")
        self.delay = delay
        self.timer = 0.0

    def advance(self, dt: float) -> int:
        self.timer += dt
        if self.timer < self.delay:
            return 0
        steps = int(self.timer / self.delay)
        self.timer -= steps * self.delay
        return steps

    def reset(self):
        self.timer = 0.0
