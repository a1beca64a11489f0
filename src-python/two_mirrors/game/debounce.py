"""
Copyright 2026 The two-mirrors authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import math
import time
from typing import Callable, Optional


class Debouncer:
    """
    Single-shot timer that is restarted by every request.

    Nothing runs in the background: the owner calls poll() from its event
    loop, and poll() reports True once when the delay since the latest
    request has elapsed. A newer request supersedes an older one.

    Attributes:
        delay (float): Seconds between the latest request and firing
        clock (callable): Monotonic clock returning seconds
    """

    def __init__(self, delay: float, clock: Callable[[], float] = time.monotonic) -> None:
        if not math.isfinite(delay) or delay < 0:
            raise ValueError(f"delay must be a non-negative number, got {delay}")
        self.delay = delay
        self.clock = clock
        self._deadline: Optional[float] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    @property
    def generation(self) -> int:
        """Number of requests made so far."""
        return self._generation

    def request(self) -> int:
        """
        Start (or restart) the timer.

        Returns:
            The generation of this request
        """
        self._generation += 1
        self._deadline = self.clock() + self.delay
        return self._generation

    def cancel(self) -> None:
        self._deadline = None

    def poll(self) -> bool:
        """Return True once if the latest request is due, False otherwise."""
        if self._deadline is None or self.clock() < self._deadline:
            return False
        self._deadline = None
        return True
