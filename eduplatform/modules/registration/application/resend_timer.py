# 📄 File: eduplatform/modules/registration/application/resend_timer.py
# 🧭 Purpose (Layman Explanation):
# The "you can ask for a new code in 59, 58, 57... seconds" countdown on the
# email verification screen.
# 🧪 Purpose (Technical Summary):
# Cooperative countdown backed by at most one asyncio task. Restarting cancels the
# previous countdown before the next one begins; cancellation is idempotent.
# 🔗 Dependencies:
# asyncio, logging
# 🔄 Connected Modules / Calls From:
# Registration wizard

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN_SECONDS = 60


class ResendCooldownTimer:
    """
    Countdown that enables "resend code" when it reaches zero.

    ``tick()`` advances the countdown by one second and can be driven directly;
    ``start()`` runs it on the event loop, one tick per ``interval`` seconds.
    ``can_resend`` turns true exactly once per cycle.
    """

    def __init__(
        self,
        duration: int = DEFAULT_COOLDOWN_SECONDS,
        interval: float = 1.0,
        on_expire: Optional[Callable[[], None]] = None
    ):
        if duration < 0:
            raise ValueError("Cooldown duration must not be negative")
        self.duration = duration
        self.interval = interval
        self.on_expire = on_expire

        self.seconds_remaining = duration
        self.can_resend = False
        self.expirations = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> None:
        """One second elapsed"""
        if self.seconds_remaining <= 0:
            return
        self.seconds_remaining -= 1
        if self.seconds_remaining == 0:
            self._expire()

    def _expire(self) -> None:
        if self.can_resend:
            return
        self.can_resend = True
        self.expirations += 1
        logger.debug("Resend cooldown finished")
        if self.on_expire is not None:
            self.on_expire()

    def reset(self) -> None:
        """Cancel any countdown and rewind to the full duration, resend disabled."""
        self.cancel()
        self.seconds_remaining = self.duration
        self.can_resend = False

    def start(self) -> None:
        """
        Restart the countdown on the running event loop.

        The previous countdown task, if any, is cancelled first.
        """
        self.reset()
        if self.seconds_remaining == 0:
            self._expire()
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        """Stop the countdown where it is. Safe to call repeatedly."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    async def _run(self) -> None:
        try:
            while self.seconds_remaining > 0:
                await asyncio.sleep(self.interval)
                self.tick()
        finally:
            if self._task is asyncio.current_task():
                self._task = None
