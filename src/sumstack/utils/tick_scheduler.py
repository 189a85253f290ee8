from __future__ import annotations

from dataclasses import dataclass, field

from sumstack.constants import TICK_INTERVAL


@dataclass(slots=True)
class TickScheduler:
	"""Turns variable frame deltas into a count of fixed-length steps.

	The scheduler only accumulates time while running. ``start`` and ``stop``
	are idempotent; stopping drops any partial step so a resumed countdown
	never fires early.
	"""

	interval: float = TICK_INTERVAL
	max_steps_per_frame: int = 10

	_elapsed: float = field(init=False, default=0.0, repr=False)
	_running: bool = field(init=False, default=False, repr=False)

	def __post_init__(self) -> None:
		if self.interval <= 0.0:
			raise ValueError("interval must be positive")

	@property
	def running(self) -> bool:
		return self._running

	def start(self) -> None:
		if self._running:
			return
		self._running = True
		self._elapsed = 0.0

	def stop(self) -> None:
		self._running = False
		self._elapsed = 0.0

	def advance(self, dt: float) -> int:
		"""Add ``dt`` seconds and return how many whole steps are now due."""
		if not self._running or dt <= 0.0:
			return 0
		self._elapsed += float(dt)
		# Small epsilon so 0.1 + 0.1 + ... frame deltas are not lost to rounding.
		steps = int((self._elapsed + 1e-9) // self.interval)
		if steps <= 0:
			return 0
		self._elapsed = max(0.0, self._elapsed - steps * self.interval)
		if steps > self.max_steps_per_frame:
			steps = self.max_steps_per_frame
			self._elapsed = 0.0
		return steps
