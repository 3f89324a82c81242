"""
Scan state for trade history reconstruction.

The state is owned by one ScanbackController and only transitioned through
the methods below:

    IDLE --begin--> SCANNING_BACKWARD --anchor_on--> SCANNING_FORWARD
    SCANNING_* --finish--> DONE --reset--> IDLE
    any --reset--> IDLE
"""

from datetime import datetime

from pydantic import BaseModel, Field

from src.trader.enums import ScanPhase
from src.trader.model.trade import TradeRecord


class ScanState(BaseModel):
    """
    Mutable state of a single history scan.

    Exactly one scan may be active per controller. Accumulated trades are
    kept in ascending id order with no duplicates.
    """

    phase: ScanPhase = ScanPhase.IDLE
    since: datetime | None = None
    anchor_id: int | None = Field(
        default=None, description="Oldest trade id reached by the backward pass"
    )
    target_id: int | None = Field(
        default=None, description="Newest trade id accumulated so far"
    )
    accumulated: list[TradeRecord] = Field(default_factory=list)
    scan_attempt_count: int = 0
    cursor_origin: int | None = None

    @property
    def active(self) -> bool:
        """Check if a scan is in progress."""
        return self.phase in {ScanPhase.SCANNING_BACKWARD, ScanPhase.SCANNING_FORWARD}

    def _require(self, *phases: ScanPhase) -> None:
        if self.phase not in phases:
            expected = ", ".join(p.value for p in phases)
            raise RuntimeError(
                f"Invalid scan transition from {self.phase.value} (expected {expected})"
            )

    def begin(self, since: datetime) -> None:
        """Start a scan for history since an instant."""
        self._require(ScanPhase.IDLE)
        self.phase = ScanPhase.SCANNING_BACKWARD
        self.since = since

    def next_backward_cursor(
        self, oldest_id: int, batch_size: int, max_scan_attempts: int
    ) -> int:
        """
        Compute the `after` cursor of the next older page.

        The cursor walks back from a fixed origin by one page per attempt.
        The origin is rebased on the oldest id seen after max_scan_attempts
        pages, which bounds the drift short pages introduce. The cursor never
        points above the oldest id already seen.
        """
        self._require(ScanPhase.SCANNING_BACKWARD)
        if self.cursor_origin is None or self.scan_attempt_count >= max_scan_attempts:
            self.cursor_origin = oldest_id
            self.scan_attempt_count = 0
        cursor = self.cursor_origin - batch_size * self.scan_attempt_count
        self.scan_attempt_count += 1
        return max(min(cursor, oldest_id), 1)

    def anchor_on(self, trade_id: int) -> None:
        """Record the anchor and turn around."""
        self._require(ScanPhase.SCANNING_BACKWARD)
        self.anchor_id = trade_id
        self.phase = ScanPhase.SCANNING_FORWARD

    def accumulate(self, page: list[TradeRecord]) -> int:
        """
        Append a newest-first page in chronological order.

        Trades already accumulated are skipped, so overlapping pages never
        produce duplicates.

        Returns:
            The newest trade id accumulated so far

        """
        self._require(ScanPhase.SCANNING_FORWARD)
        last_id = self.accumulated[-1].id if self.accumulated else None
        for trade in reversed(page):
            if last_id is None or trade.id > last_id:
                self.accumulated.append(trade)
                last_id = trade.id
        if last_id is None:
            raise RuntimeError("Cannot scan forward from an empty anchor page")
        self.target_id = last_id
        return last_id

    def finish(self) -> list[TradeRecord]:
        """Complete the scan and hand out the accumulated trades."""
        self._require(ScanPhase.SCANNING_BACKWARD, ScanPhase.SCANNING_FORWARD)
        self.phase = ScanPhase.DONE
        return sorted(self.accumulated, key=lambda trade: trade.timestamp)

    def reset(self) -> None:
        """Return to IDLE, dropping everything accumulated."""
        self.phase = ScanPhase.IDLE
        self.since = None
        self.anchor_id = None
        self.target_id = None
        self.accumulated = []
        self.scan_attempt_count = 0
        self.cursor_origin = None
