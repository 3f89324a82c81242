"""Trade history reconstruction."""

from src.trader.history.scanback import ScanbackController
from src.trader.history.state import ScanState

__all__ = ["ScanState", "ScanbackController"]
