from pyorbit.controllers.page_loader import PageLoadController
from pyorbit.controllers.detail import DetailRecordController, DetailRecord, DetailState

__all__ = [
    "PageLoadController",
    "DetailRecordController",
    "DetailRecord",
    "DetailState",
]
