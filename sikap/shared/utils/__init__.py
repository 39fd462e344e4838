"""Shared utilities: datetime and generators."""

from sikap.shared.utils.datetime import ensure_utc, epoch_millis, utc_now
from sikap.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "epoch_millis",
]
