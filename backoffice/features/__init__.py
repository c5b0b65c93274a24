"""Repository features package"""

from backoffice.features.base_feature import RepositoryFeature
from backoffice.features.status_flag_feature import StatusFlagFeature
from backoffice.features.timestamp_feature import TimestampFeature

__all__ = ["RepositoryFeature", "TimestampFeature", "StatusFlagFeature"]
