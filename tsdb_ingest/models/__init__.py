"""Models package for metric validation and serialization."""

from .metric import (
    MetricTag,
    MetricPoint,
    OpenTSDBMetric,
    OpenTSDBList,
    transform_metric,
    points_to_dataframe
)

__all__ = [
    'MetricTag',
    'MetricPoint',
    'OpenTSDBMetric',
    'OpenTSDBList',
    'transform_metric',
    'points_to_dataframe'
]
