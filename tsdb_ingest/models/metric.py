"""Module containing Pydantic models for metric records and canonical points."""

from typing import Iterator, List
from pydantic import BaseModel, Field
import pandas as pd

class MetricTag(BaseModel):
    """A key/value annotation attached to a metric."""

    name: str = Field(min_length=1)
    value: str = Field(min_length=1)

class MetricPoint(BaseModel):
    """Canonical metric point handed to the rest of the pipeline."""

    name: str
    value: float
    timestamp: int
    tags: List[MetricTag] = Field(default_factory=list)

class OpenTSDBMetric(BaseModel):
    """A single metric parsed from an OpenTSDB put line.

    ``timestamp`` is always in seconds; millisecond input is normalized by the
    parser.
    """

    name: str = Field(min_length=1)
    value: float
    timestamp: int
    tags: List[MetricTag] = Field(default_factory=list)

def transform_metric(metric: OpenTSDBMetric) -> MetricPoint:
    """Relabel an OpenTSDB metric as a canonical metric point."""
    return MetricPoint(
        name=metric.name,
        value=metric.value,
        timestamp=metric.timestamp,
        tags=list(metric.tags),
    )

class OpenTSDBList(BaseModel):
    """Ordered batch of OpenTSDB metrics, one per input line."""

    metrics: List[OpenTSDBMetric] = Field(default_factory=list)

    def __iter__(self) -> Iterator[OpenTSDBMetric]:  # type: ignore[override]
        return iter(self.metrics)

    def __len__(self) -> int:
        return len(self.metrics)

    def __getitem__(self, index: int) -> OpenTSDBMetric:
        return self.metrics[index]

    def transform(self) -> List[MetricPoint]:
        """Transform the batch into canonical metric points, preserving order.

        Returns:
            List of MetricPoint objects; empty when the batch is empty
        """
        return [transform_metric(metric) for metric in self.metrics]

def points_to_dataframe(points: List[MetricPoint]) -> pd.DataFrame:
    """Flatten metric points into a DataFrame.

    Each distinct tag name becomes a ``tag.<name>`` column. When a point
    carries the same tag name more than once, the last value is shown. A
    point without a given tag holds None in that column.

    Args:
        points: Canonical metric points

    Returns:
        DataFrame with one row per point, in input order
    """
    data = {
        'name': [point.name for point in points],
        'value': [point.value for point in points],
        'timestamp': [point.timestamp for point in points],
    }

    tag_names: List[str] = []
    for point in points:
        for tag in point.tags:
            if tag.name not in tag_names:
                tag_names.append(tag.name)

    flat_tags = [{tag.name: tag.value for tag in point.tags} for point in points]
    for tag_name in tag_names:
        data[f'tag.{tag_name}'] = pd.Series(
            [tags.get(tag_name) for tags in flat_tags],
            dtype=object
        )

    return pd.DataFrame(data, columns=list(data.keys()))
