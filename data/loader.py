import json
import os
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
import requests

from utils.config import DatasetConfig
from utils.errors import DataFetchError


@dataclass
class Point:
    x_value: float
    y_value: float


@dataclass
class Dataset:
    """
    Cleaned (x, y) points plus the axis names used for plotting.
    """
    points: List[Point] = field(default_factory=list)
    x_label: str = "x"
    y_label: str = "y"

    def __len__(self):
        return len(self.points)

    def xs(self):
        return np.array([p.x_value for p in self.points], dtype=np.float64)

    def ys(self):
        return np.array([p.y_value for p in self.points], dtype=np.float64)


def _is_url(source):
    return source.startswith("http://") or source.startswith("https://")


def fetch_records(source, timeout=30.0):
    """
    Read the raw JSON records from an http(s) URL or a local file.

    Any network, HTTP status or decoding failure is raised as DataFetchError.
    """
    try:
        if _is_url(source):
            resp = requests.get(source, timeout=timeout)
            resp.raise_for_status()
            payload = resp.json()
        else:
            with open(os.path.expanduser(source), "r", encoding="utf-8") as f:
                payload = json.load(f)
    except requests.JSONDecodeError as e:
        raise DataFetchError(source, f"invalid JSON payload ({e})") from e
    except requests.RequestException as e:
        raise DataFetchError(source, str(e)) from e
    except (OSError, ValueError) as e:
        raise DataFetchError(source, f"invalid JSON payload ({e})") from e

    if not isinstance(payload, list):
        raise DataFetchError(source, f"expected a JSON array, got {type(payload).__name__}")
    return payload


def clean_records(records, x_field, y_field, source="<records>"):
    """
    Project each record to a Point, dropping records with a missing x or y.
    """
    points = []
    for i, rec in enumerate(records):
        if not isinstance(rec, dict):
            raise DataFetchError(source, f"record {i} is not an object")
        x = rec.get(x_field)
        y = rec.get(y_field)
        if x is None or y is None:
            continue
        for name, v in ((x_field, x), (y_field, y)):
            # bool is an int subclass, JSON true must not become 1.0
            if isinstance(v, bool) or not isinstance(v, (int, float)):
                raise DataFetchError(source, f"record {i} has a non-numeric value ({name}={v!r})")
        points.append(Point(x_value=float(x), y_value=float(y)))
    return points


def load_dataset(source: Optional[str] = None, config: Optional[DatasetConfig] = None) -> Dataset:
    cfg = config or DatasetConfig()
    src = source or cfg.source
    records = fetch_records(src, timeout=cfg.timeout)
    points = clean_records(records, cfg.x_field, cfg.y_field, source=src)
    return Dataset(points=points, x_label=cfg.x_label, y_label=cfg.y_label)
