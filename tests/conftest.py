import json

import matplotlib
matplotlib.use("Agg")

import pytest

from data.synthetic import make_linear_dataset
from utils.config import PipelineConfig


HOUSE_RECORDS = [
    {"Price": 100.0, "AvgAreaNumberofRooms": 3.0},
    {"Price": None, "AvgAreaNumberofRooms": 4.0},
    {"Price": 250.0, "AvgAreaNumberofRooms": 6.0},
    {"AvgAreaNumberofRooms": 5.0},
    {"Price": 180.0, "AvgAreaNumberofRooms": None},
    {"Price": 320.0, "AvgAreaNumberofRooms": 8.0},
]


class FakeResponse:
    def __init__(self, payload=None, status_error=None):
        self.payload = payload
        self.status_error = status_error

    def raise_for_status(self):
        if self.status_error is not None:
            raise self.status_error

    def json(self):
        return self.payload


@pytest.fixture
def house_records():
    return [dict(r) for r in HOUSE_RECORDS]


@pytest.fixture
def house_json(tmp_path, house_records):
    path = tmp_path / "house.json"
    path.write_text(json.dumps(house_records))
    return str(path)


@pytest.fixture
def linear_dataset():
    return make_linear_dataset(n=50, lo=1.0, hi=10.0, slope=2.0, noise=0.5, seed=0,
                               x_label="Rooms", y_label="Price")


@pytest.fixture
def pipeline_config(tmp_path):
    cfg = PipelineConfig(seed=0)
    cfg.plots.output_dir = str(tmp_path / "figures")
    cfg.plots.dpi = 40
    cfg.plots.update_every = 5
    return cfg


@pytest.fixture
def fake_response():
    return FakeResponse
