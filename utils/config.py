from dataclasses import dataclass, field

HOUSE_DATA_URL = "https://raw.githubusercontent.com/meetnandu05/ml1/master/house.json"


@dataclass
class DatasetConfig:
    source: str = HOUSE_DATA_URL
    x_field: str = "AvgAreaNumberofRooms"
    y_field: str = "Price"
    x_label: str = "Rooms"
    y_label: str = "Price"
    timeout: float = 30.0  # seconds, for http sources


@dataclass
class TrainingConfig:
    epochs: int = 20
    batch_size: int = 28
    shuffle: bool = True

    # Adam
    learning_rate: float = 0.001
    beta1: float = 0.9
    beta2: float = 0.999
    epsilon: float = 1e-7

    verbose_every: int = 5


@dataclass
class PredictionConfig:
    n_points: int = 100


@dataclass
class PlotConfig:
    enabled: bool = True
    output_dir: str = "."
    dpi: int = 150
    height: float = 4.0
    update_every: int = 1  # redraw training curves every N epochs


@dataclass
class PipelineConfig:
    seed: int = 42
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    training: TrainingConfig = field(default_factory=TrainingConfig)
    prediction: PredictionConfig = field(default_factory=PredictionConfig)
    plots: PlotConfig = field(default_factory=PlotConfig)
