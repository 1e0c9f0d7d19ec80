"""Configuration settings for outs and equity analysis."""

from dataclasses import asdict, dataclass, field
from pathlib import Path

import yaml


@dataclass
class EnumerationConfig:
    """Exhaustive flop/turn enumeration."""

    workers: int = 1  # >1 splits runouts across a process pool


@dataclass
class MonteCarloConfig:
    """Pre-flop Monte Carlo sampling."""

    iterations: int = 10_000
    seed: int | None = None
    workers: int = 1


@dataclass
class OutputConfig:
    """Console, logging and persistence options."""

    show_progress: bool = True
    describe: bool = True
    show_outs: bool = False
    results_path: str | None = None
    log_level: str = "WARNING"
    log_file: str | None = None


@dataclass
class Config:
    """Complete configuration."""

    enumeration: EnumerationConfig = field(default_factory=EnumerationConfig)
    monte_carlo: MonteCarloConfig = field(default_factory=MonteCarloConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(path: str | Path) -> Config:
    """Load configuration from YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    config = Config()

    if "enumeration" in data:
        config.enumeration = EnumerationConfig(**data["enumeration"])
    if "monte_carlo" in data:
        config.monte_carlo = MonteCarloConfig(**data["monte_carlo"])
    if "output" in data:
        config.output = OutputConfig(**data["output"])

    return config


def save_config(config: Config, path: str | Path) -> None:
    """Save configuration to YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "enumeration": asdict(config.enumeration),
        "monte_carlo": asdict(config.monte_carlo),
        "output": asdict(config.output),
    }

    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Default configuration
DEFAULT_CONFIG = Config()
