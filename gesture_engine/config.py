"""
Configuration management for hand gesture recognition system.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass, field, fields

from .types import CONFIDENCE_CEILING, CONFIDENCE_FLOOR


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30
    poll_interval_ms: int = 100  # how often the driving loop feeds the engine


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int = 2
    model_complexity: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


@dataclass
class ClassifierConfig:
    """Per-frame geometric thresholds, in normalized frame units."""
    thumb_offset_min: float = 0.05  # thumb tip vs index MCP, horizontal
    ok_distance_max: float = 0.08  # thumb tip to index tip


@dataclass
class ConfidenceConfig:
    """Landmark quality scoring."""
    visible_min: float = 0.1
    visible_max: float = 0.9
    stable_z_max: float = 0.2
    base: float = 0.7
    visibility_weight: float = 0.2
    stability_weight: float = 0.1
    min_confidence: float = 0.5
    max_confidence: float = 0.95

    def __post_init__(self):
        if not CONFIDENCE_FLOOR <= self.min_confidence <= self.max_confidence <= CONFIDENCE_CEILING:
            raise ValueError(
                f"confidence clamp [{self.min_confidence}, {self.max_confidence}] must be an "
                f"ordered range within [{CONFIDENCE_FLOOR}, {CONFIDENCE_CEILING}]"
            )
        if self.visible_min >= self.visible_max:
            raise ValueError("visible_min must be below visible_max")


@dataclass
class StabilizerConfig:
    """Majority vote and debounce settings."""
    buffer_size: int = 5
    required_count: int = 3
    cooldown_ms: int = 800

    def __post_init__(self):
        if self.buffer_size < 1:
            raise ValueError(f"buffer_size must be at least 1, got {self.buffer_size}")
        if not 1 <= self.required_count <= self.buffer_size:
            raise ValueError(
                f"required_count must be within 1..{self.buffer_size}, got {self.required_count}"
            )
        if self.cooldown_ms < 0:
            raise ValueError(f"cooldown_ms must not be negative, got {self.cooldown_ms}")


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool = True
    mirror: bool = True  # selfie view, applied only when drawing
    window_name: str = "Gesture Engine"
    min_confidence: float = 0.7  # events below this are not shown


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    confidence: ConfidenceConfig = field(default_factory=ConfidenceConfig)
    stabilizer: StabilizerConfig = field(default_factory=StabilizerConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses config.default.yaml

    Returns:
        Configuration object with all settings
    """
    if path is None:
        # Use default config file in project root
        project_root = Path(__file__).parent.parent
        path = project_root / "config.default.yaml"

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return _dict_to_config(data)


def _section(cls, data: Optional[Dict[str, Any]]):
    """Build a section dataclass, keeping defaults for missing keys."""
    data = data or {}
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")
    return cls(**data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    return Cfg(
        camera=_section(CameraConfig, data.get('camera')),
        mediapipe=_section(MediaPipeConfig, data.get('mediapipe')),
        classifier=_section(ClassifierConfig, data.get('classifier')),
        confidence=_section(ConfidenceConfig, data.get('confidence')),
        stabilizer=_section(StabilizerConfig, data.get('stabilizer')),
        display=_section(DisplayConfig, data.get('display')),
        logging=_section(LoggingConfig, data.get('logging')),
    )
