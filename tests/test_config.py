"""
Test cases for configuration loading.
"""
import tempfile
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gesture_engine.config import (
    Cfg, ConfidenceConfig, StabilizerConfig, load_config,
)


class TestLoadConfig(unittest.TestCase):
    """Test YAML loading into dataclasses."""

    def _write(self, text: str) -> str:
        tmp = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False)
        tmp.write(text)
        tmp.close()
        self.addCleanup(Path(tmp.name).unlink)
        return tmp.name

    def test_default_config(self):
        cfg = load_config()
        self.assertEqual(cfg.stabilizer.buffer_size, 5)
        self.assertEqual(cfg.stabilizer.required_count, 3)
        self.assertEqual(cfg.stabilizer.cooldown_ms, 800)
        self.assertEqual(cfg.classifier.thumb_offset_min, 0.05)
        self.assertEqual(cfg.confidence.max_confidence, 0.95)
        self.assertEqual(cfg.camera.poll_interval_ms, 100)
        self.assertEqual(cfg.logging.level, "INFO")

    def test_default_file_matches_dataclass_defaults(self):
        self.assertEqual(load_config(), Cfg())

    def test_partial_file_keeps_defaults(self):
        path = self._write("stabilizer:\n  buffer_size: 3\n  required_count: 2\n  cooldown_ms: 300\n")
        cfg = load_config(path)
        self.assertEqual(cfg.stabilizer, StabilizerConfig(buffer_size=3, required_count=2, cooldown_ms=300))
        self.assertEqual(cfg.confidence, ConfidenceConfig())

    def test_empty_file(self):
        self.assertEqual(load_config(self._write("")), Cfg())

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/config.yaml")

    def test_unknown_key(self):
        path = self._write("stabilizer:\n  window: 4\n")
        with self.assertRaises(ValueError):
            load_config(path)

    def test_out_of_range_clamp(self):
        path = self._write("confidence:\n  max_confidence: 1.0\n")
        with self.assertRaises(ValueError):
            load_config(path)


class TestConfigValidation(unittest.TestCase):
    """Test rejection of impossible tuning."""

    def test_required_count_must_fit_buffer(self):
        with self.assertRaises(ValueError):
            StabilizerConfig(buffer_size=3, required_count=4)
        with self.assertRaises(ValueError):
            StabilizerConfig(buffer_size=3, required_count=0)

    def test_buffer_size_positive(self):
        with self.assertRaises(ValueError):
            StabilizerConfig(buffer_size=0, required_count=0)

    def test_negative_cooldown(self):
        with self.assertRaises(ValueError):
            StabilizerConfig(cooldown_ms=-1)

    def test_confidence_bounds(self):
        with self.assertRaises(ValueError):
            ConfidenceConfig(min_confidence=0.9, max_confidence=0.6)
        with self.assertRaises(ValueError):
            ConfidenceConfig(visible_min=0.9, visible_max=0.1)

    def test_confidence_clamp_stays_in_event_range(self):
        for lo, hi in [(0.0, 0.95), (0.5, 1.0), (0.4, 0.6), (0.96, 0.99)]:
            with self.assertRaises(ValueError):
                ConfidenceConfig(min_confidence=lo, max_confidence=hi)
        self.assertEqual(ConfidenceConfig(min_confidence=0.6).min_confidence, 0.6)


if __name__ == '__main__':
    unittest.main()
