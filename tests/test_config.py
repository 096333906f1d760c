"""
Unit tests for ProfileConfig
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pqgram.config import ProfileConfig


class TestProfileConfig:
    """Test cases for ProfileConfig"""

    def test_defaults(self):
        config = ProfileConfig()
        assert config.p == 2
        assert config.q == 3
        assert config.sort is True
        assert config.filler_value is None

    def test_invalid_values(self):
        with pytest.raises(ValueError, match="p must be >= 0"):
            ProfileConfig(p=-1)
        with pytest.raises(ValueError, match="q must be an integer"):
            ProfileConfig(q=2.5)
        with pytest.raises(ValueError, match="p must be an integer"):
            ProfileConfig(p=True)

    def test_zero_is_allowed(self):
        config = ProfileConfig(p=0, q=0)
        assert (config.p, config.q) == (0, 0)

    def test_dict_roundtrip(self):
        config = ProfileConfig(p=3, q=2, sort=False, filler_value="*")
        assert ProfileConfig.from_dict(config.to_dict()) == config

    def test_unknown_keys(self):
        with pytest.raises(ValueError, match="Unknown profile config keys"):
            ProfileConfig.from_dict({'p': 2, 'window': 4})

    def test_from_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'p': 1, 'q': 4, 'filler_value': '*'}))

        config = ProfileConfig.from_json(path)
        assert config == ProfileConfig(p=1, q=4, sort=True, filler_value='*')

    def test_from_json_section(self, tmp_path):
        """設定可放在 "pqgram" 區段下"""
        path = tmp_path / "experiment.json"
        path.write_text(json.dumps({'pqgram': {'p': 3, 'q': 3}}))

        config = ProfileConfig.from_json(str(path))
        assert (config.p, config.q) == (3, 3)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
