import json
from pathlib import Path

import pytest

from services.impl.config_service import ConfigService


REPO_CONFIG = Path(__file__).resolve().parent.parent / "config" / "application_config.json"


def _writeConfig(tmp_path, data) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_repository_config_loads():
    config = ConfigService(str(REPO_CONFIG))
    assert config.getQrBackend() == "opencv"
    assert config.getAdaptiveBlockSizes() == [11, 15, 21, 31, 51]
    assert config.getGammaValues() == [0.5, 0.7, 1.5, 2.0]
    assert config.getRegionPadding() == 10
    assert config.getPngCompression() == 9
    assert not config.isDebugEnabled()


def test_defaults_for_empty_config(tmp_path):
    config = ConfigService(_writeConfig(tmp_path, {}))
    assert config.getQrBackend() == "opencv"
    assert config.isZxingTryRotate() is True
    assert config.getClaheClipLimit() == 3.0
    assert config.getClaheTileSize() == 8
    assert config.getUpscaleFactor() == 2.0
    assert config.getUpscaleMaxDimension() == 800
    assert config.getModerateUpscaleFactor() == 1.5
    assert config.getCombinedBlockSize() == 31
    assert config.getDebugBasePath() == "output/debug"
    assert not config.isDebugEnabled()


def test_no_path_uses_defaults():
    config = ConfigService()
    assert config.getQrBackend() == "opencv"
    assert config.getAdaptiveBlockSizes() == [11, 15, 21, 31, 51]
    assert config.getRegionPadding() == 10
    assert config.get("region.padding") is None


def test_dot_notation_and_overrides(tmp_path):
    config = ConfigService(_writeConfig(tmp_path, {
        "qr_reader": {"backend": "ZXing"},
        "region": {"padding": 4},
        "debug": {"enabled": True}
    }))
    assert config.get("region.padding") == 4
    assert config.get("region.missing", "fallback") == "fallback"
    assert config.get("qr_reader.backend.deeper", 1) == 1
    assert config.getQrBackend() == "zxing"
    assert config.getRegionPadding() == 4
    assert config.isDebugEnabled()


def test_missing_file(tmp_path):
    with pytest.raises(RuntimeError):
        ConfigService(str(tmp_path / "absent.json"))


def test_malformed_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(RuntimeError):
        ConfigService(str(path))


def test_non_object_root(tmp_path):
    with pytest.raises(RuntimeError):
        ConfigService(_writeConfig(tmp_path, [1, 2, 3]))
