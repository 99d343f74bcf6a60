from pathlib import Path

import pytest
from PIL import Image

from webpconv.data_models import Configuration, OutputFormat


def make_webp(path: Path, size=(4, 4), color=(200, 100, 50), alpha=False, lossless=True) -> Path:
    """Write a solid-colour WebP image to path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if alpha:
        image = Image.new("RGBA", size, color + (0,) if len(color) == 3 else color)
    else:
        image = Image.new("RGB", size, color)
    image.save(path, "WEBP", lossless=lossless)
    return path


def make_config(*paths, **overrides) -> Configuration:
    options = {
        "paths": tuple(Path(path) for path in paths),
        "output_format": OutputFormat.PNG,
    }
    options.update(overrides)
    return Configuration(**options)


@pytest.fixture
def webp_factory():
    return make_webp


@pytest.fixture
def config_factory():
    return make_config


@pytest.fixture
def input_dir(tmp_path):
    """Directory with a.webp, sub/b.webp and a non-WebP file."""
    root = tmp_path / "in"
    make_webp(root / "a.webp")
    make_webp(root / "sub" / "b.webp", color=(10, 20, 30))
    (root / "notes.txt").write_text("not an image")
    return root
