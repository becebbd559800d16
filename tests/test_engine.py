"""Tests for the catalog and catalog-addressed operations."""

import threading

import numpy as np
import pytest
from engines.convolution import blur
from models.errors import DimensionMismatchError, ImageNotFoundError, InvalidArgumentError
from models.operation_params import LevelsParams
from models.pixel_buffer import PixelBuffer
from utils.test_images import generate_noise
from workspace.catalog import ImageCatalog
from workspace.engine import ImageEngine


@pytest.fixture
def engine():
    eng = ImageEngine()
    eng.catalog.put('img', generate_noise(8, 6, seed=20))
    return eng


def test_catalog_get_missing():
    catalog = ImageCatalog()
    with pytest.raises(ImageNotFoundError) as exc:
        catalog.get('ghost')
    assert 'ghost' in str(exc.value)


def test_catalog_rejects_non_buffers():
    with pytest.raises(TypeError):
        ImageCatalog().put('x', np.zeros((2, 2, 3)))


def test_catalog_concurrent_writes_last_wins():
    catalog = ImageCatalog()
    images = [PixelBuffer.filled(2, 2, (i, i, i)) for i in range(20)]
    threads = [threading.Thread(target=catalog.put, args=('shared', img)) for img in images]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(catalog) == 1
    assert any(catalog.get('shared') == img for img in images)


def test_engines_own_separate_catalogs():
    a, b = ImageEngine(), ImageEngine()
    a.catalog.put('x', PixelBuffer.filled(1, 1, (0, 0, 0)))
    assert a.exists('x') and not b.exists('x')


def test_operation_writes_destination(engine):
    engine.blur('img', 'out')
    assert engine.get('out') == blur(engine.get('img'))


def test_overwrite_source_in_place(engine):
    original = engine.get('img')
    engine.brighten(10, 'img', 'img')
    assert engine.get('img') != original


def test_missing_source_writes_nothing(engine):
    with pytest.raises(ImageNotFoundError):
        engine.sepia('nope', 'out')
    assert not engine.exists('out')


def test_invalid_argument_writes_nothing(engine):
    with pytest.raises(InvalidArgumentError):
        engine.flip('sideways', 'img', 'out')
    with pytest.raises(InvalidArgumentError):
        engine.levels_adjust(200, 100, 50, 'img', 'out')
    with pytest.raises(InvalidArgumentError):
        engine.compress(120, 'img', 'out')
    with pytest.raises(InvalidArgumentError):
        engine.downscale(9, 6, 'img', 'out')
    assert not engine.exists('out')


def test_masked_operations(engine):
    engine.catalog.put('keep', PixelBuffer.filled(8, 6, (255, 0, 0)))
    engine.catalog.put('small', PixelBuffer.filled(4, 6, (0, 0, 0)))
    engine.blur('img', 'out', mask='keep')
    assert engine.get('out') == engine.get('img')

    with pytest.raises(ImageNotFoundError):
        engine.sharpen('img', 'out2', mask='missing')
    with pytest.raises(DimensionMismatchError):
        engine.sepia('img', 'out2', mask='small')
    assert not engine.exists('out2')


def test_greyscale_variants(engine):
    engine.greyscale('img', 'grey')
    engine.visualize_component('intensity', 'img', 'intensity')
    engine.greyscale('img', 'luma', component='luma')
    engine.visualize_component('luma', 'img', 'luma2')
    assert engine.get('grey') == engine.get('intensity')
    assert engine.get('luma') == engine.get('luma2')


def test_rgb_split_combine(engine):
    engine.rgb_split('img', 'r', 'g', 'b')
    engine.rgb_combine('joined', 'r', 'g', 'b')
    assert engine.get('joined') == engine.get('img')

    engine.catalog.put('wide', generate_noise(9, 6))
    with pytest.raises(DimensionMismatchError):
        engine.rgb_combine('bad', 'r', 'g', 'wide')
    with pytest.raises(ImageNotFoundError):
        engine.rgb_combine('bad', 'r', 'g', 'missing')


def test_histogram_outputs(engine):
    counts = engine.histogram_counts('img')
    assert counts.sum() == 3 * 8 * 6
    engine.histogram('img', 'hist')
    assert engine.get('hist').shape == (256, 256)


def test_split_and_tone(engine):
    engine.color_correct('img', 'cc')
    engine.split('color-correct', 'img', 'cc-split', 100)
    assert engine.get('cc-split') == engine.get('cc')

    engine.levels_adjust(10, 120, 240, 'img', 'lv')
    engine.split('levels', 'img', 'lv-split', 100, LevelsParams(10, 120, 240))
    assert engine.get('lv-split') == engine.get('lv')


def test_compress_and_downscale(engine):
    engine.compress(50, 'img', 'small-detail')
    engine.downscale(4, 3, 'img', 'half')
    assert engine.get('small-detail').shape == (6, 8)
    assert engine.get('half').shape == (3, 4)


def test_load_save_roundtrip(engine, tmp_path):
    for ext in ('ppm', 'png', 'bmp'):
        path = tmp_path / f'img.{ext}'
        engine.save(path, 'img')
        engine.load(path, f'copy-{ext}')
        assert engine.get(f'copy-{ext}') == engine.get('img')


class _MemoryCodec:
    def __init__(self):
        self.files = {}

    def load_image(self, path):
        if path not in self.files:
            raise ImageNotFoundError(f"Image file not found: {path}")
        return self.files[path]

    def save_image(self, image, path):
        self.files[path] = image


def test_injected_codec_handles_load_and_save():
    codec = _MemoryCodec()
    eng = ImageEngine(codec=codec)
    codec.files['in.ppm'] = PixelBuffer.filled(2, 2, (9, 8, 7))
    eng.load('in.ppm', 'a')
    eng.save('out.png', 'a')
    assert codec.files['out.png'] == codec.files['in.ppm']
    with pytest.raises(ImageNotFoundError):
        eng.load('nope.ppm', 'b')
    assert not eng.exists('b')
