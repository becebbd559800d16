"""Tests for the command boundary and script runner."""

import pytest
from models.errors import ImageNotFoundError, InvalidArgumentError
from models.pixel_buffer import PixelBuffer
from utils.image_io import save_image
from utils.test_images import generate_noise
from workspace.commands import CommandRunner


@pytest.fixture
def runner():
    r = CommandRunner()
    r.engine.catalog.put('img', generate_noise(10, 6, seed=40))
    r.engine.catalog.put('mask', PixelBuffer.filled(10, 6, (255, 255, 255)))
    return r


def test_unknown_command(runner):
    with pytest.raises(InvalidArgumentError, match="Unknown command: emboss"):
        runner.execute("emboss img out")


def test_empty_command(runner):
    with pytest.raises(InvalidArgumentError):
        runner.execute("   ")


def test_commands_are_case_insensitive(runner):
    runner.execute("BLUR img out")
    assert runner.engine.exists('out')


def test_optional_mask(runner):
    runner.execute("sharpen img mask kept")
    assert runner.engine.get('kept') == runner.engine.get('img')
    runner.execute("red-component img mask red-kept")
    assert runner.engine.get('red-kept') == runner.engine.get('img')
    with pytest.raises(ImageNotFoundError):
        runner.execute("sepia img ghost out")


def test_component_commands(runner):
    for component in ('red', 'green', 'blue', 'value', 'intensity', 'luma'):
        runner.execute(f"{component}-component img {component}")
        assert runner.engine.exists(component)


def test_greyscale_forms(runner):
    runner.execute("greyscale img g1")
    runner.execute("greyscale luma img g2")
    runner.execute("greyscale intensity img mask g3")
    assert runner.engine.get('g3') == runner.engine.get('img')
    assert runner.engine.get('g1') != runner.engine.get('g2')


def test_numeric_arguments(runner):
    runner.execute("brighten -20 img dark")
    runner.execute("levels-adjust 20 100 200 img lv")
    runner.execute("compress 30 img cmp")
    runner.execute("downscale 5 3 img half")
    assert runner.engine.get('half').shape == (3, 5)
    with pytest.raises(InvalidArgumentError):
        runner.execute("brighten lots img out")


def test_flip_forms(runner):
    runner.execute("flip horizontal img f1")
    runner.execute("horizontal-flip img f2")
    assert runner.engine.get('f1') == runner.engine.get('f2')


def test_split_command(runner):
    runner.execute("split sepia img s1 40")
    runner.execute("split levels img s2 50 20 100 200")
    with pytest.raises(InvalidArgumentError):
        runner.execute("split levels img s3 50 20 100")
    with pytest.raises(InvalidArgumentError):
        runner.execute("split blur img s3 fifty")
    with pytest.raises(InvalidArgumentError):
        runner.execute("split blur img s3 150")
    assert not runner.engine.exists('s3')


def test_rgb_split_combine_commands(runner):
    runner.execute("rgb-split img r g b")
    runner.execute("rgb-combine joined r g b")
    assert runner.engine.get('joined') == runner.engine.get('img')


def test_missing_arguments(runner):
    with pytest.raises(InvalidArgumentError, match="Usage"):
        runner.execute("rgb-split img r g")
    with pytest.raises(InvalidArgumentError, match="Usage"):
        runner.execute("blur img")


def test_run_lines_continues_after_failure(runner):
    report = runner.run_lines([
        "# comment",
        "",
        "blur img a",
        "emboss img b",
        "sepia missing c",
        "sepia img d",
    ], stop_on_error=False)
    assert report.executed == 2
    assert [f[0] for f in report.failures] == [4, 5]
    assert not report.ok
    assert runner.engine.exists('d')


def test_run_lines_brighten_beyond_int32(runner):
    report = runner.run_lines(["brighten 3000000000 img out", "sepia img d"], stop_on_error=True)
    assert report.ok
    assert report.executed == 2
    assert (runner.engine.get('out').to_array() == 255).all()


def test_run_lines_stop_on_error(runner):
    report = runner.run_lines(["emboss img b", "sepia img d"], stop_on_error=True)
    assert report.executed == 0
    assert not runner.engine.exists('d')


def test_script_file_end_to_end(runner, tmp_path):
    source = tmp_path / 'in.ppm'
    save_image(generate_noise(6, 4, seed=41), source)
    out = tmp_path / 'out.png'
    script = tmp_path / 'script.txt'
    script.write_text(
        f"load {source} koala\n"
        "vertical-flip koala koala-v\n"
        "histogram koala koala-hist\n"
        f"save {out} koala-v\n"
    )
    report = runner.run_script(script)
    assert report.ok and report.executed == 4
    assert out.exists()

    nested = tmp_path / 'outer.txt'
    nested.write_text(f"run {script}\n")
    assert runner.run_script(nested).ok


def test_missing_script(runner, tmp_path):
    with pytest.raises(InvalidArgumentError):
        runner.run_script(tmp_path / 'nope.txt')
