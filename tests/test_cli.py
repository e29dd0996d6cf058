from datetime import datetime
from pathlib import Path

import fitz
import pytest

import pdf_autocrop.cropping
from pdf_autocrop import cli
from pdf_autocrop.exceptions import LoadError
from pdf_autocrop.models import Margins


@pytest.fixture
def calls(monkeypatch):
    recorded = []

    def fake_crop_file(input_path, output_path, config=None, backend=None, visualizer=None):
        recorded.append((input_path, str(output_path), config))
        return []

    monkeypatch.setattr(pdf_autocrop.cropping, "crop_file", fake_crop_file)
    return recorded


def test_default_output_path():
    path = cli.default_output_path("/docs/paper.pdf", "pdf-crop", datetime(2024, 1, 31, 9, 5, 7))
    assert path == Path("/docs/pdf-crop-2024-01-31-09-05-07.pdf")


def test_crop_margin_options(calls):
    assert cli.main(["in.pdf", "-o", "out.pdf", "-t", "5", "-r", "7"]) == 0
    (input_path, output_path, config), = calls
    assert (input_path, output_path) == ("in.pdf", "out.pdf")
    assert config.margins == Margins(top=5, left=0, bottom=0, right=7)


def test_crop_options_override_config(calls):
    cli.main(["in.pdf", "-o", "out.pdf", "--config", '{"margins": [1, 2, 3, 4]}', "-b", "9"])
    assert calls[0][2].margins == Margins(1, 2, 9, 4)


def test_crop_config_file(calls, tmp_path):
    config_path = tmp_path / "crop.json"
    config_path.write_text('{"margins": "6"}')
    cli.main(["in.pdf", "-o", "out.pdf", "--config", str(config_path)])
    assert calls[0][2].margins == Margins(6, 6, 6, 6)


def test_crop_config_unknown_margin_name(calls, tmp_path):
    config_path = tmp_path / "crop.json"
    config_path.write_text('{"margins": {"up": 3}}')
    with pytest.raises(SystemExit) as exc:
        cli.main(["in.pdf", "-o", "out.pdf", "--config", str(config_path)])
    assert exc.value.code == 2
    assert calls == []


def test_crop_config_must_be_object(calls):
    with pytest.raises(SystemExit) as exc:
        cli.main(["in.pdf", "--config", "[1,2,3,4]"])
    assert exc.value.code == 2
    assert calls == []


def test_crop_in_place(calls):
    cli.main(["in.pdf", "--in-place"])
    assert calls[0][1] == "in.pdf"


def test_crop_timestamped_output(calls, tmp_path):
    cli.main([str(tmp_path / "in.pdf")])
    output = Path(calls[0][1])
    assert output.parent == tmp_path
    assert output.name.startswith("pdf-crop-") and output.suffix == ".pdf"


def test_crop_requires_file(calls):
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 2
    assert calls == []


def test_crop_rejects_negative_margin(calls):
    with pytest.raises(SystemExit):
        cli.main(["in.pdf", "-t", "-3"])
    assert calls == []


def test_cropper_margins_list(calls):
    cli.main_cropper(["-i", "in.pdf", "-o", "out.pdf", "-m", "10", "5"])
    assert calls[0][2].margins == Margins(10, 5, 0, 0)


def test_cropper_default_zero_margins(calls, tmp_path):
    cli.main_cropper(["-i", str(tmp_path / "in.pdf")])
    input_path, output_path, config = calls[0]
    assert config.margins.is_zero
    assert Path(output_path).name.startswith("pdf-cropper-")


def test_cropper_requires_input(calls):
    with pytest.raises(SystemExit):
        cli.main_cropper(["-m", "1"])


def test_load_error_exits_with_message(monkeypatch):
    def fail(*args, **kwargs):
        raise LoadError("missing.pdf")

    monkeypatch.setattr(pdf_autocrop.cropping, "crop_file", fail)
    with pytest.raises(SystemExit) as exc:
        cli.main(["missing.pdf", "-o", "out.pdf"])
    assert "Could not open PDF file" in exc.value.code


def test_end_to_end_with_debug_images(boxed_pdf, tmp_path):
    output = tmp_path / "cropped.pdf"
    debug_dir = tmp_path / "debug"
    assert cli.main([str(boxed_pdf), "-o", str(output), "-l", "10", "--debug-dir", str(debug_dir), "-q"]) == 0

    doc = fitz.open(str(output))
    assert doc[0].rect.width == pytest.approx(109, abs=2)
    doc.close()
    assert len(list(debug_dir.glob("*.png"))) == 2
