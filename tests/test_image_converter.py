from PIL import Image

from webpconv.data_models import OutcomeStatus, OutputFormat
from webpconv.file_processor import FileProcessor
from webpconv.image_converter import ImageConverter
from webpconv.webp_codec import EncodeError, ImageEncoder


class FailingEncoder(ImageEncoder):
    def encode(self, image, output_format, quality=100):
        raise EncodeError("no encoder for this format")


class UndeletableFileProcessor(FileProcessor):
    def delete_source_file(self, path):
        raise PermissionError(13, "Permission denied", str(path))


def convert(config, input_path, **kwargs):
    converter = ImageConverter(config, **kwargs)
    return converter.convert(converter.file_processor.create_task(input_path))


def test_converts_to_png(tmp_path, webp_factory, config_factory):
    source = webp_factory(tmp_path / "a.webp")

    outcome = convert(config_factory(tmp_path), source)

    assert outcome.status is OutcomeStatus.CONVERTED
    assert outcome.output_path == tmp_path / "a.png"
    assert outcome.source_bytes == source.stat().st_size
    assert outcome.output_bytes == (tmp_path / "a.png").stat().st_size
    assert not outcome.deleted
    assert source.exists()
    with Image.open(tmp_path / "a.png") as result:
        assert result.size == (4, 4)


def test_existing_output_is_skipped_and_untouched(tmp_path, webp_factory, config_factory):
    source = webp_factory(tmp_path / "a.webp")
    existing = tmp_path / "a.png"
    existing.write_bytes(b"keep me")

    outcome = convert(config_factory(tmp_path, delete_after_convert=True), source)

    assert outcome.status is OutcomeStatus.SKIPPED
    assert "already exists" in outcome.reason
    assert existing.read_bytes() == b"keep me"
    assert source.exists()


def test_overwrite_replaces_existing_output(tmp_path, webp_factory, config_factory):
    source = webp_factory(tmp_path / "a.webp")
    existing = tmp_path / "a.png"
    existing.write_bytes(b"old")

    outcome = convert(config_factory(tmp_path, overwrite=True), source)

    assert outcome.status is OutcomeStatus.CONVERTED
    with Image.open(existing) as result:
        assert result.format == "PNG"


def test_decode_failure(tmp_path, config_factory):
    source = tmp_path / "broken.webp"
    source.write_bytes(b"RIFF\x00\x00\x00\x00WEBPjunk")

    outcome = convert(config_factory(tmp_path, delete_after_convert=True), source)

    assert outcome.status is OutcomeStatus.FAILED
    assert "WebP" in outcome.reason
    assert not (tmp_path / "broken.png").exists()
    assert source.exists()


def test_missing_input_fails(tmp_path, config_factory):
    outcome = convert(config_factory(tmp_path), tmp_path / "vanished.webp")

    assert outcome.status is OutcomeStatus.FAILED
    assert outcome.reason.startswith("Unable to read file")


def test_encode_failure(tmp_path, webp_factory, config_factory):
    source = webp_factory(tmp_path / "a.webp")

    outcome = convert(config_factory(tmp_path), source, encoder=FailingEncoder())

    assert outcome.status is OutcomeStatus.FAILED
    assert outcome.reason == "no encoder for this format"
    assert not (tmp_path / "a.png").exists()


def test_delete_after_convert(tmp_path, webp_factory, config_factory):
    source = webp_factory(tmp_path / "a.webp", size=(6, 5))

    outcome = convert(config_factory(tmp_path, output_format=OutputFormat.JPEG, delete_after_convert=True), source)

    assert outcome.status is OutcomeStatus.CONVERTED
    assert outcome.deleted
    assert not source.exists()
    with Image.open(tmp_path / "a.jpeg") as result:
        assert result.size == (6, 5)


def test_delete_failure_keeps_conversion(tmp_path, webp_factory, config_factory):
    source = webp_factory(tmp_path / "a.webp")
    config = config_factory(tmp_path, delete_after_convert=True)
    processor = UndeletableFileProcessor(config.output_format)

    outcome = convert(config, source, file_processor=processor)

    assert outcome.status is OutcomeStatus.CONVERTED
    assert outcome.succeeded
    assert not outcome.deleted
    assert "Permission denied" in outcome.delete_error
    assert (tmp_path / "a.png").exists()
    assert source.exists()


def test_output_path_equal_to_input_is_refused(tmp_path, webp_factory, config_factory):
    # WebP data stored under a .png name
    source = webp_factory(tmp_path / "a.png")
    original = source.read_bytes()

    outcome = convert(config_factory(tmp_path, overwrite=True, delete_after_convert=True), source)

    assert outcome.status is OutcomeStatus.FAILED
    assert "same as the input" in outcome.reason
    assert source.read_bytes() == original
