"""Unit tests for the conversion API."""

import datetime
import io

import pytest
import yaml

from markconv.api import convert, decode_document, encode_document, transcode
from markconv.codec_metadata import CodecBinding
from markconv.codecs.json import CODEC_BINDING as JSON_BINDING
from markconv.exceptions import (
    DecodeError,
    EncodeError,
    FileError,
    MissingFormatError,
    UnresolvableExtensionError,
    UnsupportedFormatError,
)
from markconv.options import ConversionOptions
from markconv.registry import CodecRegistry


class FailingReadStream(io.BytesIO):
    """Stream whose read fails like a broken pipe."""

    def read(self, size=-1):
        raise OSError(5, "Input/output error")


@pytest.mark.unit
class TestDecodeEncodeDocument:
    """Test the single-direction helpers."""

    def test_decode_document(self):
        """decode_document returns the generic document."""
        assert decode_document(io.BytesIO(b"a = [1, 2]"), "toml") == {"a": [1, 2]}

    def test_decode_unknown_format(self):
        """Unknown input formats fail in the input phase."""
        with pytest.raises(UnsupportedFormatError) as exc_info:
            decode_document(io.BytesIO(b""), "ini")

        assert exc_info.value.phase == "input"

    def test_decode_rejects_non_string_keys(self):
        """Decoded values outside the document model are decode errors."""
        with pytest.raises(DecodeError) as exc_info:
            decode_document(io.BytesIO(b"1: one\n"), "yaml")

        assert exc_info.value.phase == "decoding"
        assert "is not a string" in str(exc_info.value)

    def test_decode_rejects_recursive_alias(self):
        """A YAML anchor referring to itself is a decode error."""
        with pytest.raises(DecodeError) as exc_info:
            decode_document(io.BytesIO(b"a: &x\n  - *x\n"), "yaml")

        assert exc_info.value.phase == "decoding"
        assert "recursive reference" in str(exc_info.value)

    def test_encode_document(self):
        """encode_document returns the complete output bytes."""
        options = ConversionOptions().with_overrides(indent=None)
        assert encode_document({"a": 1}, "json", options=options) == b'{"a": 1}\n'

    def test_encode_unknown_format(self):
        """Unknown output formats fail in the output phase."""
        with pytest.raises(UnsupportedFormatError) as exc_info:
            encode_document({}, "xml")

        assert exc_info.value.phase == "output"


@pytest.mark.unit
class TestTranscode:
    """Test stream-to-stream transcoding."""

    def test_json_to_yaml(self):
        """A JSON mapping becomes the equivalent YAML mapping."""
        output = io.BytesIO()
        transcode(io.BytesIO(b'{"a": [1, 2]}'), "json", output, "yaml")

        assert output.getvalue() == b"a:\n- 1\n- 2\n"
        assert yaml.safe_load(output.getvalue()) == {"a": [1, 2]}

    def test_truncated_input_writes_nothing(self):
        """A decode failure leaves the output stream empty."""
        output = io.BytesIO()

        with pytest.raises(DecodeError) as exc_info:
            transcode(io.BytesIO(b'{"a": '), "json", output, "yaml")

        assert exc_info.value.phase == "decoding"
        assert output.getvalue() == b""

    def test_unrepresentable_document_writes_nothing(self):
        """An encode failure leaves the output stream empty."""
        output = io.BytesIO()

        with pytest.raises(EncodeError) as exc_info:
            transcode(io.BytesIO(b"day = 2024-03-01\n"), "toml", output, "json")

        assert exc_info.value.phase == "encoding"
        assert output.getvalue() == b""

    def test_recursive_alias_writes_nothing(self):
        """A self-referencing YAML document fails before any output."""
        output = io.BytesIO()

        with pytest.raises(DecodeError):
            transcode(io.BytesIO(b"a: &x\n  - *x\n"), "yaml", output, "yaml")

        assert output.getvalue() == b""

    def test_shared_aliases_stay_shared(self):
        """Anchors referenced many times convert without expanding every path."""
        lines = ["a0: &a0 [1]"]
        for level in range(1, 11):
            refs = ", ".join([f"*a{level - 1}"] * 10)
            lines.append(f"a{level}: &a{level} [{refs}]")
        output = io.BytesIO()

        transcode(io.BytesIO("\n".join(lines).encode()), "yaml", output, "yaml")

        assert b"*id" in output.getvalue()
        assert yaml.safe_load(output.getvalue())["a2"][0] == [[1]] * 10

    def test_dates_survive_toml_to_yaml(self):
        """Date values pass between formats that both support them."""
        output = io.BytesIO()
        transcode(io.BytesIO(b"day = 2024-03-01\n"), "toml", output, "yaml")

        assert yaml.safe_load(output.getvalue()) == {"day": datetime.date(2024, 3, 1)}

    def test_codecs_checked_before_reading(self):
        """An unknown output format fails before the input is read."""
        stream = FailingReadStream()

        with pytest.raises(UnsupportedFormatError) as exc_info:
            transcode(stream, "json", io.BytesIO(), "xml")

        assert exc_info.value.phase == "output"

    def test_read_failure(self):
        """OS errors while reading become file errors."""
        with pytest.raises(FileError) as exc_info:
            transcode(FailingReadStream(), "json", io.BytesIO(), "yaml")

        assert exc_info.value.action == "read"
        assert exc_info.value.phase == "reading input"

    def test_custom_registry(self):
        """Formats missing from the given registry are unsupported."""
        registry = CodecRegistry([JSON_BINDING])

        with pytest.raises(UnsupportedFormatError):
            transcode(io.BytesIO(b"{}"), "json", io.BytesIO(), "yaml", registry=registry)

    def test_fake_codec(self):
        """Any binding with the right callables can take part."""

        def decode_upper(stream):
            return {"text": stream.read().decode("utf-8").upper()}

        registry = CodecRegistry([JSON_BINDING, CodecBinding(format_name="shout", decoder=decode_upper)])
        output = io.BytesIO()
        transcode(io.BytesIO(b"hello"), "shout", output, "json", registry=registry)

        assert output.getvalue() == b'{\n  "text": "HELLO"\n}\n'

    def test_unexpected_decoder_failure_is_a_decode_error(self):
        """Arbitrary exceptions from a decoder are wrapped."""

        def broken(stream):
            raise KeyError("missing")

        registry = CodecRegistry([JSON_BINDING, CodecBinding(format_name="broken", decoder=broken)])

        with pytest.raises(DecodeError) as exc_info:
            transcode(io.BytesIO(b""), "broken", io.BytesIO(), "json", registry=registry)

        assert isinstance(exc_info.value.original_error, KeyError)


@pytest.mark.unit
class TestConvert:
    """Test path-based conversion."""

    def test_convert_files(self, tmp_path):
        """Formats are inferred from both extensions."""
        source = tmp_path / "config.json"
        target = tmp_path / "config.yml"
        source.write_text('{"name": "demo", "ports": [80, 443]}', encoding="utf-8")

        convert(str(source), str(target))

        assert yaml.safe_load(target.read_text(encoding="utf-8")) == {"name": "demo", "ports": [80, 443]}

    def test_explicit_formats_override_extensions(self, tmp_path):
        """Explicit formats win over misleading extensions."""
        source = tmp_path / "settings.conf"
        target = tmp_path / "settings.txt"
        source.write_text("a = 1\n", encoding="utf-8")

        convert(str(source), str(target), input_format="toml", output_format="json")

        assert target.read_text(encoding="utf-8") == '{\n  "a": 1\n}\n'

    def test_missing_input_format_on_stdin(self):
        """Reading stdin without a format fails in the input phase."""
        with pytest.raises(MissingFormatError) as exc_info:
            convert(None, "out.json")

        assert exc_info.value.phase == "input"
        assert str(exc_info.value) == "format is required when reading from stdin"

    def test_missing_output_format_on_stdout(self, tmp_path):
        """Writing stdout without a format fails in the output phase."""
        source = tmp_path / "in.json"
        source.write_text("{}", encoding="utf-8")

        with pytest.raises(MissingFormatError) as exc_info:
            convert(str(source), "-")

        assert exc_info.value.phase == "output"
        assert str(exc_info.value) == "format is required when writing to stdout"

    def test_resolution_happens_before_io(self, tmp_path):
        """Format errors are reported before the missing input is noticed."""
        with pytest.raises(UnresolvableExtensionError) as exc_info:
            convert(str(tmp_path / "missing.json"), str(tmp_path / "out.txt"))

        assert exc_info.value.phase == "output"

    def test_missing_input_file(self, tmp_path):
        """A missing input file is a file error."""
        with pytest.raises(FileError) as exc_info:
            convert(str(tmp_path / "missing.json"), str(tmp_path / "out.yaml"))

        assert exc_info.value.phase == "opening input"
        assert not (tmp_path / "out.yaml").exists()

    def test_failed_conversion_keeps_existing_output(self, tmp_path):
        """The output file is untouched when decoding fails."""
        source = tmp_path / "broken.json"
        target = tmp_path / "out.yaml"
        source.write_text('{"a": ', encoding="utf-8")
        target.write_text("keep: me\n", encoding="utf-8")

        with pytest.raises(DecodeError):
            convert(str(source), str(target))

        assert target.read_text(encoding="utf-8") == "keep: me\n"

    def test_failed_encoding_creates_no_output(self, tmp_path):
        """No output file appears when encoding fails."""
        source = tmp_path / "data.toml"
        target = tmp_path / "data.json"
        source.write_text("day = 2024-03-01\n", encoding="utf-8")

        with pytest.raises(EncodeError):
            convert(str(source), str(target))

        assert not target.exists()

    def test_in_place_conversion(self, tmp_path):
        """Input and output may be the same file."""
        path = tmp_path / "data.conf"
        path.write_text('{"a": {"b": true}}', encoding="utf-8")

        convert(str(path), str(path), input_format="json", output_format="toml")

        assert path.read_text(encoding="utf-8") == "[a]\nb = true\n"

    def test_stdin_to_stdout(self, stdin_bytes, stdout_buffer):
        """Standard streams are used when paths are '-'."""
        stdin_bytes(b"a: 1\n")

        convert("-", "-", input_format="yaml", output_format="toml")

        assert stdout_buffer.getvalue() == b"a = 1\n"

    def test_options_reach_the_encoder(self, tmp_path):
        """Encoder options shape the written output."""
        source = tmp_path / "in.yaml"
        target = tmp_path / "out.json"
        source.write_text("b: 1\na: 2\n", encoding="utf-8")
        options = ConversionOptions().with_overrides(indent=None, sort_keys=True)

        convert(str(source), str(target), options=options)

        assert target.read_text(encoding="utf-8") == '{"a": 2, "b": 1}\n'
