"""Tests for the CLI main module."""

import json

import pytest

from charset_translator.cli.main import (
    EXIT_CANCELLED,
    EXIT_FAILURE,
    EXIT_MALFORMED_INPUT,
    EXIT_OK,
    EXIT_UNMAPPABLE_CHARACTER,
    EXIT_USAGE,
    check_paths,
    create_argument_parser,
    describe_failure,
    exit_code_for,
    main,
)
from charset_translator.shared.errors import (
    InvalidArgumentError,
    MalformedInputError,
    ReadFailureError,
    UnknownEncodingError,
    UnmappableCharacterError,
    WriteFailureError,
)


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "source.txt"
    path.write_bytes("$¥€".encode("utf-8"))
    return path


class TestArgumentParser:
    """Test command-line parsing."""

    def test_positional_arguments(self):
        """Test the four positional arguments and defaults."""
        args = create_argument_parser().parse_args(
            ["in.txt", "UTF-8", "out.txt", "ISO-8859-1"]
        )

        assert args.source == "in.txt"
        assert args.source_encoding == "UTF-8"
        assert args.target == "out.txt"
        assert args.target_encoding == "ISO-8859-1"
        assert args.xmlcharref is False
        assert args.buffer_size is None
        assert args.force is False

    def test_options(self):
        """Test substitution, buffer size and force options."""
        args = create_argument_parser().parse_args(
            ["--xmlcharref", "-b", "16", "-f", "in.txt", "UTF-8", "out.txt", "ASCII"]
        )

        assert args.xmlcharref is True
        assert args.buffer_size == 16
        assert args.force is True

    def test_version(self, capsys):
        """Test that --version prints the version and exits."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "2.0.1" in capsys.readouterr().out


class TestTranslateCommand:
    """Test end-to-end file translation."""

    def test_translate_with_references(self, source_file, tmp_path):
        """Test the dollar, yen, euro file with substitution enabled."""
        target = tmp_path / "target.txt"

        code = main([str(source_file), "UTF-8", str(target), "ISO-8859-1", "-x", "-q"])

        assert code == EXIT_OK
        assert target.read_bytes() == b"$\xa5&#8364;"

    def test_unmappable_without_references(self, source_file, tmp_path, capsys):
        """Test that direct mode reports the unmappable category."""
        target = tmp_path / "target.txt"

        code = main([str(source_file), "UTF-8", str(target), "ISO-8859-1"])

        assert code == EXIT_UNMAPPABLE_CHARACTER
        assert "cannot be represented in iso8859-1" in capsys.readouterr().err

    def test_malformed_input(self, source_file, tmp_path, capsys):
        """Test that undecodable input reports the malformed category."""
        target = tmp_path / "target.txt"

        code = main([str(source_file), "US-ASCII", str(target), "UTF-8"])

        assert code == EXIT_MALFORMED_INPUT
        assert "not valid ascii" in capsys.readouterr().err

    def test_unknown_encoding(self, source_file, tmp_path, capsys):
        """Test that unknown encodings are usage errors."""
        code = main([str(source_file), "no-such-enc", str(tmp_path / "t.txt"), "UTF-8"])

        assert code == EXIT_USAGE
        assert "no-such-enc" in capsys.readouterr().err

    def test_missing_arguments(self, capsys):
        """Test that incomplete positional arguments are usage errors."""
        code = main(["in.txt", "UTF-8"])

        assert code == EXIT_USAGE
        assert "required" in capsys.readouterr().err

    def test_invalid_buffer_size(self, source_file, tmp_path):
        """Test that a non-positive buffer size is rejected."""
        code = main([
            str(source_file), "UTF-8", str(tmp_path / "t.txt"), "UTF-8", "-b", "0"
        ])

        assert code == EXIT_USAGE

    def test_existing_target_requires_force(self, source_file, tmp_path, capsys):
        """Test that existing targets are not overwritten without --force."""
        target = tmp_path / "target.txt"
        target.write_bytes(b"keep me")

        code = main([str(source_file), "UTF-8", str(target), "UTF-8"])

        assert code == EXIT_FAILURE
        assert target.read_bytes() == b"keep me"
        assert "--force" in capsys.readouterr().err

        code = main([str(source_file), "UTF-8", str(target), "UTF-8", "--force"])

        assert code == EXIT_OK
        assert target.read_bytes() == "$¥€".encode("utf-8")

    def test_same_source_and_target(self, source_file):
        """Test that translating a file onto itself is refused."""
        code = main([str(source_file), "UTF-8", str(source_file), "UTF-8", "--force"])

        assert code == EXIT_FAILURE
        assert source_file.read_bytes() == "$¥€".encode("utf-8")

    def test_missing_source(self, tmp_path, capsys):
        """Test that an unreadable source is refused."""
        code = main([
            str(tmp_path / "missing.txt"), "UTF-8", str(tmp_path / "t.txt"), "UTF-8"
        ])

        assert code == EXIT_FAILURE
        assert "Cannot read source file" in capsys.readouterr().err

    def test_config_file(self, source_file, tmp_path):
        """Test that settings are read from a config file."""
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps({"use_reference_substitution": True, "buffer_size": 1}),
            encoding="utf-8",
        )
        target = tmp_path / "target.txt"

        code = main([
            str(source_file), "UTF-8", str(target), "US-ASCII",
            "--config", str(config_path), "-q",
        ])

        assert code == EXIT_OK
        assert target.read_bytes() == b"$&#165;&#8364;"

    def test_invalid_config_file(self, source_file, tmp_path, capsys):
        """Test that a config file with unknown fields is a usage error."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"colour": "blue"}), encoding="utf-8")

        code = main([
            str(source_file), "UTF-8", str(tmp_path / "t.txt"), "UTF-8",
            "--config", str(config_path),
        ])

        assert code == EXIT_USAGE
        assert "colour" in capsys.readouterr().err

    def test_malformed_config_file(self, source_file, tmp_path, capsys):
        """Test that a config file that is not JSON is a usage error."""
        config_path = tmp_path / "config.json"
        config_path.write_text("{not json", encoding="utf-8")

        code = main([
            str(source_file), "UTF-8", str(tmp_path / "t.txt"), "UTF-8",
            "--config", str(config_path),
        ])

        assert code == EXIT_USAGE
        assert "Invalid configuration JSON" in capsys.readouterr().err

    def test_missing_config_file(self, source_file, tmp_path, capsys):
        """Test that a missing config file is a usage error."""
        code = main([
            str(source_file), "UTF-8", str(tmp_path / "t.txt"), "UTF-8",
            "--config", str(tmp_path / "missing.json"),
        ])

        assert code == EXIT_USAGE
        assert "Could not read config file" in capsys.readouterr().err

    def test_list_encodings(self, capsys):
        """Test listing available encodings."""
        code = main(["--list-encodings"])

        output = capsys.readouterr().out.splitlines()
        assert code == EXIT_OK
        assert "utf-8" in output
        assert "iso8859-1" in output


class TestPathChecks:
    """Test pre-flight path validation."""

    def test_stdio_paths(self):
        """Test that stdin and stdout are always acceptable."""
        assert check_paths("-", "-", force=False) is None

    def test_new_target(self, source_file, tmp_path):
        """Test that a new target file is acceptable."""
        assert check_paths(str(source_file), str(tmp_path / "new.txt"), False) is None


class TestFailureReporting:
    """Test category-specific messages and exit codes."""

    def test_cancelled(self):
        """Test that interrupted I/O maps to the cancelled exit code."""
        for error_class in (ReadFailureError, WriteFailureError):
            error = error_class("interrupted")
            error.__cause__ = InterruptedError()

            assert exit_code_for(error) == EXIT_CANCELLED
            assert describe_failure(error) == "Translation was canceled."

    def test_plain_io_failure(self):
        """Test that other I/O failures map to the generic exit code."""
        error = WriteFailureError("disk full")
        error.__cause__ = OSError("disk full")

        assert exit_code_for(error) == EXIT_FAILURE
        assert describe_failure(error) == "Translation failed: disk full"

    @pytest.mark.parametrize("error,code", [
        (MalformedInputError("x", encoding="utf-8", position=1), EXIT_MALFORMED_INPUT),
        (UnmappableCharacterError("x", encoding="ascii"), EXIT_UNMAPPABLE_CHARACTER),
        (UnknownEncodingError("x"), EXIT_USAGE),
        (InvalidArgumentError("x"), EXIT_USAGE),
    ])
    def test_exit_codes(self, error, code):
        """Test exit codes for decode, encode and argument failures."""
        assert exit_code_for(error) == code
