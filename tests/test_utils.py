"""Tests for binary detection, decoding and language mapping."""

import codecs

import pytest

from histpack.utils import (
    decode_text,
    detect_binary,
    is_binary_content,
    is_binary_extension,
    language_for_path,
)


class TestLanguageForPath:
    @pytest.mark.parametrize(
        "path, language",
        [
            ("src/Program.cs", "csharp"),
            ("ui/Main.XAML", "xml"),
            ("README.md", "markdown"),
            ("web/app.tsx", "tsx"),
            ("deploy.ps1", "powershell"),
            ("run.cmd", "batch"),
            ("config.yml", "yaml"),
            ("pkg/module.py", "python"),
            (".gitignore", "gitignore"),
            ("sub/.gitattributes", "gitattributes"),
            ("Makefile", ""),
            ("data.unknown", ""),
        ],
    )
    def test_mapping(self, path, language):
        assert language_for_path(path) == language


class TestBinaryDetection:
    def test_extension(self):
        assert is_binary_extension("assets/logo.PNG")
        assert not is_binary_extension("src/app.py")

    def test_null_bytes_mean_binary(self):
        assert is_binary_content(b"abc\x00def")

    def test_plain_and_utf8_text_is_not_binary(self):
        assert not is_binary_content(b"hello world\n")
        assert not is_binary_content("héllo wörld ✓ ok\n".encode("utf-8"))
        assert not is_binary_content(b"")

    def test_control_heavy_content_is_binary(self):
        assert is_binary_content(bytes(range(1, 32)) * 4)

    def test_utf16_with_bom_is_text(self):
        assert not is_binary_content(codecs.BOM_UTF16_LE + "hi".encode("utf-16-le"))

    def test_detect_binary_checks_extension_first(self):
        assert detect_binary("image.png", b"plain text")
        assert not detect_binary("notes.md", b"plain text")


class TestDecodeText:
    def test_utf8(self):
        assert decode_text("naïve\n".encode("utf-8")) == "naïve\n"

    def test_utf8_bom_is_stripped(self):
        assert decode_text(codecs.BOM_UTF8 + b"text") == "text"

    def test_utf16(self):
        assert decode_text("wide".encode("utf-16")) == "wide"

    def test_invalid_bytes_are_replaced(self):
        assert decode_text(b"ok\xffok") == "ok\ufffdok"
