"""
文件校验器单元测试
测试大小、MIME类型、文件名检查以及MIME推断
"""

import pytest

from cloud_storage.core.config.storage_config import StorageConfig
from cloud_storage.core.storage.exceptions import (
    EmptyFilenameError,
    FileTooLargeError,
    FilenameTooLongError,
    InvalidFilenameError,
    MimeTypeNotAllowedError,
    ValidationError,
)
from cloud_storage.core.storage.validator import DEFAULT_MIME_TYPE, FileValidator


@pytest.mark.unit
@pytest.mark.storage
class TestFileValidator:
    """文件校验器测试类"""

    @pytest.fixture
    def validator(self, s3_backend_config):
        config = StorageConfig(
            backend=s3_backend_config,
            max_file_size=100,
            allowed_mime_types={"image/png"},
        )
        return FileValidator(config)

    def test_size_equal_to_limit_passes(self, validator):
        validator.validate_file(b"x" * 100, "a.png", "image/png")

    def test_size_over_limit_fails(self, validator):
        with pytest.raises(FileTooLargeError) as exc_info:
            validator.validate_file(b"x" * 101, "a.png", "image/png")

        assert exc_info.value.code == "FILE_TOO_LARGE"
        assert exc_info.value.details == {'size': 101, 'max_size': 100}

    def test_default_limit_is_ten_mib(self, storage_config):
        validator = FileValidator(storage_config)
        validator.validate_file(b"\0" * (10 * 1024 * 1024), "big.bin")
        with pytest.raises(FileTooLargeError):
            validator.validate_file(b"\0" * (10 * 1024 * 1024 + 1), "big.bin")

    def test_mime_not_allowed(self, validator):
        with pytest.raises(MimeTypeNotAllowedError) as exc_info:
            validator.validate_file(b"data", "a.jpg", "image/jpeg")

        assert "image/jpeg" in exc_info.value.message
        assert exc_info.value.details['allowed'] == ["image/png"]

    def test_missing_content_type_skips_mime_check(self, validator):
        validator.validate_file(b"data", "a.jpg")

    def test_no_allowlist_accepts_any_type(self, storage_config):
        FileValidator(storage_config).validate_file(b"data", "a.exe", "application/x-msdownload")

    @pytest.mark.parametrize("filename", ["", "   ", "\t"])
    def test_empty_filename(self, validator, filename):
        with pytest.raises(EmptyFilenameError):
            validator.validate_file(b"data", filename)

    @pytest.mark.parametrize("char", list('<>:"/\\|?*') + ["\x00", "\x01", "\x1f"])
    def test_invalid_characters(self, validator, char):
        with pytest.raises(InvalidFilenameError):
            validator.validate_file(b"data", f"bad{char}name.png")

    def test_filename_length_boundary(self, validator):
        validator.validate_file(b"data", "a" * 251 + ".png")
        with pytest.raises(FilenameTooLongError) as exc_info:
            validator.validate_file(b"data", "a" * 252 + ".png")

        assert exc_info.value.details == {'length': 256, 'max_length': 255}

    def test_checks_run_in_order(self, validator):
        """大小检查先于MIME和文件名检查"""
        with pytest.raises(FileTooLargeError):
            validator.validate_file(b"x" * 101, "", "image/jpeg")
        with pytest.raises(MimeTypeNotAllowedError):
            validator.validate_file(b"x", "", "image/jpeg")

    def test_validation_errors_share_base_class(self, validator):
        with pytest.raises(ValidationError):
            validator.validate_file(b"x", "a|b")


@pytest.mark.unit
@pytest.mark.storage
class TestMimeInference:
    """MIME类型推断测试类"""

    @pytest.mark.parametrize("filename,expected", [
        ("photo.JPG", "image/jpeg"),
        ("icon.svg", "image/svg+xml"),
        ("report.docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
        ("a.txt", "text/plain"),
        ("song.m4a", "audio/mp4"),
        ("clip.mov", "video/quicktime"),
        ("backup.tar.gz", "application/gzip"),
        ("archive.7z", "application/x-7z-compressed"),
        ("data.csv", "text/csv"),
    ])
    def test_known_extensions(self, filename, expected):
        assert FileValidator.infer_mime_type(filename) == expected

    @pytest.mark.parametrize("filename", ["README", "file.unknownext", "trailing."])
    def test_unknown_extension_falls_back(self, filename):
        assert FileValidator.infer_mime_type(filename) == DEFAULT_MIME_TYPE

    def test_get_file_extension(self):
        assert FileValidator.get_file_extension("Archive.TAR.GZ") == "gz"
        assert FileValidator.get_file_extension("noext") == ""
