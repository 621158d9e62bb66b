"""
VaultChat Backend — Configuration Unit Tests
=============================================
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from vaultchat.config import Settings, parse_data_size


class TestParseDataSize:

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("10MB", 10 * 1024 * 1024),
            ("10mb", 10 * 1024 * 1024),
            ("512KB", 512 * 1024),
            ("2048", 2048),
            ("64B", 64),
            ("1GB", 1024 ** 3),
            (" 5 MB ", 5 * 1024 * 1024),
        ],
    )
    def test_valid_sizes(self, value, expected):
        assert parse_data_size(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   ", "ten MB", "10XB", "-5MB", "1.5MB"])
    def test_unparseable_sizes(self, value):
        assert parse_data_size(value) is None


class TestSettings:

    def test_allowed_mime_types_list(self):
        settings = Settings(chat_image_allowed_mime_types=" image/PNG, ,image/jpeg ")

        assert settings.allowed_mime_types_list == ["image/png", "image/jpeg"]

    def test_multipart_max_bytes(self):
        assert Settings(multipart_max_file_size="10MB").multipart_max_bytes == 10 * 1024 * 1024
        assert Settings(multipart_max_file_size="").multipart_max_bytes is None

    def test_detection_strategy_normalized(self):
        assert Settings(image_detection_strategy=" Declared ").image_detection_strategy == "declared"

    def test_unknown_detection_strategy_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(image_detection_strategy="exif")

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="LOUD")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test")

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
