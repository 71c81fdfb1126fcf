"""Unit tests for UploadSignatureService."""

import hashlib

import pytest

from techtube.application.dtos.upload import GenerateSignatureRequest
from techtube.application.services.signing import (
    UploadSignatureService,
    build_string_to_sign,
    compute_signature,
)
from techtube.commons.settings.models import MediaStorageSettings
from techtube.domain.exceptions import ConfigurationException, ValidationException

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def media_settings():
    """Media settings with test credentials."""
    return MediaStorageSettings(
        cloud_name="demo",
        api_key="key-123",
        api_secret="s3cr3t",
    )


@pytest.fixture
def service(media_settings):
    return UploadSignatureService(media_settings)


def _request(**overrides) -> GenerateSignatureRequest:
    fields = {
        "timestamp": 1700000000,
        "folder": "videos",
        "auto_chaptering": True,
        "resource_type": "video",
    }
    fields.update(overrides)
    return GenerateSignatureRequest(**fields)


# =============================================================================
# Canonical string and digest
# =============================================================================


class TestSignatureHelpers:
    """Tests for the canonical string and digest helpers."""

    def test_string_to_sign_sorts_keys_and_appends_secret(self):
        params = {"timestamp": "1700000000", "folder": "videos", "auto_chaptering": "true"}
        assert build_string_to_sign(params, "s3cr3t") == (
            "auto_chaptering=true&folder=videos&timestamp=1700000000s3cr3t"
        )

    def test_compute_signature_is_sha1_hex(self):
        params = {"timestamp": "1"}
        expected = hashlib.sha1(b"timestamp=1secret").hexdigest()
        assert compute_signature(params, "secret") == expected
        assert len(expected) == 40


# =============================================================================
# generate_signature
# =============================================================================


class TestGenerateSignature:
    """Tests for UploadSignatureService.generate_signature."""

    def test_returns_public_fields(self, service):
        result = service.generate_signature(_request())

        assert result.api_key == "key-123"
        assert result.cloud_name == "demo"
        assert result.timestamp == 1700000000
        assert len(result.signature) == 40

    def test_signed_params(self, service):
        result = service.generate_signature(_request())
        assert result.signed_params == {
            "auto_chaptering": "true",
            "folder": "videos",
            "timestamp": "1700000000",
        }

    def test_signature_matches_signed_params(self, service):
        result = service.generate_signature(_request())
        assert result.signature == compute_signature(result.signed_params, "s3cr3t")

    def test_resource_type_is_not_signed(self, service):
        video = service.generate_signature(_request(resource_type="video"))
        image = service.generate_signature(_request(resource_type="image"))

        assert "resource_type" not in video.signed_params
        assert video.signature == image.signature

    def test_secret_never_returned(self, service):
        result = service.generate_signature(_request())
        assert "s3cr3t" not in result.model_dump_json()

    def test_optional_params_omitted(self, service):
        result = service.generate_signature(
            _request(folder=None, auto_chaptering=None)
        )
        assert result.signed_params == {"timestamp": "1700000000"}

    def test_false_auto_chaptering_is_omitted(self, service):
        result = service.generate_signature(_request(auto_chaptering=False))
        assert "auto_chaptering" not in result.signed_params

    def test_deterministic(self, service):
        first = service.generate_signature(_request())
        second = service.generate_signature(_request())
        assert first.signature == second.signature

    def test_folder_changes_signature(self, service):
        a = service.generate_signature(_request(folder="videos"))
        b = service.generate_signature(_request(folder="shorts"))
        assert a.signature != b.signature

    def test_adjacent_timestamps_differ(self, service):
        a = service.generate_signature(_request(timestamp=1700000000))
        b = service.generate_signature(_request(timestamp=1700000001))
        assert a.signature != b.signature

    def test_empty_resource_type_rejected(self, service):
        with pytest.raises(ValidationException) as exc_info:
            service.generate_signature(_request(resource_type=""))
        assert exc_info.value.field == "resource_type"

    @pytest.mark.parametrize("missing", ["api_key", "api_secret", "cloud_name"])
    def test_missing_configuration(self, media_settings, missing):
        settings = media_settings.model_copy(update={missing: ""})
        service = UploadSignatureService(settings)

        with pytest.raises(ConfigurationException) as exc_info:
            service.generate_signature(_request())

        assert exc_info.value.missing == [missing]

    def test_configuration_checked_before_input(self):
        service = UploadSignatureService(MediaStorageSettings())
        with pytest.raises(ConfigurationException) as exc_info:
            service.generate_signature(_request(resource_type=""))
        assert exc_info.value.missing == ["api_key", "api_secret", "cloud_name"]
