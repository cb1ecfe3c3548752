"""Unit tests for model management structures."""

from datetime import datetime, timedelta, timezone

import pytest

from ollama_sdk.models import CreateProgress, Model, ModelList, PullProgress, RunningModel, format_bytes


class TestFormatBytes:
    @pytest.mark.parametrize(
        "size,expected",
        [
            (0, "0 B"),
            (512, "512 B"),
            (1024, "1.0 KB"),
            (1536, "1.5 KB"),
            (1024**2, "1.0 MB"),
            (4_700_000_000, "4.4 GB"),
            (1024**5, "1024.0 TB"),
        ],
    )
    def test_format(self, size, expected):
        """Should format sizes in binary units."""
        assert format_bytes(size) == expected


class TestModel:
    def test_name_parts(self):
        """Should split name and tag."""
        model = Model(name="llama3:8b", size=1024, digest="sha256:abc")

        assert model.base_name == "llama3"
        assert model.tag == "8b"
        assert model.is_custom
        assert model.size_string == "1.0 KB"

    def test_latest_is_not_custom(self):
        """Should not treat the latest tag as custom."""
        model = Model(name="llama3:latest", size=0, digest="d")
        assert not model.is_custom

    def test_untagged_name(self):
        """Should handle names without a tag."""
        model = Model(name="llama3", size=0, digest="d")
        assert model.tag is None
        assert not model.is_custom

    def test_parses_tags_listing(self):
        """Should parse an /api/tags response."""
        listing = ModelList.model_validate_json(
            '{"models":[{"name":"llama3:latest","model":"llama3:latest",'
            '"modified_at":"2024-05-01T10:00:00.000000-07:00","size":4661224676,'
            '"digest":"sha256:365c","details":{"format":"gguf","family":"llama",'
            '"families":["llama"],"parameter_size":"8.0B","quantization_level":"Q4_0"}}]}'
        )

        assert len(listing.models) == 1
        assert listing.models[0].details.parameter_size == "8.0B"


class TestRunningModel:
    def test_vram_string(self):
        """Should report Unknown when size_vram is missing."""
        assert RunningModel(name="m", size=0, digest="d").vram_string == "Unknown"
        assert RunningModel(name="m", size=0, digest="d", size_vram=2048).vram_string == "2.0 KB"

    def test_expires_soon(self):
        """Should flag models unloading within a minute."""
        now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        soon = RunningModel(name="m", size=0, digest="d", expires_at=now + timedelta(seconds=30))
        later = RunningModel(name="m", size=0, digest="d", expires_at=now + timedelta(minutes=5))

        assert soon.expires_soon(now)
        assert not later.expires_soon(now)
        assert not RunningModel(name="m", size=0, digest="d").expires_soon(now)


class TestPullProgress:
    def test_percentage(self):
        """Should compute download progress."""
        progress = PullProgress(status="downloading", total=200, completed=50)
        assert progress.percentage == pytest.approx(25.0)
        assert not progress.is_complete

    def test_percentage_unknown(self):
        """Should return None without a known total."""
        assert PullProgress(status="pulling manifest").percentage is None
        assert PullProgress(status="x", total=0, completed=0).percentage is None

    def test_is_complete(self):
        """Should detect completion by status or byte counts."""
        assert PullProgress(status="success").is_complete
        assert PullProgress(status="downloading", total=10, completed=10).is_complete

    def test_done_only_on_success(self):
        """Should end a pull stream only on the success line."""
        assert PullProgress(status="success").done
        assert not PullProgress(status="downloading", total=10, completed=10).done
        assert PullProgress(status="verifying digest").text_delta == ""

    def test_finalize_returns_terminal_line(self):
        """Should return the terminal line unchanged."""
        progress = PullProgress(status="success")
        assert progress.finalize("", [PullProgress(status="pulling manifest")]) is progress


class TestCreateProgress:
    def test_done_only_on_success(self):
        """Should end a create stream only on the success line."""
        assert CreateProgress(status="success").done
        assert not CreateProgress(status="writing manifest").done

    def test_finalize_returns_terminal_line(self):
        """Should return the terminal line unchanged."""
        progress = CreateProgress(status="success")
        assert progress.finalize("") is progress
