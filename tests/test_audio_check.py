"""Tests for flactagger.audio_check — FLAC validation via mutagen."""

from flactagger.audio_check import check_flac
from flactagger.audio_check import check_flac_files
from flactagger.errors import ParseError
from mutagen.flac import FLACNoHeaderError
from unittest.mock import MagicMock
from unittest.mock import patch

import pathlib
import pytest


class TestCheckFlac:
    """Test single-file validation."""

    def test_valid_file(self):
        with patch("flactagger.audio_check.FLAC", return_value=MagicMock()) as mock_flac:
            check_flac("a.flac")
        mock_flac.assert_called_once_with("a.flac")

    def test_not_flac(self):
        with patch("flactagger.audio_check.FLAC", side_effect=FLACNoHeaderError("no header")):
            with pytest.raises(ParseError, match="not a FLAC file"):
                check_flac("a.mp3")

    def test_real_non_flac_file(self, tmp_path: pathlib.Path):
        p = tmp_path / "notes.flac"
        p.write_text("this is not audio")
        with pytest.raises(ParseError):
            check_flac(str(p))

    def test_unreadable(self):
        with patch("flactagger.audio_check.FLAC", side_effect=OSError("denied")):
            with pytest.raises(ParseError, match="denied"):
                check_flac("a.flac")


class TestCheckFlacFiles:
    def test_checks_every_file_in_order(self):
        with patch("flactagger.audio_check.FLAC") as mock_flac:
            check_flac_files(["b.flac", "a.flac"])
        assert [c.args[0] for c in mock_flac.call_args_list] == ["a.flac", "b.flac"]

    def test_stops_at_first_bad_file(self):
        with patch(
            "flactagger.audio_check.FLAC",
            side_effect=[MagicMock(), FLACNoHeaderError("x"), MagicMock()],
        ) as mock_flac:
            with pytest.raises(ParseError, match="b.flac"):
                check_flac_files(["a.flac", "b.flac", "c.flac"])
        assert mock_flac.call_count == 2
