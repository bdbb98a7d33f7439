"""
Tests for loading candidate actions
"""

import json

import pytest

from src.actions_sync.candidates import load_candidates
from src.actions_sync.exceptions import CandidateInputError


class TestLoadCandidates:
    """Test reading the candidate actions file."""

    def test_loads_actions_in_order(self, tmp_path, sample_candidates):
        """Test a valid file."""
        path = tmp_path / "status.json"
        path.write_text(json.dumps(sample_candidates), encoding="utf-8")

        assert load_candidates(path) == sample_candidates

    def test_accepts_string_path(self, tmp_path):
        """Test that a str path works too."""
        path = tmp_path / "status.json"
        path.write_text("[]", encoding="utf-8")

        assert load_candidates(str(path)) == []

    def test_missing_file(self, tmp_path):
        """Test an unreadable file."""
        with pytest.raises(CandidateInputError, match="Cannot read"):
            load_candidates(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        """Test a file that is not JSON."""
        path = tmp_path / "status.json"
        path.write_text("[{not json", encoding="utf-8")

        with pytest.raises(CandidateInputError, match="Invalid JSON"):
            load_candidates(path)

    def test_top_level_must_be_list(self, tmp_path):
        """Test a JSON object at the top level."""
        path = tmp_path / "status.json"
        path.write_text('{"owner": "actions"}', encoding="utf-8")

        with pytest.raises(CandidateInputError, match="JSON list"):
            load_candidates(path)

    def test_entries_must_be_objects(self, tmp_path):
        """Test a list holding a non-object."""
        path = tmp_path / "status.json"
        path.write_text('[{"owner": "a", "name": "b"}, "oops"]', encoding="utf-8")

        with pytest.raises(CandidateInputError, match="index 1"):
            load_candidates(path)

    def test_invalid_encoding(self, tmp_path):
        """Test a file that is not valid UTF-8."""
        path = tmp_path / "status.json"
        path.write_bytes(b'[{"owner": "a", "name": "\xff\xfe"}]')

        with pytest.raises(CandidateInputError, match="Cannot decode"):
            load_candidates(path)
