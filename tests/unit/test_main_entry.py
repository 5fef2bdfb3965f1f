"""Unit tests for __main__.py entry points."""

import subprocess
import sys
from unittest.mock import patch

import pytest


@pytest.mark.unit
class TestLivefindMain:
    """Test livefind/__main__.py entry point."""

    def test_main_module_importable(self):
        """Test that __main__.py module is importable."""
        import livefind.__main__  # noqa: F401

    def test_main_refers_to_cli_main(self):
        """Test that the module entry point is the CLI main."""
        from livefind.__main__ import main
        from livefind.cli import main as cli_main

        assert main is cli_main

    def test_main_with_help(self):
        """Test running with --help argument."""
        from livefind.cli import main

        with patch.object(sys, "argv", ["livefind", "--help"]):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 0

    def test_run_as_module(self, tmp_path):
        """Test ``python -m livefind`` end to end."""
        notes = tmp_path / "notes.txt"
        notes.write_text("cat sat", encoding="utf-8")
        result = subprocess.run(
            [sys.executable, "-m", "livefind", "find", str(notes), "cat", "--no-config"],
            capture_output=True,
            text=True,
            cwd=tmp_path,
        )
        assert result.returncode == 0
        assert "[0, 3)" in result.stdout
