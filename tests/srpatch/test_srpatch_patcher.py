"""Command-line tests for the srpatch tool."""

import json

import pytest

from srpatch.patcher import main, parse_arguments


ORIGINAL_METHOD = """    def increment(self):
        self.count += 1
        return self.count"""

PATCHED_METHOD = """    def increment(self, step=1):
        self.count += step
        return self.count"""


def run(workspace, *extra):
    """Run srpatch against the example files in the workspace."""
    return main([
        "--file", str(workspace / "example.py"),
        "--patch", str(workspace / "example.patch"),
        *extra
    ])


class TestArguments:
    """Test command-line parsing."""

    def test_defaults(self):
        """Test optional arguments default to None or False."""
        args = parse_arguments(["--file", "a.py", "--patch", "p.txt"])

        assert args.start_line is None
        assert args.end_line is None
        assert args.threshold is None
        assert args.buffer_lines is None
        assert args.apply is False
        assert args.backup is False

    def test_file_required(self):
        """Test --file must be given."""
        with pytest.raises(SystemExit):
            parse_arguments(["--patch", "p.txt"])


class TestDryRun:
    """Test the default dry-run mode."""

    def test_dry_run_leaves_file_unchanged(self, workspace, capsys):
        """Test a dry run reports the match without writing."""
        original = (workspace / "example.py").read_text(encoding='utf-8')

        exit_code = run(workspace)

        captured = capsys.readouterr()
        assert exit_code == 0
        assert "Patch can be applied at line 13 (100% similar)" in captured.out
        assert "Dry-run mode" in captured.out
        assert (workspace / "example.py").read_text(encoding='utf-8') == original

    def test_patch_information_shown(self, workspace, capsys):
        """Test the patch summary is printed."""
        run(workspace, "--start-line", "13", "--end-line", "15")

        captured = capsys.readouterr()
        assert "Patch Information:" in captured.out
        assert "Line hint:    13-15" in captured.out
        assert "Threshold:    1.00" in captured.out


class TestApply:
    """Test writing patched files."""

    def test_apply(self, workspace, capsys):
        """Test --apply writes the re-indented replacement."""
        original = (workspace / "example.py").read_text(encoding='utf-8')

        exit_code = run(workspace, "--apply")

        captured = capsys.readouterr()
        assert exit_code == 0
        assert "Successfully applied patch at line 13" in captured.out
        assert (workspace / "example.py").read_text(encoding='utf-8') == original.replace(ORIGINAL_METHOD, PATCHED_METHOD)
        assert not (workspace / "example.py.bak").exists()

    def test_apply_with_stale_hint(self, workspace):
        """Test a hint two lines off still patches the right place."""
        original = (workspace / "example.py").read_text(encoding='utf-8')

        exit_code = run(workspace, "--start-line", "11", "--end-line", "13", "--apply")

        assert exit_code == 0
        assert (workspace / "example.py").read_text(encoding='utf-8') == original.replace(ORIGINAL_METHOD, PATCHED_METHOD)

    def test_backup(self, workspace, capsys):
        """Test --backup keeps the original content."""
        original = (workspace / "example.py").read_text(encoding='utf-8')

        exit_code = run(workspace, "--apply", "--backup")

        captured = capsys.readouterr()
        assert exit_code == 0
        assert (workspace / "example.py.bak").read_text(encoding='utf-8') == original
        assert "Backup:" in captured.out

    def test_windows_line_endings_preserved(self, tmp_path, write_patch):
        """Test files using '\\r\\n' keep them after patching."""
        source = tmp_path / "crlf.txt"
        source.write_bytes(b"first\r\n    second\r\nthird\r\n")
        patch = write_patch("second", "changed")

        exit_code = main(["--file", str(source), "--patch", str(patch), "--apply"])

        assert exit_code == 0
        assert source.read_bytes() == b"first\r\n    changed\r\nthird\r\n"


class TestFailures:
    """Test failures leave the source file alone."""

    def test_no_match(self, workspace, write_patch, capsys):
        """Test a SEARCH block that isn't in the file is reported."""
        original = (workspace / "example.py").read_text(encoding='utf-8')
        patch = write_patch("def decrement(self):\n    self.count -= 1", "pass")

        exit_code = main(["--file", str(workspace / "example.py"), "--patch", str(patch), "--apply"])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "No sufficiently similar match found" in captured.err
        assert "Best Match Found:" in captured.err
        assert (workspace / "example.py").read_text(encoding='utf-8') == original

    def test_invalid_patch_syntax(self, workspace, capsys):
        """Test a patch file without markers is reported."""
        (workspace / "example.patch").write_text("--- a/example.py\n+++ b/example.py\n", encoding='utf-8')

        exit_code = run(workspace, "--apply")

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "Invalid diff format" in captured.err

    def test_hint_out_of_range(self, workspace, capsys):
        """Test a hint beyond the end of the file is reported."""
        exit_code = run(workspace, "--start-line", "40", "--end-line", "42")

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "Line range 40-42 is invalid" in captured.err

    def test_missing_source_file(self, workspace, capsys):
        """Test a missing source file is reported."""
        exit_code = main(["--file", str(workspace / "missing.py"), "--patch", str(workspace / "example.patch")])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "Source file not found" in captured.err

    def test_missing_patch_file(self, workspace, capsys):
        """Test a missing patch file is reported."""
        exit_code = main(["--file", str(workspace / "example.py"), "--patch", str(workspace / "missing.patch")])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "Patch file not found" in captured.err

    def test_patch_required(self, workspace, capsys):
        """Test --patch is needed unless only showing lines."""
        exit_code = main(["--file", str(workspace / "example.py")])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "--patch is required" in captured.err


class TestMatchingSettings:
    """Test threshold and buffer settings from flags and config files."""

    def test_threshold_flag_allows_fuzzy_match(self, workspace, write_patch):
        """Test --threshold accepts a near match."""
        patch = write_patch("self.count += 2", "self.count += 3")
        source = workspace / "example.py"

        strict = main(["--file", str(source), "--patch", str(patch), "--apply"])
        relaxed = main(["--file", str(source), "--patch", str(patch), "--threshold", "0.9", "--apply"])

        assert strict == 1
        assert relaxed == 0
        assert "        self.count += 3\n" in source.read_text(encoding='utf-8')

    def test_config_file(self, workspace, write_patch):
        """Test settings are read from a JSON config file."""
        patch = write_patch("self.count += 2", "self.count += 3")
        config = workspace / "settings.json"
        config.write_text(json.dumps({"similarityThreshold": 0.9}), encoding='utf-8')

        exit_code = main([
            "--file", str(workspace / "example.py"), "--patch", str(patch), "--config", str(config)
        ])

        assert exit_code == 0

    def test_flag_overrides_config_file(self, workspace, write_patch):
        """Test command-line flags take precedence over the config file."""
        patch = write_patch("self.count += 2", "self.count += 3")
        config = workspace / "settings.json"
        config.write_text(json.dumps({"similarityThreshold": 0.9}), encoding='utf-8')

        exit_code = main([
            "--file", str(workspace / "example.py"), "--patch", str(patch),
            "--config", str(config), "--threshold", "1.0"
        ])

        assert exit_code == 1

    def test_buffer_lines_flag(self, workspace):
        """Test a zero buffer stops a stale hint from finding the block."""
        exit_code = run(workspace, "--start-line", "4", "--end-line", "6", "--buffer-lines", "0")

        assert exit_code == 1

    @pytest.mark.parametrize("content", ['{"similarityThreshold": 3}', '{broken'])
    def test_invalid_config(self, workspace, capsys, content):
        """Test invalid config files are reported."""
        config = workspace / "settings.json"
        config.write_text(content, encoding='utf-8')

        exit_code = run(workspace, "--config", str(config))

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "Invalid configuration" in captured.err

    def test_invalid_threshold_flag(self, workspace, capsys):
        """Test an out-of-range --threshold is reported."""
        exit_code = run(workspace, "--threshold", "1.5")

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "Invalid configuration" in captured.err


class TestShowLines:
    """Test printing the source with line numbers."""

    def test_show_lines(self, workspace, capsys):
        """Test --show-lines prints every line with its number."""
        exit_code = main(["--file", str(workspace / "example.py"), "--show-lines"])

        captured = capsys.readouterr()
        assert exit_code == 0
        assert ' 1 | """Example module used by the patcher tests."""' in captured.out
        assert "13 |     def increment(self):" in captured.out

    def test_show_lines_does_not_need_patch(self, workspace):
        """Test --show-lines ignores a missing patch file."""
        exit_code = main(["--file", str(workspace / "example.py"), "--patch", str(workspace / "nope"), "--show-lines"])

        assert exit_code == 0


class TestLogging:
    """Test log output."""

    def test_log_file(self, workspace):
        """Test --verbose --log-file records matcher activity."""
        log_file = workspace / "srpatch.log"

        exit_code = run(workspace, "--verbose", "--log-file", str(log_file))

        assert exit_code == 0
        assert "SearchReplaceMatcher" in log_file.read_text(encoding='utf-8')
