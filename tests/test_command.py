"""Tests for the run_cmd wrapper around system tools."""

import pytest

from connector_installer.lib.command import CommandNotFoundError, fmt_argv, run_cmd


class TestRunCmd:
    def test_captures_output(self):
        r = run_cmd(["sh", "-c", "echo out; echo err >&2"])

        assert r.ok
        assert r.stdout == "out\n"
        assert r.stderr == "err\n"

    def test_env_layered_over_process_env(self):
        r = run_cmd(["sh", "-c", 'printf %s "$FYDE_TEST_VALUE"'], env={"FYDE_TEST_VALUE": "sha1"})
        assert r.stdout == "sha1"

    def test_input_text_fed_to_stdin(self):
        assert run_cmd(["cat"], input_text="key\n").stdout == "key\n"

    def test_failure_raises_with_check(self):
        with pytest.raises(RuntimeError, match=r"Command failed \(3\)"):
            run_cmd(["sh", "-c", "exit 3"])

    def test_failure_returned_without_check(self):
        r = run_cmd(["sh", "-c", "exit 3"], check=False)
        assert not r.ok
        assert r.returncode == 3

    @pytest.mark.parametrize("check", [True, False])
    def test_missing_executable(self, tmp_path, check):
        missing = str(tmp_path / "fuser")

        with pytest.raises(CommandNotFoundError) as exc:
            run_cmd([missing, "/var/lib/dpkg/lock"], check=check)

        assert isinstance(exc.value, RuntimeError)
        assert str(exc.value).startswith(f"Cannot run {missing}")
        assert exc.value.argv == [missing, "/var/lib/dpkg/lock"]


def test_fmt_argv_quotes():
    assert fmt_argv(["echo", "a b", "c"]) == "echo 'a b' c"
