"""Tests for package-manager helpers."""

from unittest.mock import call, patch

from connector_installer.lib.command import CmdResult
from connector_installer.lib.osdetect import DEBIAN, RHEL, Platform
from connector_installer.lib.pkg import (
    APT_LOCKS,
    add_repository,
    install_prerequisites,
    wait_for_package_lock,
)

DEB = Platform(family=DEBIAN, id="ubuntu", id_like="debian")
EL = Platform(family=RHEL, id="rocky", id_like="rhel centos fedora")


def result(argv, rc=0, stdout=""):
    return CmdResult(argv=list(argv), returncode=rc, stdout=stdout, stderr="")


class TestWaitForPackageLock:
    def test_free_immediately(self):
        sleeps = []
        with patch("connector_installer.lib.pkg.run_cmd", return_value=result(["fuser"], rc=1)) as run:
            assert wait_for_package_lock(DEB, attempts=3, sleep=sleeps.append) is True

        run.assert_called_once_with(["fuser", *APT_LOCKS], check=False)
        assert sleeps == []

    def test_clears_after_a_few_checks(self):
        codes = iter([0, 0, 1])
        sleeps = []
        with patch(
            "connector_installer.lib.pkg.run_cmd",
            side_effect=lambda argv, check: result(argv, rc=next(codes)),
        ):
            assert wait_for_package_lock(DEB, attempts=5, interval=0.25, sleep=sleeps.append) is True

        assert sleeps == [0.25, 0.25]

    def test_gives_up_softly(self, caplog):
        sleeps = []
        with patch("connector_installer.lib.pkg.run_cmd", return_value=result(["fuser"], rc=0)):
            assert wait_for_package_lock(DEB, attempts=4, sleep=sleeps.append) is False

        assert len(sleeps) == 4
        assert "continuing anyway" in caplog.text

    def test_missing_fuser_counts_as_free(self, caplog):
        sleeps = []
        with patch(
            "connector_installer.lib.command.subprocess.run",
            side_effect=FileNotFoundError(2, "No such file or directory", "fuser"),
        ):
            assert wait_for_package_lock(DEB, attempts=2, sleep=sleeps.append) is True

        assert sleeps == []
        assert "assuming the package manager lock is free" in caplog.text

    def test_yum_pid_file(self, tmp_path):
        pid = tmp_path / "yum.pid"
        pid.write_text("123")
        sleeps = []

        def _sleep(_):
            sleeps.append(_)
            pid.unlink()

        with patch("connector_installer.lib.pkg.YUM_PID", str(pid)):
            assert wait_for_package_lock(EL, attempts=3, sleep=_sleep) is True
        assert len(sleeps) == 1


class TestRepository:
    def test_debian(self, tmp_path):
        list_path = tmp_path / "sources.list.d" / "fyde.list"

        def fake(argv, **kw):
            return result(argv, stdout="-----BEGIN PGP PUBLIC KEY BLOCK-----\n" if argv[0] == "wget" else "")

        with patch("connector_installer.lib.pkg.run_cmd", side_effect=fake) as run:
            add_repository(DEB, repo_url="repo.example.com", apt_list_path=str(list_path))

        assert list_path.read_text() == "deb https://repo.example.com/apt stable main\n"
        assert run.call_args_list == [
            call(["wget", "-q", "-O", "-", "https://repo.example.com/fyde-public-key.asc"]),
            call(["apt-key", "add", "-"], input_text="-----BEGIN PGP PUBLIC KEY BLOCK-----\n"),
            call(["apt-get", "update"]),
        ]

    def test_rhel(self, tmp_path):
        with patch("connector_installer.lib.pkg.run_cmd") as run:
            add_repository(EL, repo_url="repo.example.com", apt_list_path=str(tmp_path / "unused.list"))

        run.assert_called_once_with(
            ["yum-config-manager", "-y", "--add-repo", "https://repo.example.com/fyde.repo"],
            env={"OPENSSL_ENABLE_SHA1_SIGNATURES": "1"},
        )
        assert not (tmp_path / "unused.list").exists()


class TestPrerequisites:
    def test_rhel_installs_yum_utils(self):
        with patch("connector_installer.lib.pkg.run_cmd") as run:
            install_prerequisites(EL)
        run.assert_called_once_with(["yum", "-y", "install", "yum-utils"])

    def test_debian_needs_nothing(self):
        with patch("connector_installer.lib.pkg.run_cmd") as run:
            install_prerequisites(DEB)
        run.assert_not_called()
