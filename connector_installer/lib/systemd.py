from __future__ import annotations

from .command import run_cmd


def _unit(service: str) -> str:
    return service if "." in service else f"{service}.service"


def enable(service: str) -> None:
    run_cmd(["systemctl", "enable", _unit(service)])


def daemon_reload() -> None:
    run_cmd(["systemctl", "--system", "daemon-reload"])


def restart(service: str) -> None:
    run_cmd(["systemctl", "restart", _unit(service)])


def stop(service: str) -> None:
    run_cmd(["systemctl", "stop", _unit(service)])


def start(service: str) -> None:
    run_cmd(["systemctl", "start", _unit(service)])
