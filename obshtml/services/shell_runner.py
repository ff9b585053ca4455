from __future__ import annotations

import logging

from PyQt6.QtCore import QEventLoop, QProcess

from obshtml.domain.interfaces import IShellRunner
from obshtml.domain.models import ShellResult
from obshtml.utils.constants import POST_EXPORT_GENERATOR

logger = logging.getLogger(__name__)

_FAILED_TO_START = QProcess.ProcessError.FailedToStart


def build_post_export_command(
    working_dir: str,
    config_path: str,
    generator: str = POST_EXPORT_GENERATOR,
) -> str:
    """
    `cd "<working_dir>"; <generator> -i "<config_path>"`.

    Paths are only wrapped in double quotes, not escaped: a path containing a
    quote character breaks (or injects into) the command.
    """
    invoke = f'{generator} -i "{config_path}"'
    if not working_dir:
        return invoke
    return f'cd "{working_dir}"; {invoke}'


class QtShellRunner(IShellRunner):
    """
    Runs one command through a shell via QProcess and waits for it in a local
    event loop, so the caller suspends while the UI keeps processing events.
    """

    def __init__(self, shell: str = "/bin/sh") -> None:
        self._shell = shell

    def run(self, command: str) -> ShellResult:
        logger.info("Running: %s", command)

        proc = QProcess()
        loop = QEventLoop()
        status: list[int] = []
        start_error: list[str] = []

        def on_finished(exit_code: int, _exit_status) -> None:
            status.append(int(exit_code))
            loop.quit()

        def on_error(error) -> None:
            # Only a failed start means "finished" will never come.
            if error == _FAILED_TO_START:
                start_error.append(proc.errorString())
                status.append(-1)
                loop.quit()

        proc.finished.connect(on_finished)
        proc.errorOccurred.connect(on_error)

        proc.setProgram(self._shell)
        proc.setArguments(["-c", command])
        proc.start()

        if not status:
            loop.exec()

        stdout = bytes(proc.readAllStandardOutput()).decode("utf-8", errors="replace")
        stderr = bytes(proc.readAllStandardError()).decode("utf-8", errors="replace")
        if start_error:
            stderr = stderr or start_error[0]

        return ShellResult(exit_status=status[0], stdout=stdout, stderr=stderr)
