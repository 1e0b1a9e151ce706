import subprocess

import pytest


class FakeRun:
    """Stands in for run_subprocess: canned results keyed on the command's leading words."""

    def __init__(self, responses=None, default=None):
        self.responses = responses or {}
        self.default = default if default is not None else (0, "", "")
        self.calls: list[list[str]] = []

    def __call__(self, cmd):
        self.calls.append(list(cmd))
        for prefix, response in self.responses.items():
            if tuple(cmd[: len(prefix)]) == prefix:
                break
        else:
            response = self.default
        if isinstance(response, Exception):
            raise response
        code, out, err = response
        return subprocess.CompletedProcess(cmd, code, out, err)

    def ran(self, *prefix):
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]


@pytest.fixture
def fake_run():
    return FakeRun
