import io
import sys

from hdyssl.core.models import ToolInvocation
from hdyssl.core.runner import MULTI_TARGET_NOTICE, FileSink, TeeSink, open_sink, run_invocation

CHILD = "import sys; sys.stdout.write('out' + ' line\\n'); sys.stdout.flush(); sys.stderr.write('err line\\n')"


def python_invocation(code, tool="testssl", target="example.com"):
    return ToolInvocation(tool, target, sys.executable, ("-c", code))


class KeepOpen(io.BytesIO):
    closed_by_sink = False

    def close(self):
        self.closed_by_sink = True


def test_tee_sink_writes_both_and_leaves_stream_open(tmp_path):
    stream = KeepOpen()
    sink = open_sink(str(tmp_path / "f.txt"), True, stream)
    assert isinstance(sink, TeeSink)
    sink.write(b"hello\n")
    sink.close()
    assert not stream.closed_by_sink
    assert stream.getvalue() == b"hello\n"
    assert (tmp_path / "f.txt").read_bytes() == b"hello\n"


def test_file_sink_for_multi_target(tmp_path):
    sink = open_sink(str(tmp_path / "f.txt"), False)
    assert type(sink) is FileSink
    sink.write(b"x")
    sink.close()
    assert sink.fh.closed


def test_single_target_mirrors_combined_output(tmp_path, capsys):
    stream = io.BytesIO()
    code = run_invocation(python_invocation(CHILD), True, output_dir=str(tmp_path), stream=stream)
    assert code == 0
    data = (tmp_path / "testssl.example.com.txt").read_bytes()
    assert b"out line" in data and b"err line" in data
    assert stream.getvalue() == data
    out = capsys.readouterr().out
    assert "Running command:" in out
    assert MULTI_TARGET_NOTICE not in out


def test_multi_target_writes_file_only(tmp_path, capsys):
    code = run_invocation(python_invocation(CHILD), False, output_dir=str(tmp_path))
    assert code == 0
    assert b"out line" in (tmp_path / "testssl.example.com.txt").read_bytes()
    out = capsys.readouterr().out
    assert MULTI_TARGET_NOTICE in out
    assert "out line" not in out


def test_output_is_appended_across_runs(tmp_path):
    inv = python_invocation("print('run')")
    run_invocation(inv, False, output_dir=str(tmp_path))
    run_invocation(inv, False, output_dir=str(tmp_path))
    assert (tmp_path / "testssl.example.com.txt").read_text().splitlines() == ["run", "run"]


def test_non_zero_exit_is_reported_not_raised(tmp_path, capsys):
    code = run_invocation(python_invocation("import sys; sys.exit(3)"), False, output_dir=str(tmp_path))
    assert code == 3
    assert (tmp_path / "testssl.example.com.txt").exists()
    assert "exit status 3" in capsys.readouterr().out


def test_launch_failure_returns_none(tmp_path, capsys):
    inv = ToolInvocation("sslyze", "example.com", str(tmp_path / "no-such-binary"), ())
    assert run_invocation(inv, False, output_dir=str(tmp_path)) is None
    assert (tmp_path / "sslyze.example.com.txt").read_bytes() == b""
    assert "Error running the following command" in capsys.readouterr().out


def test_unopenable_output_skips_invocation(tmp_path, capsys):
    missing_dir = tmp_path / "missing"
    marker = tmp_path / "ran"
    inv = python_invocation(f"open({str(marker)!r}, 'w').close()")
    assert run_invocation(inv, False, output_dir=str(missing_dir)) is None
    assert not marker.exists()
    assert "Error opening file" in capsys.readouterr().out


class BrokenStream(io.BytesIO):
    def write(self, data):
        raise BrokenPipeError("console went away")


def test_console_write_failure_is_reported_not_raised(tmp_path, capsys):
    inv = python_invocation("print('x' * 100000)")
    assert run_invocation(inv, True, output_dir=str(tmp_path), stream=BrokenStream()) is None
    assert "Error writing output" in capsys.readouterr().out
