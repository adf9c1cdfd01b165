from unittest import mock

from sqldyngen.tracing import Tracer, start_tracing


@mock.patch("time.time", return_value=1000.7)
def test_start_tracing_records_start(_time):
    tracer = start_tracing("TestTracing")
    assert tracer.start_time == 1000
    assert tracer.name == "TestTracing"


def test_end_reports_duration(capsys):
    with mock.patch("time.time", return_value=1000.0):
        tracer = start_tracing("TestTracing")
    with mock.patch("time.time", return_value=1003.2):
        duration = tracer.end()
    assert duration == 3
    assert capsys.readouterr().out == "Tracing ended. Duration: 3 seconds\n"


def test_context_manager_ends_trace(capsys):
    with mock.patch("time.time", return_value=50.0):
        with Tracer(start_time=48, name="block") as tracer:
            assert tracer.name == "block"
    assert capsys.readouterr().out == "Tracing ended. Duration: 2 seconds\n"


def test_immediate_end_is_short(capsys):
    tracer = start_tracing("TestTracing")
    duration = tracer.end()
    assert 0 <= duration <= 1
    assert capsys.readouterr().out.startswith("Tracing ended. Duration: ")