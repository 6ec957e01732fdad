import pytest


ERROR_DAY_LINES = [
    "2024-01-01 08:00:00.000 [ERR] System.InvalidOperationException: bad state in /src/Orders.cs:line 12",
    "   at Orders.Process() in /src/Orders.cs:line 12",
    "   at Orders.Run()",
    "2024-01-01 09:00:00.000 [ERR] System.TimeoutException: took too long",
    "2024-01-01 10:00:00.000 [ERR] System.InvalidOperationException: again",
    "2024-01-01 11:00:00.000 [WRN] Slow response from payment gateway",
]

INFO_DAY_LINES = [
    "2024-01-02 08:00:00.000 [INF] Service started",
    "2024-01-02 09:00:00.000 [INF] Health check ok",
]


def _write_log(directory, name, lines):
    path = directory / name
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def write_log():
    """Helper that writes lines to <directory>/<name> and returns the path"""
    return _write_log


@pytest.fixture
def sample_log_dir(tmp_path):
    """Two dated files: 3 ERR + 1 WRN on 2024-01-01, 2 INF on 2024-01-02"""
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    _write_log(log_dir, "2024-01-01.log", ERROR_DAY_LINES)
    _write_log(log_dir, "2024-01-02.log", INFO_DAY_LINES)
    return log_dir
