import pytest

FREQUENCIES = [31, 62, 125, 250, 500, 1000, 2000, 4000, 8000, 16000]


def filter_line(index, fc=100, gain=3.5, q=0.7, kind="PK"):
    return f"Filter {index}: ON {kind} Fc {fc} Hz Gain {gain} dB Q {q}"


def filter_text(count=10, preamp=None, **overrides):
    lines = []
    if preamp is not None:
        lines.append(f"Preamp: {preamp} dB")
    for i in range(count):
        lines.append(filter_line(i + 1, **overrides))
    return "\n".join(lines) + "\n"


@pytest.fixture
def uniform_text():
    """Ten identical peaking filters at 100 Hz."""
    return filter_text()


@pytest.fixture
def apo_export():
    """A realistic EqualizerAPO ParametricEq export with a preamp line."""
    lines = ["Preamp: -6.4 dB"]
    for i, fc in enumerate(FREQUENCIES):
        gain = -2.0 + i * 0.5
        lines.append(f"Filter {i + 1}: ON PK Fc {fc} Hz Gain {gain} dB Q 1.41")
    return "\r\n".join(lines) + "\r\n"


@pytest.fixture
def export_file(tmp_path, apo_export):
    path = tmp_path / "headphones.txt"
    path.write_text(apo_export, encoding="utf-8", newline="")
    return path
