import pytest


@pytest.fixture
def write_ini(tmp_path):
    """Write `text` to a fresh .ini file and return its path."""
    counter = iter(range(1_000_000))

    def _write(text: str | bytes, name: str | None = None) -> str:
        path = tmp_path / (name or f"test_{next(counter)}.ini")
        if isinstance(text, bytes):
            path.write_bytes(text)
        else:
            path.write_text(text, encoding="utf-8", newline="")
        return str(path)

    return _write
