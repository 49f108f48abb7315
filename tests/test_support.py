import io
import os
import re
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

from qrcards.core.errors import EncodingFailure
from qrcards.render.commands import CodeImage, DrawCommand

# =============================================================================
# Test Constants
# =============================================================================

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
PDF_HEADER = b"%PDF-"
FAKE_IMAGE_BYTES = b"fake-code-image"
_PAGE_OBJECT_RE = re.compile(rb"/Type\s*/Page\b")


# =============================================================================
# Environment Helpers
# =============================================================================


@contextmanager
def temp_env(overrides: dict[str, str], *, clear: bool = False):
    with mock.patch.dict(os.environ, overrides, clear=clear):
        yield


def isolated_env(tmpdir: str | Path) -> dict[str, str]:
    """Point user config and the value store into a scratch directory."""
    root = Path(tmpdir)
    return {
        "XDG_CONFIG_HOME": str(root / "xdg"),
        "QRCARDS_VALUE_STORE": str(root / "values.json"),
        "QRCARDS_CONFIG": "",
    }


@contextmanager
def suppress_output():
    stdout = io.StringIO()
    stderr = io.StringIO()
    with redirect_stdout(stdout), redirect_stderr(stderr):
        yield


def build_cli_env(*, overrides: dict[str, str] | None = None) -> dict[str, str]:
    env = os.environ.copy()
    src_root = str(Path(__file__).resolve().parents[1] / "src")
    existing = env.get("PYTHONPATH")
    env["PYTHONPATH"] = src_root if not existing else os.pathsep.join((src_root, existing))
    if overrides:
        env.update(overrides)
    return env


# =============================================================================
# Record Builders
# =============================================================================


def make_record(index: int, **overrides: str | None) -> dict[str, str | None]:
    record: dict[str, str | None] = {
        "HH ID": f"HH{index:03d}",
        "Name": f"Person {index}",
        "Gender": "F" if index % 2 else "M",
        "Mobile": f"017{index:08d}",
        "Union": "Kamalapur",
    }
    record.update(overrides)
    return record


def make_records(count: int, *, start: int = 1) -> list[dict[str, str | None]]:
    return [make_record(index) for index in range(start, start + count)]


def csv_text(rows: list[list[str]]) -> str:
    return "".join(",".join(row) + "\n" for row in rows)


# =============================================================================
# Collaborator Fakes
# =============================================================================


class FakeEncoder:
    """Records every request and returns a fixed image."""

    def __init__(self, *, fail_on: set[str] | None = None) -> None:
        self.calls: list[tuple[str, float]] = []
        self.fail_on = fail_on or set()

    def __call__(self, text: str, size: float) -> CodeImage:
        self.calls.append((text, size))
        if not text or text in self.fail_on:
            raise EncodingFailure(f"cannot encode {text!r}")
        return CodeImage(data=FAKE_IMAGE_BYTES + text.encode("utf-8"), size=size)


class RecordingSink:
    def __init__(self, *, fail_on_draw: Exception | None = None) -> None:
        self.pages: list[tuple[float, float]] = []
        self.commands: list[DrawCommand] = []
        self.serialized = False
        self.fail_on_draw = fail_on_draw

    def add_page(self, width: float, height: float) -> None:
        self.pages.append((width, height))

    def draw(self, command: DrawCommand) -> None:
        if self.fail_on_draw is not None:
            raise self.fail_on_draw
        self.commands.append(command)

    def serialize(self) -> bytes:
        self.serialized = True
        return f"doc:{len(self.pages)}:{len(self.commands)}".encode("ascii")


class RecordingProgress:
    def __init__(self) -> None:
        self.calls: list[tuple[float, str | None]] = []

    def report(self, percent: float, message: str | None = None) -> None:
        self.calls.append((percent, message))

    @property
    def percents(self) -> list[float]:
        return [percent for percent, _ in self.calls]


# =============================================================================
# Assertions
# =============================================================================


def is_valid_pdf(data: bytes) -> bool:
    return data.startswith(PDF_HEADER) and b"%%EOF" in data[-1024:]


def pdf_page_count(data: bytes) -> int:
    return len(_PAGE_OBJECT_RE.findall(data))


