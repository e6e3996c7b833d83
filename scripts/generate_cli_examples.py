from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")
BASE_ARGS = ["--iterations", "200", "--width", "180", "--steps", "400"]


@dataclass
class Expected:
    path: Path


@dataclass
class Example:
    name: str
    args: list[str]
    expected: list[Expected]
    clean: list[Path] | None = None

    def full_args(self) -> list[str]:
        return ["python", "render.py", *self.args]


EXAMPLES: list[Example] = [
    Example(
        name="iterations",
        args=[*BASE_ARGS, "--iterations", "1500", "--output", str(EXAMPLES_ROOT / "iterations" / "high-iterations.png")],
        expected=[Expected(EXAMPLES_ROOT / "iterations" / "high-iterations.png")],
        clean=[EXAMPLES_ROOT / "iterations"],
    ),
    Example(
        name="width",
        args=[*BASE_ARGS, "--width", "300", "--output", str(EXAMPLES_ROOT / "width" / "wide.png")],
        expected=[Expected(EXAMPLES_ROOT / "width" / "wide.png")],
        clean=[EXAMPLES_ROOT / "width"],
    ),
    Example(
        name="height",
        args=[*BASE_ARGS, "--height", "180", "--output", str(EXAMPLES_ROOT / "height" / "square.png")],
        expected=[Expected(EXAMPLES_ROOT / "height" / "square.png")],
        clean=[EXAMPLES_ROOT / "height"],
    ),
    Example(
        name="colors",
        args=[
            *BASE_ARGS,
            "--color1", "#0d47a1",
            "--color2", "bbdefb",
            "--inside-color", "black",
            "--output", str(EXAMPLES_ROOT / "colors" / "blue.png"),
        ],
        expected=[Expected(EXAMPLES_ROOT / "colors" / "blue.png")],
        clean=[EXAMPLES_ROOT / "colors"],
    ),
    Example(
        name="steps",
        args=[*BASE_ARGS, "--steps", "8", "--output", str(EXAMPLES_ROOT / "steps" / "banded.png")],
        expected=[Expected(EXAMPLES_ROOT / "steps" / "banded.png")],
        clean=[EXAMPLES_ROOT / "steps"],
    ),
    Example(
        name="backend",
        args=[*BASE_ARGS, "--backend", "tensorflow", "--output", str(EXAMPLES_ROOT / "backend" / "vectorized.png")],
        expected=[Expected(EXAMPLES_ROOT / "backend" / "vectorized.png")],
        clean=[EXAMPLES_ROOT / "backend"],
    ),
    Example(
        name="format",
        args=[*BASE_ARGS, "--format", "webp", "--output", str(EXAMPLES_ROOT / "format" / "custom.webp")],
        expected=[Expected(EXAMPLES_ROOT / "format" / "custom.webp")],
        clean=[EXAMPLES_ROOT / "format"],
    ),
    Example(
        name="verbose",
        args=[*BASE_ARGS, "--verbose", "--output", str(EXAMPLES_ROOT / "verbose" / "diagnostic.png")],
        expected=[Expected(EXAMPLES_ROOT / "verbose" / "diagnostic.png")],
        clean=[EXAMPLES_ROOT / "verbose"],
    ),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()


def _prepare(example: Example) -> None:
    clean = example.clean or []
    _ensure_clean(clean)
    for expected in example.expected:
        expected.path.parent.mkdir(parents=True, exist_ok=True)


def _verify(example: Example) -> None:
    for expected in example.expected:
        if not expected.path.is_file():
            raise RuntimeError(f"Expected file {expected.path} was not created")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _prepare(example)
        completed = subprocess.run(example.full_args(), check=True)
        if completed.returncode != 0:
            raise RuntimeError(f"Example {example.name} failed with {completed.returncode}")
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
