#!/usr/bin/env python3
"""
Extract the Stellogen examples into a JavaScript module for the web playground.

Usage:
  python3 tools/build_examples.py
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

# Relative to the repository root.
EXAMPLES_DIR = Path("examples")
OUTPUT_FILE = Path("web/examples.js")

# Playground key -> file under EXAMPLES_DIR. Order is the output order.
EXAMPLE_MAPPING = {
    "hello": "hello.sg",
    "prolog": "prolog.sg",
    "macros": "macro_demo.sg",
    "nat": "nat.sg",
    "automata": "automata.sg",
    "stackmachine": "npda.sg",
    "turing": "turing.sg",
    "stack": "stack.sg",
}

PRELUDE_PATH = Path("milkyway/prelude.sg")
PRELUDE_BANNER = "' Prelude macros (normally imported)"

PRELUDE_MARKERS = (
    '(use-macros "milkyway/prelude.sg")',
    '(use-macros "./milkyway/prelude.sg")',
)

# Known per-file adjustments for running standalone in the playground.
FILE_FIXUPS = {
    "prolog.sg": {"replace": [("<show exec (process", "<show interact (process")]},
    "stack.sg": {"replace": [("<show exec (process", "<show interact (process")]},
    "hello.sg": {"prefix": "' Hello World\n"},
}


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class ExampleNotFound(FileNotFoundError):
    """A configured example file does not exist."""


@dataclass(frozen=True)
class ProcessedExample:
    key: str
    source: str
    text: str


@dataclass(frozen=True)
class SkippedExample:
    key: str
    source: str
    reason: str


@dataclass(frozen=True)
class BuildReport:
    results: tuple[ProcessedExample | SkippedExample, ...]
    output_file: Path

    @property
    def examples(self) -> dict[str, str]:
        return aggregate(self.results)

    @property
    def success_count(self) -> int:
        return sum(isinstance(r, ProcessedExample) for r in self.results)

    @property
    def error_count(self) -> int:
        return sum(isinstance(r, SkippedExample) for r in self.results)

    @property
    def exit_code(self) -> int:
        return 1 if self.error_count else 0


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_prelude(examples_dir: Path) -> str:
    """Read the shared macro prelude, banner included.

    The prelude is required by every example that imports it, so a read
    failure is reported and re-raised to end the run.
    """
    path = examples_dir / PRELUDE_PATH
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"❌ Cannot read prelude {path}: {exc}", file=sys.stderr)
        raise
    return f"{PRELUDE_BANNER}\n{text.strip()}"


def load_example(path: Path) -> str:
    if not path.exists():
        raise ExampleNotFound(f"File not found: {path.name}")
    return path.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Transformation
# ---------------------------------------------------------------------------

def process_example_content(content: str, prelude: str, filename: str | None = None) -> str:
    """Inline the prelude in place of its import directive, apply fixups, trim.

    Each marker spelling is replaced on its own, as plain text.
    """
    for marker in PRELUDE_MARKERS:
        if marker in content:
            content = content.replace(marker, prelude)

    fixup = FILE_FIXUPS.get(filename or "", {})
    for old, new in fixup.get("replace", ()):
        content = content.replace(old, new)
    if "prefix" in fixup:
        content = fixup["prefix"] + content

    return content.strip()


# ---------------------------------------------------------------------------
# Code generation
# ---------------------------------------------------------------------------

def aggregate(results) -> dict[str, str]:
    """Ordered key -> text for the entries that were processed."""
    return {r.key: r.text for r in results if isinstance(r, ProcessedExample)}


def render_examples_js(examples: dict[str, str]) -> str:
    data = json.dumps(examples, indent=2, ensure_ascii=False)
    return f"""// Auto-generated file - DO NOT EDIT
// Generated from examples/*.sg files
// Run 'python3 tools/build_examples.py' to regenerate

const examples = {data};

// Export for use in playground
if (typeof module !== 'undefined' && module.exports) {{
  module.exports = examples;
}}
"""


def write_output(path: Path, document: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_text(document, encoding="utf-8")
        os.replace(tmp, path)
    finally:
        if tmp.exists():
            tmp.unlink()


# ---------------------------------------------------------------------------
# Build
# ---------------------------------------------------------------------------

def build_example(key: str, source: str, examples_dir: Path, prelude: str) -> ProcessedExample | SkippedExample:
    try:
        content = load_example(examples_dir / source)
        text = process_example_content(content, prelude, Path(source).name)
    except ExampleNotFound as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return SkippedExample(key, source, str(exc))
    except (OSError, UnicodeDecodeError) as exc:
        print(f"❌ Error processing {source}: {exc}", file=sys.stderr)
        return SkippedExample(key, source, str(exc))

    print(f"✓ Processed: {source} -> {key}")
    return ProcessedExample(key, source, text)


def build_examples(
    examples_dir: Path,
    output_file: Path,
    mapping: dict[str, str] = EXAMPLE_MAPPING,
) -> BuildReport:
    print("Building examples for Stellogen playground...\n")

    prelude = load_prelude(examples_dir)
    results = tuple(
        build_example(key, source, examples_dir, prelude)
        for key, source in mapping.items()
    )
    report = BuildReport(results, output_file)

    write_output(output_file, render_examples_js(report.examples))

    print(f"\n✓ Generated: {report.output_file}")
    print(f"\nSummary: {report.success_count} successful, {report.error_count} errors")
    return report


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate web/examples.js for the Stellogen playground")
    parser.parse_args(argv)

    repo_root = Path(__file__).resolve().parents[1]
    report = build_examples(repo_root / EXAMPLES_DIR, repo_root / OUTPUT_FILE)
    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
