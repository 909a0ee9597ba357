from __future__ import annotations

import os
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
    return path


def run_cli(cwd: Path, *args: str, stdin: str | None = None) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    # Works without an installed distribution
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "tpl.cli", *args],
        cwd=cwd, env=env, input=stdin, capture_output=True, text=True, encoding="utf-8"
    )


@pytest.fixture
def page_project(tmp_path: Path):
    """Template, context and settings files for CLI tests."""
    write(tmp_path / "page.html", """
        <h1>{{title}}</h1>
        {% for item in items %}<li>{{item.name}}{% if item.price == 0 %} (free){% endif %}</li>{% endfor %}
        <p>{{total / 3}}</p>
        """)
    write(tmp_path / "context.yaml", """
        title: Shop
        total: 10.0
        items:
          - name: apple
            price: 3
          - name: pear
            price: 0
        """)
    write(tmp_path / "tpl.yaml", """
        float_precision: 2
        """)
    return tmp_path
