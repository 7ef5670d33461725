"""
Shared fixtures: a complete on-disk project and matching settings
"""

import json
from pathlib import Path

import pytest

from inkpage.config import AppSettings


STYLE = """
$accent: #8a3b12;

.choice {
  color: $accent;
}
"""

TEMPLATE = """<html>
<head><title>{{ defines.title }}</title><style>{{ css }}</style></head>
<body>
<script id="story-data" type="application/json">{{ story }}</script>
<script>{{ blotter }}</script>
<script>{{ script }}</script>
</body>
</html>
"""

SCRIPT = "blotter.start(document.getElementById('story-data').textContent);\n"

STORY = '{"inkVersion":20,"root":[["^Once upon a time.","\\n",["done"]]]}'

DEFINES = {"title": "The Lighthouse", "author": "Test Author"}

RUNTIME = "var blotter = {start: function (json) { return json; }};\n"


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project directory with all five required sources"""
    sources = tmp_path / "sources"
    sources.mkdir()
    (sources / "style.scss").write_text(STYLE, encoding="utf-8")
    (sources / "template.html").write_text(TEMPLATE, encoding="utf-8")
    (sources / "script.js").write_text(SCRIPT, encoding="utf-8")
    (sources / "story.ink.json").write_text("\ufeff" + STORY, encoding="utf-8")
    (sources / "defines.json").write_text(json.dumps(DEFINES), encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    """Settings pointing at a throwaway runtime bundle"""
    runtime = tmp_path / "blotter.js"
    runtime.write_text(RUNTIME, encoding="utf-8")
    return AppSettings(_env_file=None, runtime_bundle=str(runtime))
