"""Shared fixtures: a small context tree with both collections."""

from pathlib import Path

import pytest

SAMPLE_FILES = {
    "knowledge/tool/git.md": """---
id: something-else
name: Git
description: Git version control
---

# Git

Git tracks changes.

## Branching

Create a branch per release.

## Tagging

Tag every release.
""",
    "knowledge/code/repo.md": """---
description: Repository layout conventions
owner: platform-team
---

Source lives under src/.
""",
    "task-templates/deploy/release.md": """---
name: Release
description: Cut a release and deploy it
dependencies:
  - knowledge/tool/git.md
  - knowledge/missing/thing.md
  - not-a-reference
parameters:
  - name: version
    required: true
example: Release version 1.2.0
---

# Release

1. Tag the commit.
2. Deploy.
""",
    "task-templates/docs/write-readme.md": """---
description: Write a README for a project
dependencies: [knowledge/code/repo.md, knowledge/tool/git.md]
---

# Write README

Describe the project.
""",
    "task-templates/broken.md": """---
description: [unclosed
---

Body of a broken template.
""",
    "task-templates/notes.txt": "Not markdown.\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Write a mapping of relative path to text under root."""
    for relative, text in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def context_tree(tmp_path: Path) -> Path:
    """A context directory holding the sample knowledge and task-templates collections."""
    return write_tree(tmp_path / "context", SAMPLE_FILES)
