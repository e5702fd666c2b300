import os

from quickprice import __version__


def test_changelog_lists_current_version():
    root = os.path.dirname(os.path.dirname(__file__))
    with open(os.path.join(root, "CHANGELOG.md"), encoding="utf-8") as f:
        lines = f.readlines()
    assert any(line.strip() == f"## {__version__}" for line in lines)
    assert [line for line in lines if line.strip().startswith("- ")]
