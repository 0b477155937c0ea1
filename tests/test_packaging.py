"""
Checks that every third-party package imported by dynexport is declared.
"""

import tomllib
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def declared_dependencies() -> set[str]:
    data = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))
    names = set()
    for requirement in data["project"]["dependencies"]:
        for separator in ("<", ">", "=", "!", "~", "[", ";", " "):
            requirement = requirement.split(separator, 1)[0]
        names.add(requirement.lower())
    return names


def test_runtime_imports_declared():
    assert {"pyarrow", "pandas", "boto3", "botocore"} <= declared_dependencies()
