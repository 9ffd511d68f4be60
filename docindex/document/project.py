"""Project metadata inference for freshly created host documents."""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

# Checked in order; the first lockfile found wins.
_LOCKFILES: Tuple[Tuple[str, str], ...] = (
    ("bun.lockb", "bun"),
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("package-lock.json", "npm"),
)

_SCRIPT_PATTERNS: Tuple[Tuple[str, str, Tuple[str, ...]], ...] = (
    ("dev", "Start development server", ("dev", "start", "serve", "develop", "watch")),
    ("build", "Build for production", ("build", "compile", "bundle")),
    ("test", "Run tests", ("test", "test:unit", "test:all", "jest", "vitest")),
    ("lint", "Lint code", ("lint", "lint:fix", "check", "format")),
)


@dataclass
class ProjectInfo:
    """Name, description and scripts read from a package manifest."""

    name: str
    description: str = ""
    scripts: Dict[str, str] = field(default_factory=dict)


@dataclass
class SetupStep:
    comment: str
    command: str


@dataclass
class ProjectContext:
    """Values rendered into a new host document."""

    name: str
    description: str
    setup: List[SetupStep]


def detect_package_manager(project_dir: Path) -> str:
    for filename, manager in _LOCKFILES:
        if (project_dir / filename).exists():
            return manager
    return "npm"


def infer_commands(scripts: Mapping[str, str], package_manager: str) -> List[SetupStep]:
    """Map well-known script names onto setup steps."""
    run = "npm run" if package_manager == "npm" else package_manager
    steps = [SetupStep("Install dependencies", f"{package_manager} install")]
    for _category, comment, patterns in _SCRIPT_PATTERNS:
        script = next((name for name in patterns if scripts.get(name)), None)
        if script:
            steps.append(SetupStep(comment, f"{run} {script}"))
    return steps


def read_package_json(project_dir: Path) -> Optional[ProjectInfo]:
    try:
        payload = json.loads((project_dir / "package.json").read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    scripts = payload.get("scripts")
    return ProjectInfo(
        name=str(payload.get("name") or project_dir.name),
        description=str(payload.get("description") or ""),
        scripts={str(k): str(v) for k, v in scripts.items()} if isinstance(scripts, dict) else {},
    )


def read_pyproject(project_dir: Path) -> Optional[ProjectInfo]:
    try:
        with (project_dir / "pyproject.toml").open("rb") as handle:
            payload = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError):
        return None
    project = payload.get("project")
    if not isinstance(project, dict):
        return None
    return ProjectInfo(
        name=str(project.get("name") or project_dir.name),
        description=str(project.get("description") or ""),
    )


def get_project_context(project_dir: Path) -> ProjectContext:
    """Infer overview and setup commands from package.json or pyproject.toml."""
    node_info = read_package_json(project_dir)
    if node_info is not None:
        setup: List[SetupStep] = []
        if node_info.scripts:
            setup = infer_commands(node_info.scripts, detect_package_manager(project_dir))
        return ProjectContext(node_info.name, node_info.description, setup)

    python_info = read_pyproject(project_dir)
    if python_info is not None:
        setup = [SetupStep("Install dependencies", "pip install -e .")]
        if (project_dir / "tests").is_dir():
            setup.append(SetupStep("Run tests", "pytest"))
        return ProjectContext(python_info.name, python_info.description, setup)

    return ProjectContext(project_dir.name, "", [])


__all__ = [
    "ProjectContext",
    "ProjectInfo",
    "SetupStep",
    "detect_package_manager",
    "get_project_context",
    "infer_commands",
    "read_package_json",
    "read_pyproject",
]
