from __future__ import annotations

import ast
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]


def _line_count(path: Path) -> int:
    return len(path.read_text(encoding="utf-8", errors="ignore").splitlines())


def _python_files(root: Path):
    for path in root.rglob("*.py"):
        # Keep architecture checks focused on source/test code, not packaged artifacts.
        if "dist" in path.parts or "build" in path.parts:
            continue
        yield path


def _imported_modules(path: Path):
    tree = ast.parse(path.read_text(encoding="utf-8", errors="ignore"))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name
        elif isinstance(node, ast.ImportFrom):
            yield node.module or ""


def _imports_package(name: str, package: str) -> bool:
    return name == package or name.startswith(package + ".")


def test_no_python_module_exceeds_hard_line_limit():
    offenders = []
    for path in _python_files(ROOT):
        lines = _line_count(path)
        if lines > 1200:
            offenders.append((str(path.relative_to(ROOT)), lines))
    assert not offenders, f"Modules exceed hard 1200-line limit: {offenders}"


def test_core_layer_does_not_import_infra_layer():
    violations: list[tuple[str, str]] = []
    for path in _python_files(ROOT / "core"):
        for name in _imported_modules(path):
            if _imports_package(name, "infra") or _imports_package(name, "main_report"):
                violations.append((str(path.relative_to(ROOT)), name))

    assert not violations, f"Core layer imports infra layer: {violations}"


def test_reporting_engine_is_storage_agnostic():
    violations: list[tuple[str, str]] = []
    roots = [ROOT / "core" / "services" / "reporting", ROOT / "core" / "domain"]
    for root in roots:
        for path in _python_files(root):
            for name in _imported_modules(path):
                if _imports_package(name, "sqlalchemy"):
                    violations.append((str(path.relative_to(ROOT)), name))

    assert not violations, f"Reporting engine imports storage libraries: {violations}"


def test_report_store_keeps_mapper_repository_split():
    package = ROOT / "infra" / "db" / "report"
    init_text = (package / "__init__.py").read_text(encoding="utf-8")
    repo_text = (package / "repository.py").read_text(encoding="utf-8")
    mapper_text = (package / "mapper.py").read_text(encoding="utf-8")

    assert "from infra.db.report.mapper import" in init_text
    assert "from infra.db.report.repository import" in init_text
    assert "from infra.db.report.mapper import" in repo_text
    assert "def activity_from_orm" not in repo_text
    assert "class SqlAlchemy" not in mapper_text


def test_reporting_service_stays_a_mixin_facade():
    text = (ROOT / "core" / "services" / "reporting" / "service.py").read_text(encoding="utf-8")

    assert "from .activity_report import ReportingActivityMixin" in text
    assert "from .listing import ReportingListingMixin" in text
    assert "def get_activity_report" not in text
    assert "def list_report_groups" not in text


def test_known_large_modules_have_growth_budgets():
    # Guardrail budgets: these files must not keep growing.
    budgets = {
        "core/services/reporting/service.py": 80,
        "core/services/reporting/activity_report.py": 160,
        "core/services/reporting/insights.py": 300,
        "core/services/reporting/filtering.py": 260,
        "core/services/reporting/variance.py": 260,
        "infra/db/report/repository.py": 200,
        "infra/db/report/mapper.py": 180,
        "core/reporting/api.py": 220,
    }

    breaches = []
    for rel_path, max_lines in budgets.items():
        path = ROOT / rel_path
        lines = _line_count(path)
        if lines > max_lines:
            breaches.append((rel_path, lines, max_lines))

    assert not breaches, f"Large-module budgets exceeded: {breaches}"
