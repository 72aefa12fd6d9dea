"""
Smoke tests to verify all runtime dependencies are installed correctly.
"""

import sys


class TestPythonVersion:
    """Verify Python version requirements."""

    def test_python_310_or_higher(self) -> None:
        """Python 3.10+ is required for union type syntax at runtime."""
        assert sys.version_info >= (3, 10)


class TestDependencies:
    """Verify third-party dependencies are importable."""

    def test_structlog_import(self) -> None:
        """structlog must be importable."""
        import structlog

        assert structlog.get_logger() is not None

    def test_yaml_import(self) -> None:
        """PyYAML must be importable."""
        import yaml

        assert yaml.safe_load("a: 1") == {"a": 1}

    def test_prometheus_client_import(self) -> None:
        """prometheus_client must be importable."""
        from prometheus_client import CollectorRegistry

        assert CollectorRegistry() is not None

    def test_dotenv_import(self) -> None:
        """python-dotenv must be importable."""
        from dotenv import load_dotenv

        assert callable(load_dotenv)


class TestProjectVersion:
    """Verify project metadata."""

    def test_version_is_semver(self, project_version: str) -> None:
        """Version string has three numeric parts."""
        parts = project_version.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)
