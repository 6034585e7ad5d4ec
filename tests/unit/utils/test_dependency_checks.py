"""Unit tests for dependency gating in utils/decorators.py."""

from __future__ import annotations

import importlib
import logging
import sys
from unittest.mock import patch

import pytest

import gfmhost.utils.decorators
from gfmhost.exceptions import DependencyError
from gfmhost.options import Options
from gfmhost.renderers.html import to_html_with_options
from gfmhost.utils.decorators import check_requirements, debug_timer, installed_version, requires_dependencies


@pytest.mark.unit
class TestRequiresDependencies:
    """Test the requires_dependencies decorator."""

    def test_missing_package_raises_error(self) -> None:
        """Test that a missing package raises DependencyError."""

        @requires_dependencies("test", [("nonexistent-package", "nonexistent_gfmhost_pkg", "")])
        def sample_function() -> str:
            return "success"

        with pytest.raises(DependencyError) as exc_info:
            sample_function()

        assert exc_info.value.feature_name == "test"
        assert ("nonexistent-package", "") in exc_info.value.missing_packages
        assert isinstance(exc_info.value.original_error, ImportError)
        assert "pip install --upgrade nonexistent-package" in exc_info.value.message

    def test_version_mismatch_raises_error(self) -> None:
        """Test that an installed package with the wrong version raises DependencyError."""

        @requires_dependencies("test", [("test-package", "json", ">=2.0.0")])
        def sample_function() -> str:
            return "success"

        with patch.object(gfmhost.utils.decorators, "installed_version", return_value="1.0.0"):
            with pytest.raises(DependencyError) as exc_info:
                sample_function()

        assert exc_info.value.missing_packages == []
        assert ("test-package", ">=2.0.0", "1.0.0") in exc_info.value.version_mismatches

    def test_correct_version_succeeds(self) -> None:
        """Test that a satisfying version allows execution."""

        @requires_dependencies("test", [("test-package", "json", ">=2.0.0")])
        def sample_function() -> str:
            return "success"

        with patch.object(gfmhost.utils.decorators, "installed_version", return_value="2.5.0"):
            assert sample_function() == "success"

    def test_no_version_spec_allows_any_version(self) -> None:
        """Test that an empty version spec skips the version lookup."""

        @requires_dependencies("test", [("test-package", "json", "")])
        def sample_function() -> str:
            return "success"

        with patch.object(gfmhost.utils.decorators, "installed_version") as lookup:
            assert sample_function() == "success"
        lookup.assert_not_called()

    def test_preserves_function_metadata(self) -> None:
        """Test that the decorator keeps the function name and docstring."""

        @requires_dependencies("test", [])
        def sample_function() -> str:
            """Sample docstring."""
            return "success"

        assert sample_function.__name__ == "sample_function"
        assert sample_function.__doc__ == "Sample docstring."


@pytest.mark.unit
class TestCheckRequirements:
    """Test the requirement check behind the decorator."""

    def test_installed_package_version(self) -> None:
        """Test that an installed distribution reports its version."""
        assert installed_version("mistune") is not None
        assert installed_version("nonexistent-gfmhost-distribution") is None

    def test_satisfied(self) -> None:
        """Test that mistune satisfies the declared requirement."""
        assert check_requirements([("mistune", "mistune", ">=3.0.0")]) == ([], [], None)

    def test_unsatisfiable_version(self) -> None:
        """Test an unsatisfiable version spec."""
        missing, mismatches, import_error = check_requirements([("mistune", "mistune", ">=999")])
        assert missing == []
        assert mismatches[0][:2] == ("mistune", ">=999")
        assert import_error is None

    def test_importable_without_distribution_metadata(self) -> None:
        """Test that an unknown installed version never satisfies a spec."""
        missing, mismatches, _ = check_requirements([("not-a-dist", "json", ">=1")])
        assert missing == []
        assert mismatches == [("not-a-dist", ">=1", "unknown")]


@pytest.mark.unit
class TestMissingMistune:
    """Test behavior when mistune cannot be imported."""

    def test_compiler_raises_dependency_error(self, monkeypatch) -> None:
        """Test that compiling without mistune names the package to install."""
        monkeypatch.setitem(sys.modules, "mistune", None)
        with pytest.raises(DependencyError) as exc_info:
            to_html_with_options("# A", Options.gfm())
        assert ("mistune", ">=3.0.0") in exc_info.value.missing_packages

    def test_package_imports_without_mistune(self, monkeypatch) -> None:
        """Test that importing gfmhost does not require mistune."""
        monkeypatch.setitem(sys.modules, "mistune", None)
        for name in [name for name in sys.modules if name == "gfmhost" or name.startswith("gfmhost.")]:
            monkeypatch.delitem(sys.modules, name)

        fresh = importlib.import_module("gfmhost")

        with pytest.raises(fresh.DependencyError):
            fresh.to_html("# A")


@pytest.mark.unit
class TestDebugTimer:
    """Test the DEBUG timing helper."""

    def test_logs_at_debug(self, caplog) -> None:
        """Test that elapsed time is logged when DEBUG is enabled."""
        logger = logging.getLogger("gfmhost.tests.timer")
        with caplog.at_level(logging.DEBUG, logger="gfmhost.tests.timer"):
            with debug_timer(logger, "Sample operation"):
                pass
        assert "Sample operation completed in" in caplog.text

    def test_silent_above_debug(self, caplog) -> None:
        """Test that nothing is logged when DEBUG is disabled."""
        logger = logging.getLogger("gfmhost.tests.timer")
        with caplog.at_level(logging.INFO, logger="gfmhost.tests.timer"):
            with debug_timer(logger, "Sample operation"):
                pass
        assert caplog.text == ""
