"""Unit tests for the exception hierarchy."""

import pytest

from htmledit import DependencyError, EditError, HtmlEditError, ParsingError, SelectorError, ValidationError


@pytest.mark.unit
class TestHierarchy:
    """Test base classes and common attributes."""

    @pytest.mark.parametrize(
        "error",
        [
            ValidationError("bad"),
            SelectorError("bad selector", "div >", 4),
            ParsingError("bad markup"),
            EditError(),
            DependencyError("lxml tree builder", [("lxml", "")]),
        ],
    )
    def test_all_derive_from_base(self, error):
        """Test every error is an HtmlEditError."""
        assert isinstance(error, HtmlEditError)

    def test_selector_error_is_validation_error(self):
        """Test selector errors carry validation details."""
        error = SelectorError("bad", "div >", 4)

        assert isinstance(error, ValidationError)
        assert error.parameter_name == "selector"
        assert error.parameter_value == "div >"
        assert error.position == 4

    def test_original_error_kept(self):
        """Test the wrapped error is available."""
        cause = OSError("disk")
        error = ParsingError("failed", original_error=cause)

        assert error.original_error is cause
        assert error.message == "failed"


@pytest.mark.unit
class TestEditError:
    """Test the opaque edit failure."""

    def test_fixed_message(self):
        """Test the message never varies."""
        assert str(EditError()) == "Unexpected error in HTML Editor"
        assert str(EditError(ValueError("detail"))) == "Unexpected error in HTML Editor"

    def test_location_of_construction(self):
        """Test the call-site is the frame that created the error."""
        error = EditError()

        assert error.function == "test_location_of_construction"
        assert error.file == __file__
        assert error.line > 0

    def test_stacklevel(self):
        """Test stacklevel moves the recorded call-site up the stack."""

        def helper():
            return EditError(stacklevel=2)

        assert helper().function == "test_stacklevel"

    def test_location_of_wrapped_error(self):
        """Test a wrapped exception's innermost frame is recorded."""

        def failing():
            raise KeyError("k")

        try:
            failing()
        except KeyError as e:
            error = EditError(e)

        assert error.function == "failing"
        assert error.original_error is not None

    def test_repr(self):
        """Test the repr shows the location."""
        assert "function='test_repr'" in repr(EditError())


@pytest.mark.unit
class TestDependencyError:
    """Test install hints."""

    def test_install_hint(self):
        """Test the generated message names the packages to install."""
        error = DependencyError("Tree builder 'html5lib'", [("html5lib", ">=1.1")])

        assert "html5lib>=1.1" in str(error)
        assert 'pip install --upgrade "html5lib>=1.1"' in str(error)
        assert error.feature_name == "Tree builder 'html5lib'"

    def test_custom_message(self):
        """Test an explicit message is used as is."""
        assert str(DependencyError("x", [], message="custom")) == "custom"

    def test_no_packages(self):
        """Test the fallback message when nothing can be installed."""
        assert str(DependencyError("Feature", [])) == "Feature is not available"
