"""Test module for fromxml package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import fromxml

    # Assert
    assert fromxml is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import fromxml

    # Assert
    assert isinstance(fromxml.__version__, str)
    assert fromxml.__version__ == "0.1.0"


def test_package_all_exports_resolve() -> None:
    """Test that every name in __all__ is importable from the package."""
    # Arrange & Act
    import fromxml

    # Assert
    for name in fromxml.__all__:
        assert hasattr(fromxml, name), name


def test_from_xml_is_parse_xml() -> None:
    """Test that the classic name points at the same function."""
    import fromxml

    assert fromxml.from_xml is fromxml.parse_xml
