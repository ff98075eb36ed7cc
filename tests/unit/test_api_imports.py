"""Test public API imports for the ordinfo package."""


def test_main_package_import():
    """Test that the main ordinfo package can be imported."""
    import ordinfo

    assert hasattr(ordinfo, "__version__")
    assert isinstance(ordinfo.__version__, str)
    assert len(ordinfo.__version__) > 0


def test_main_exports():
    """Test that main exports are available."""
    import ordinfo

    # Calculators
    assert hasattr(ordinfo, "SymbolicMutualInfoCalculator")
    assert hasattr(ordinfo, "MutualInfoCalculatorDiscrete")
    assert hasattr(ordinfo, "PredictiveInfoCalculatorDiscrete")
    assert hasattr(ordinfo, "ActiveInfoCalculatorDiscrete")

    # Symbolisation and significance
    assert hasattr(ordinfo, "PermutationTable")
    assert hasattr(ordinfo, "symbolize")
    assert hasattr(ordinfo, "compute_significance")
    assert hasattr(ordinfo, "EmpiricalMeasurementDistribution")


def test_submodule_imports():
    """Test that submodules are importable."""
    import ordinfo.information
    import ordinfo.utils

    # Check they have __all__ defined
    assert hasattr(ordinfo.information, "__all__")
    assert hasattr(ordinfo.utils, "__all__")


def test_all_exports_resolve():
    """Every name listed in __all__ exists."""
    import ordinfo
    import ordinfo.information
    import ordinfo.utils

    for module in (ordinfo, ordinfo.information, ordinfo.utils):
        for name in module.__all__:
            assert hasattr(module, name), f"{module.__name__} is missing {name}"
