"""Pytest configuration for the slicecomb test suite.

Hypothesis profiles (max_examples is set here and nowhere else):

    dev      500 examples, random seeds        (default)
    ci        50 examples, derandomized        (CI=true)
    verbose  100 examples, verbose output      (HYPOTHESIS_PROFILE=verbose)

HYPOTHESIS_PROFILE wins over CI detection.

Tests marked ``fuzz`` are long-running property sweeps. They are skipped
unless selected with ``pytest -m fuzz`` or by naming a fuzz path on the
command line.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]

_PROFILES: dict[str, dict[str, object]] = {
    "dev": {"max_examples": 500, "derandomize": False},
    "ci": {"max_examples": 50, "derandomize": True, "print_blob": True},
    "verbose": {"max_examples": 100, "derandomize": False, "verbosity": Verbosity.verbose},
}

for _name, _options in _PROFILES.items():
    settings.register_profile(_name, phases=_PHASES, **_options)  # type: ignore[arg-type]


def _selected_profile() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_selected_profile())


# =============================================================================
# FUZZ SELECTION
# =============================================================================


def _fuzz_requested(config: pytest.Config) -> bool:
    if "fuzz" in str(config.getoption("-m", default="")):
        return True
    return any("fuzz" in str(arg) for arg in config.invocation_params.args)


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless they were asked for."""
    if _fuzz_requested(config):
        return
    skip_fuzz = pytest.mark.skip(reason="fuzz test; run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)
