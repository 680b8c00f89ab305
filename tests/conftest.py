"""Shared pytest setup for handparse.

The property tests over cursors, trivia and the primitive parsers draw
their example budget from one of three Hypothesis profiles registered
here. "dev" runs 500 examples per property, "ci" runs 50 derandomized
examples and prints reproduction blobs, and "verbose" runs 100 with
Hypothesis progress output for debugging a failing grammar property.

HYPOTHESIS_PROFILE selects a profile by name; otherwise CI=true picks
"ci" and everything else runs "dev".

Long-running grammar fuzzing is marked @pytest.mark.fuzz and skipped
unless selected with ``pytest -m fuzz``.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Pick the profile name: explicit variable, then CI, then "dev"."""
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit

    if os.environ.get("CI") == "true":
        return "ci"

    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZ MARKER
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Declare the fuzz marker."""
    config.addinivalue_line(
        "markers",
        "fuzz: long-running grammar fuzzing, skipped unless selected with -m fuzz",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz tests when the -m expression does not mention them."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return

    skip = pytest.mark.skip(reason="fuzz test; select with pytest -m fuzz")
    for item in items:
        if item.get_closest_marker("fuzz") is not None:
            item.add_marker(skip)
