import sys
from pathlib import Path

import pytest

# Add the parent directory to path to import wsid
sys.path.insert(0, str(Path(__file__).parent.parent))

from wsid.ietf import IetfLanguageTag
from wsid.services import load_default_registry


@pytest.fixture(scope="session")
def registry():
    """The registry shipped with the package, loaded once."""
    return load_default_registry()


@pytest.fixture(scope="session")
def engine(registry):
    return IetfLanguageTag(registry=registry)
