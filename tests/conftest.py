import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

@pytest.fixture(scope="session", autouse=True)
def _hermetic_launch_db(tmp_path_factory):
    p = tmp_path_factory.mktemp("launchdb_store")
    os.environ["LAUNCHDB_DATABASE"] = str(p / "launch.db")
    return p


@pytest.fixture
def xattr_dir(tmp_path):
    """tmp_path, skipping the test when it cannot hold user.* attributes."""
    from launchdb.xattrs import AttributeStore

    if not AttributeStore().probe_support(str(tmp_path)):
        pytest.skip("filesystem does not support user extended attributes")
    return tmp_path
