"""
Pytest configuration file.

Ensures src/ is on sys.path so that 'import timeutil' works without an
install, and puts the process-wide clock back on real time after every test.
"""
import sys
from pathlib import Path

import pytest

# Add the src directory to sys.path
src_root = Path(__file__).parent.parent / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))


@pytest.fixture(autouse=True)
def restore_real_clock():
    """Undo any set_now()/advance_now() a test leaves behind."""
    from timeutil.now import reset_now

    yield
    reset_now()
