import sys, os

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

import pytest

from helpers import Recorder, make_session
from stair_blocks.game import PlacementPolicy


@pytest.fixture
def connected():
    session = make_session(3, PlacementPolicy.CONNECTED)
    return session, Recorder(session.bus)


@pytest.fixture
def single():
    session = make_session(3, PlacementPolicy.SINGLE)
    return session, Recorder(session.bus)
